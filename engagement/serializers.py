from rest_framework import serializers

from common.serializers import min_length_field
from engagement.choices import VolunteerStatusChoices
from engagement.models import ContactMessage, Donation, NewsletterSubscriber, Volunteer


class VolunteerSerializer(serializers.ModelSerializer):
    first_name = min_length_field(2, "First name", max_length=100)
    last_name = min_length_field(2, "Last name", max_length=100)
    email = serializers.EmailField(error_messages={"invalid": "Must provide a valid email"})
    phone = min_length_field(10, "Phone number", max_length=30)
    message = min_length_field(10, "Message")
    areas = serializers.ListField(child=serializers.CharField(), allow_empty=False)
    availability = serializers.ListField(child=serializers.CharField(), allow_empty=False)

    class Meta:
        model = Volunteer
        fields = "__all__"
        # applicants can not pick their own status
        read_only_fields = ["id", "status", "created_at"]


class VolunteerStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=VolunteerStatusChoices.choices,
        error_messages={"invalid_choice": "Status must be one of pending, approved, contacted or rejected"},
    )


class DonationSerializer(serializers.ModelSerializer):
    first_name = min_length_field(2, "First name", max_length=100)
    last_name = min_length_field(2, "Last name", max_length=100)
    email = serializers.EmailField(error_messages={"invalid": "Must provide a valid email"})

    class Meta:
        model = Donation
        fields = "__all__"
        read_only_fields = ["id", "status", "created_at"]

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be positive")
        return value


class DonationStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=30)


class ContactMessageSerializer(serializers.ModelSerializer):
    name = min_length_field(2, "Name", max_length=150)
    email = serializers.EmailField(error_messages={"invalid": "Must provide a valid email"})
    subject = min_length_field(3, "Subject", max_length=255)
    message = min_length_field(10, "Message")

    class Meta:
        model = ContactMessage
        fields = "__all__"
        read_only_fields = ["id", "is_read", "created_at"]


class ContactMessageReadSerializer(serializers.Serializer):
    is_read = serializers.BooleanField()


class NewsletterSubscriberSerializer(serializers.ModelSerializer):
    class Meta:
        model = NewsletterSubscriber
        fields = ["id", "email", "created_at"]


class SubscribeSerializer(serializers.Serializer):
    # not a ModelSerializer, subscribing an existing email is allowed
    email = serializers.EmailField(error_messages={"invalid": "Must provide a valid email"})


class BulkDeleteSerializer(serializers.Serializer):
    ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=False,
        error_messages={"empty": "Invalid request: ids must be a non-empty array"},
    )
