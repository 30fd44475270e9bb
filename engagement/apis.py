import logging
from datetime import datetime

from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse
from rest_framework import generics, status
from rest_framework.permissions import AllowAny

from common.apis import RecordDetailView, RecordListCreateView, describe_user
from common.permissions import IsAdminUser
from common.responses import ErrorResponse, SuccessResponse, format_first_error
from .models import ContactMessage, Donation, NewsletterSubscriber, Volunteer
from .serializers import (
    BulkDeleteSerializer,
    ContactMessageReadSerializer,
    ContactMessageSerializer,
    DonationSerializer,
    DonationStatusSerializer,
    NewsletterSubscriberSerializer,
    SubscribeSerializer,
    VolunteerSerializer,
    VolunteerStatusSerializer,
)

logger = logging.getLogger('engagement.apis')


class PublicSubmissionListView(RecordListCreateView):
    """Anyone may submit, only admins may list the submissions"""

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAdminUser()]


class StatusUpdateView(generics.GenericAPIView):
    """
    Set one field of a record from the request body.
    Any value accepted by `serializer_class` may replace any other, there is no transition graph.
    """
    permission_classes = [IsAdminUser]
    model = None
    field_name = "status"
    record_serializer_class = None
    record_label = "Record"

    def put(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return ErrorResponse(message=format_first_error(serializer.errors), data=serializer.errors)

        record = self.model.objects.filter(id=kwargs.get("id")).first()
        if not record:
            return ErrorResponse(message=f"{self.record_label} not found", status=status.HTTP_404_NOT_FOUND)

        value = serializer.validated_data[self.field_name]
        setattr(record, self.field_name, value)
        record.save(update_fields=[self.field_name])
        logger.info(f"User '{describe_user(request)}' set {self.field_name} of {self.record_label.lower()} {record.id} to '{value}' at {datetime.now()}")
        return SuccessResponse(data=self.record_serializer_class(record).data, message=f"{self.record_label} updated successfully")

    def patch(self, request, *args, **kwargs):
        return self.put(request, *args, **kwargs)


# Volunteers

class VolunteerListCreateView(PublicSubmissionListView):
    queryset = Volunteer.objects.all()
    serializer_class = VolunteerSerializer
    record_label = "Volunteer application"

    @extend_schema(summary="List volunteer applications, newest first (admin only)", responses={200: VolunteerSerializer(many=True)})
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(summary="Submit a volunteer application", request=VolunteerSerializer, responses={201: VolunteerSerializer})
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class VolunteerStatusView(StatusUpdateView):
    serializer_class = VolunteerStatusSerializer
    record_serializer_class = VolunteerSerializer
    model = Volunteer
    record_label = "Volunteer application"

    @extend_schema(
        summary="Set the status of a volunteer application",
        request=VolunteerStatusSerializer,
        responses={200: VolunteerSerializer, 404: OpenApiResponse(description="Volunteer application not found")},
        examples=[OpenApiExample("Approve", value={"status": "approved"}, request_only=True)],
    )
    def put(self, request, *args, **kwargs):
        return super().put(request, *args, **kwargs)


# Donations

class DonationListCreateView(PublicSubmissionListView):
    queryset = Donation.objects.all()
    serializer_class = DonationSerializer
    record_label = "Donation"


class DonationStatusView(StatusUpdateView):
    serializer_class = DonationStatusSerializer
    record_serializer_class = DonationSerializer
    model = Donation
    record_label = "Donation"


# Contact messages

class ContactMessageListCreateView(PublicSubmissionListView):
    queryset = ContactMessage.objects.all()
    serializer_class = ContactMessageSerializer
    record_label = "Contact message"

    def perform_create(self, serializer):
        message = serializer.save()
        if message.newsletter:
            # the message is kept even when the subscription fails
            try:
                NewsletterSubscriber.subscribe(message.email)
            except Exception as e:
                logger.error(f"Error subscribing '{message.email}' to the newsletter from contact message {message.id}: {str(e)} at {datetime.now()}")
        return message


class ContactMessageReadView(StatusUpdateView):
    serializer_class = ContactMessageReadSerializer
    record_serializer_class = ContactMessageSerializer
    model = ContactMessage
    field_name = "is_read"
    record_label = "Contact message"


class ContactMessageDetailView(RecordDetailView):
    http_method_names = ["get", "delete", "options"]
    permission_classes = [IsAdminUser]
    queryset = ContactMessage.objects.all()
    serializer_class = ContactMessageSerializer
    record_label = "Contact message"


# Newsletter

class NewsletterSubscriberListView(generics.ListAPIView):
    permission_classes = [IsAdminUser]
    pagination_class = None
    queryset = NewsletterSubscriber.objects.all()
    serializer_class = NewsletterSubscriberSerializer

    @extend_schema(summary="List newsletter subscribers, newest first")
    def get(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return SuccessResponse(data=serializer.data, message="Newsletter subscribers")


class SubscribeToNewsletterView(generics.GenericAPIView):
    permission_classes = [AllowAny]
    serializer_class = SubscribeSerializer

    @extend_schema(
        summary="Subscribe an email to the newsletter, subscribing twice returns the existing subscription",
        request=SubscribeSerializer,
        responses={201: NewsletterSubscriberSerializer, 200: NewsletterSubscriberSerializer},
    )
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return ErrorResponse(message=format_first_error(serializer.errors), data=serializer.errors)

        subscriber, created = NewsletterSubscriber.subscribe(serializer.validated_data["email"])
        if created:
            logger.info(f"New newsletter subscriber {subscriber.id} at {datetime.now()}")
        return SuccessResponse(
            data=NewsletterSubscriberSerializer(subscriber).data,
            message="Subscribed successfully" if created else "Already subscribed",
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class NewsletterSubscriberDetailView(RecordDetailView):
    http_method_names = ["get", "delete", "options"]
    permission_classes = [IsAdminUser]
    queryset = NewsletterSubscriber.objects.all()
    serializer_class = NewsletterSubscriberSerializer
    record_label = "Subscriber"


class BulkDeleteSubscribersView(generics.GenericAPIView):
    permission_classes = [IsAdminUser]
    serializer_class = BulkDeleteSerializer

    @extend_schema(
        summary="Remove several subscribers at once, ids that no longer exist are ignored",
        request=BulkDeleteSerializer,
        examples=[OpenApiExample("Bulk delete", value={"ids": [3, 7, 9]}, request_only=True)],
    )
    def delete(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return ErrorResponse(message=format_first_error(serializer.errors, False), data=serializer.errors)

        ids = serializer.validated_data["ids"]
        deleted_count, _ = NewsletterSubscriber.objects.filter(id__in=ids).delete()
        logger.info(f"User '{describe_user(request)}' removed {deleted_count} of {len(ids)} requested subscribers at {datetime.now()}")
        return SuccessResponse(data={"ids": ids, "deleted": deleted_count}, message="Subscribers removed successfully")
