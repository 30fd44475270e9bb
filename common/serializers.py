from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from common.choices import SettingTypeChoices
from common.models import SiteSetting


class SiteSettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = SiteSetting
        fields = ["id", "key", "value", "label", "description", "group", "type", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


class CreateSiteSettingSerializer(serializers.ModelSerializer):
    key = serializers.CharField(
        min_length=2,
        max_length=100,
        error_messages={"min_length": "Key must be at least 2 characters"},
        validators=[UniqueValidator(queryset=SiteSetting.objects.all(), message="A setting with this key already exists")],
    )
    value = serializers.CharField(error_messages={"blank": "Value is required"})
    label = serializers.CharField(min_length=2, max_length=150, error_messages={"min_length": "Label must be at least 2 characters"})
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    group = serializers.CharField(max_length=50, error_messages={"blank": "Group is required"})
    type = serializers.ChoiceField(choices=SettingTypeChoices.choices, default=SettingTypeChoices.TEXT)

    class Meta:
        model = SiteSetting
        fields = ["key", "value", "label", "description", "group", "type"]


class UpdateSiteSettingSerializer(serializers.ModelSerializer):
    """Settings are updated by key, the key itself can not be changed"""
    value = serializers.CharField(required=False, error_messages={"blank": "Value is required"})
    label = serializers.CharField(required=False, min_length=2, max_length=150)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    group = serializers.CharField(required=False, max_length=50)
    type = serializers.ChoiceField(required=False, choices=SettingTypeChoices.choices)

    class Meta:
        model = SiteSetting
        fields = ["value", "label", "description", "group", "type"]


def min_length_field(length, label, **kwargs):
    """CharField rejecting values shorter than `length` with a readable message"""
    return serializers.CharField(
        min_length=length,
        error_messages={"min_length": f"{label} must be at least {length} characters"},
        **kwargs,
    )
