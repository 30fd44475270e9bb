import logging
from datetime import datetime

from django.apps import apps
from drf_spectacular.utils import extend_schema, OpenApiResponse
from rest_framework import generics, status

from common.caching import get_or_cache_response
from common.models import SiteSetting
from common.permissions import IsAdminOrReadOnly, IsAdminUser
from common.responses import ErrorResponse, SuccessResponse, format_first_error
from common.serializers import CreateSiteSettingSerializer, SiteSettingSerializer, UpdateSiteSettingSerializer

logger = logging.getLogger("common.apis")


def describe_user(request):
    return request.user.username if request.user.is_authenticated else "Anonymous"


class RecordListCreateView(generics.ListCreateAPIView):
    """
    Lists a whole collection and creates new records.

    Collections are always returned in full, filtering and paging happen in the back-office tables.
    Set `cache_prefix` to serve the list from the cache, the prefix must be invalidated by the
    model's signals.
    """
    permission_classes = [IsAdminOrReadOnly]
    pagination_class = None
    record_label = "Record"
    cache_prefix = None

    def list(self, request, *args, **kwargs):
        if self.cache_prefix:
            return get_or_cache_response(request, self.cache_prefix, lambda: self.list_response(request))
        return self.list_response(request)

    def list_response(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return SuccessResponse(data=serializer.data, message=f"{self.record_label} list")

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            logger.warning(f"Invalid {self.record_label.lower()} submitted by '{describe_user(request)}': {serializer.errors} at {datetime.now()}")
            return ErrorResponse(message=format_first_error(serializer.errors), data=serializer.errors)

        record = self.perform_create(serializer)
        logger.info(f"User '{describe_user(request)}' created {self.record_label.lower()} {record.pk} at {datetime.now()}")
        return SuccessResponse(
            data=self.get_serializer(record).data,
            message=f"{self.record_label} created successfully",
            status=status.HTTP_201_CREATED,
        )

    def perform_create(self, serializer):
        return serializer.save()


class RecordDetailView(generics.GenericAPIView):
    """Retrieve, update (PUT validates the full record, PATCH only what is sent) and delete one record by id"""
    permission_classes = [IsAdminOrReadOnly]
    record_label = "Record"
    lookup_url_kwarg = "id"

    def get_record(self):
        return self.get_queryset().filter(pk=self.kwargs.get(self.lookup_url_kwarg)).first()

    def not_found(self):
        return ErrorResponse(message=f"{self.record_label} not found", status=status.HTTP_404_NOT_FOUND)

    def get(self, request, *args, **kwargs):
        record = self.get_record()
        if not record:
            return self.not_found()
        return SuccessResponse(data=self.get_serializer(record).data)

    def put(self, request, *args, **kwargs):
        return self.update(request, partial=False)

    def patch(self, request, *args, **kwargs):
        return self.update(request, partial=True)

    def update(self, request, partial):
        record = self.get_record()
        if not record:
            return self.not_found()

        serializer = self.get_serializer(record, data=request.data, partial=partial)
        if not serializer.is_valid():
            logger.warning(f"Invalid update of {self.record_label.lower()} {record.pk} by '{describe_user(request)}': {serializer.errors}")
            return ErrorResponse(message=format_first_error(serializer.errors), data=serializer.errors)

        record = serializer.save()
        logger.info(f"User '{describe_user(request)}' updated {self.record_label.lower()} {record.pk} at {datetime.now()}")
        return SuccessResponse(data=self.get_serializer(record).data, message=f"{self.record_label} updated successfully")

    def delete(self, request, *args, **kwargs):
        record = self.get_record()
        if not record:
            # deleting twice is harmless, the second call only reports the record is gone
            return self.not_found()

        data = self.get_serializer(record).data
        record.delete()
        logger.info(f"User '{describe_user(request)}' deleted {self.record_label.lower()} {data.get('id')} at {datetime.now()}")
        return SuccessResponse(data=data, message=f"{self.record_label} deleted successfully")


class SiteSettingListCreateView(RecordListCreateView):
    queryset = SiteSetting.objects.all()
    record_label = "Setting"
    cache_prefix = "site_settings"

    def get_serializer_class(self):
        if self.request.method == "POST":
            return CreateSiteSettingSerializer
        return SiteSettingSerializer

    @extend_schema(
        summary="List every site setting, ordered by group then key",
        responses={200: SiteSettingSerializer(many=True)},
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        summary="Create a site setting",
        request=CreateSiteSettingSerializer,
        responses={
            201: SiteSettingSerializer,
            400: OpenApiResponse(description="Invalid setting or duplicate key"),
        },
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        serializer = CreateSiteSettingSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning(f"Invalid setting submitted by '{describe_user(request)}': {serializer.errors} at {datetime.now()}")
            return ErrorResponse(message=format_first_error(serializer.errors), data=serializer.errors)

        setting = serializer.save()
        logger.info(f"User '{describe_user(request)}' created setting '{setting.key}' at {datetime.now()}")
        return SuccessResponse(
            data=SiteSettingSerializer(setting).data,
            message="Setting created successfully",
            status=status.HTTP_201_CREATED,
        )


class SiteSettingDetailView(generics.GenericAPIView):
    """
    Settings are read and updated by their key, they are deleted by their numeric id.
    """
    permission_classes = [IsAdminOrReadOnly]
    serializer_class = SiteSettingSerializer
    queryset = SiteSetting.objects.all()

    @extend_schema(summary="Get a site setting by key", responses={200: SiteSettingSerializer})
    def get(self, request, *args, **kwargs):
        setting = SiteSetting.objects.filter(key=kwargs.get("identifier")).first()
        if not setting:
            return ErrorResponse(message="Setting not found", status=status.HTTP_404_NOT_FOUND)
        return SuccessResponse(data=SiteSettingSerializer(setting).data)

    @extend_schema(
        summary="Update a site setting by key",
        request=UpdateSiteSettingSerializer,
        responses={200: SiteSettingSerializer, 404: OpenApiResponse(description="Setting not found")},
    )
    def patch(self, request, *args, **kwargs):
        key = kwargs.get("identifier")
        setting = SiteSetting.objects.filter(key=key).first()
        if not setting:
            return ErrorResponse(message="Setting not found", status=status.HTTP_404_NOT_FOUND)

        serializer = UpdateSiteSettingSerializer(setting, data=request.data, partial=True)
        if not serializer.is_valid():
            return ErrorResponse(message=format_first_error(serializer.errors), data=serializer.errors)

        setting = serializer.save()
        logger.info(f"User '{describe_user(request)}' updated setting '{key}' at {datetime.now()}")
        return SuccessResponse(data=SiteSettingSerializer(setting).data, message="Setting updated successfully")

    @extend_schema(
        summary="Delete a site setting by id",
        responses={200: SiteSettingSerializer, 404: OpenApiResponse(description="Setting not found")},
    )
    def delete(self, request, *args, **kwargs):
        identifier = kwargs.get("identifier")
        if not str(identifier).isdigit():
            return ErrorResponse(message="Settings are deleted by their numeric id")

        setting = SiteSetting.objects.filter(id=int(identifier)).first()
        if not setting:
            return ErrorResponse(message="Setting not found", status=status.HTTP_404_NOT_FOUND)

        data = SiteSettingSerializer(setting).data
        setting.delete()
        logger.info(f"User '{describe_user(request)}' deleted setting '{data['key']}' at {datetime.now()}")
        return SuccessResponse(data=data, message="Setting deleted successfully")


STATS_MODELS = {
    "articles": "content.NewsArticle",
    "programs": "content.Program",
    "events": "content.Event",
    "team": "content.TeamMember",
    "videos": "content.Video",
    "donations": "engagement.Donation",
    "volunteers": "engagement.Volunteer",
    "contacts": "engagement.ContactMessage",
    "subscribers": "engagement.NewsletterSubscriber",
}


class AdminStatsView(generics.GenericAPIView):
    permission_classes = [IsAdminUser]

    @extend_schema(summary="Record counts shown on the admin dashboard")
    def get(self, request, *args, **kwargs):
        stats = {name: apps.get_model(label).objects.count() for name, label in STATS_MODELS.items()}
        return SuccessResponse(data=stats, message="Admin stats")
