from drf_spectacular.utils import extend_schema, OpenApiResponse
from rest_framework import generics, status

from common.apis import RecordDetailView, RecordListCreateView
from common.caching import cache_response_decorator, get_or_cache_response
from common.responses import ErrorResponse, SuccessResponse
from .models import Event, FacultyMember, HistoryEvent, NewsArticle, Program, TeamMember, UniversityCourse, Video
from .serializers import (
    EventSerializer,
    FacultyMemberSerializer,
    HistoryEventSerializer,
    NewsArticleSerializer,
    ProgramSerializer,
    TeamMemberSerializer,
    UniversityCourseSerializer,
    VideoSerializer,
)


READ_ONLY_METHODS = ["get", "head", "options"]


class ReadOnlyListView(RecordListCreateView):
    http_method_names = READ_ONLY_METHODS


class CategoryListView(generics.GenericAPIView):
    """Distinct values of the `category` column of `model`"""
    model = None
    cache_prefix = None

    def get(self, request, *args, **kwargs):
        return get_or_cache_response(request, self.cache_prefix, self.categories_response)

    def categories_response(self):
        values = self.model.objects.order_by("category").values_list("category", flat=True).distinct()
        return SuccessResponse(data=list(values), message=f"{self.model._meta.verbose_name.capitalize()} categories")


class SlugDetailView(generics.GenericAPIView):
    record_label = "Record"

    def get(self, request, *args, **kwargs):
        record = self.get_queryset().filter(slug=kwargs.get("slug")).first()
        if not record:
            return ErrorResponse(message=f"{self.record_label} not found", status=status.HTTP_404_NOT_FOUND)
        return SuccessResponse(data=self.get_serializer(record).data)


# Events

class EventListCreateView(RecordListCreateView):
    queryset = Event.objects.all()
    serializer_class = EventSerializer
    record_label = "Event"
    cache_prefix = "events"

    @extend_schema(summary="List every event, newest first", responses={200: EventSerializer(many=True)})
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)

    @extend_schema(
        summary="Create an event",
        request=EventSerializer,
        responses={201: EventSerializer, 400: OpenApiResponse(description="Invalid event")},
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class UpcomingEventListView(ReadOnlyListView):
    queryset = Event.objects.filter(is_past=False).order_by("date", "id")
    serializer_class = EventSerializer
    record_label = "Upcoming event"
    cache_prefix = "events"


class PastEventListView(ReadOnlyListView):
    queryset = Event.objects.filter(is_past=True).order_by("-date", "-id")
    serializer_class = EventSerializer
    record_label = "Past event"
    cache_prefix = "events"


class EventDetailView(RecordDetailView):
    queryset = Event.objects.all()
    serializer_class = EventSerializer
    record_label = "Event"


# Programs

class ProgramListCreateView(RecordListCreateView):
    queryset = Program.objects.all()
    serializer_class = ProgramSerializer
    record_label = "Program"
    cache_prefix = "programs"


class FeaturedProgramListView(ReadOnlyListView):
    serializer_class = ProgramSerializer
    record_label = "Featured program"
    cache_prefix = "programs"
    limit = 6

    def get_queryset(self):
        return Program.objects.all()[:self.limit]


class ProgramCategoryListView(CategoryListView):
    model = Program
    cache_prefix = "programs"


class ProgramBySlugView(SlugDetailView):
    queryset = Program.objects.all()
    serializer_class = ProgramSerializer
    record_label = "Program"


class ProgramDetailView(RecordDetailView):
    queryset = Program.objects.all()
    serializer_class = ProgramSerializer
    record_label = "Program"


# News

class NewsArticleListCreateView(RecordListCreateView):
    queryset = NewsArticle.objects.all()
    serializer_class = NewsArticleSerializer
    record_label = "Article"
    cache_prefix = "news"


class FeaturedNewsListView(ReadOnlyListView):
    serializer_class = NewsArticleSerializer
    record_label = "Featured article"
    cache_prefix = "news"
    limit = 4

    def get_queryset(self):
        return NewsArticle.objects.all()[:self.limit]


class NewsCategoryListView(CategoryListView):
    model = NewsArticle
    cache_prefix = "news"


class NewsArticleBySlugView(SlugDetailView):
    queryset = NewsArticle.objects.all()
    serializer_class = NewsArticleSerializer
    record_label = "Article"


class NewsArticleDetailView(RecordDetailView):
    queryset = NewsArticle.objects.all()
    serializer_class = NewsArticleSerializer
    record_label = "Article"


# Videos

class VideoListCreateView(RecordListCreateView):
    queryset = Video.objects.all()
    serializer_class = VideoSerializer
    record_label = "Video"
    cache_prefix = "videos"


class FeaturedVideoListView(ReadOnlyListView):
    serializer_class = VideoSerializer
    record_label = "Featured video"
    cache_prefix = "videos"
    limit = 3

    def get_queryset(self):
        return Video.objects.filter(is_featured=True)[:self.limit]


class MainFeatureVideoView(generics.GenericAPIView):
    serializer_class = VideoSerializer

    @extend_schema(summary="The video highlighted at the top of the videos page, null when none is set")
    @cache_response_decorator("videos")
    def get(self, request, *args, **kwargs):
        video = Video.objects.filter(is_main_feature=True).first()
        return SuccessResponse(data=VideoSerializer(video).data if video else None, message="Main feature video")


class VideoCategoryListView(CategoryListView):
    model = Video
    cache_prefix = "videos"


class VideoDetailView(RecordDetailView):
    queryset = Video.objects.all()
    serializer_class = VideoSerializer
    record_label = "Video"


# Team

class TeamMemberListView(ReadOnlyListView):
    queryset = TeamMember.objects.all()
    serializer_class = TeamMemberSerializer
    record_label = "Team member"
    cache_prefix = "team"


class LeadershipTeamListView(ReadOnlyListView):
    queryset = TeamMember.objects.filter(is_leadership=True)
    serializer_class = TeamMemberSerializer
    record_label = "Leadership team"
    cache_prefix = "team"


class TeamMemberCreateView(RecordListCreateView):
    http_method_names = ["post", "options"]
    queryset = TeamMember.objects.all()
    serializer_class = TeamMemberSerializer
    record_label = "Team member"


class TeamMemberDetailView(RecordDetailView):
    queryset = TeamMember.objects.all()
    serializer_class = TeamMemberSerializer
    record_label = "Team member"


# About page history

class HistoryEventListCreateView(RecordListCreateView):
    queryset = HistoryEvent.objects.all()
    serializer_class = HistoryEventSerializer
    record_label = "History event"
    cache_prefix = "history"


class HistoryEventDetailView(RecordDetailView):
    queryset = HistoryEvent.objects.all()
    serializer_class = HistoryEventSerializer
    record_label = "History event"


# University

class UniversityCourseListCreateView(RecordListCreateView):
    queryset = UniversityCourse.objects.all()
    serializer_class = UniversityCourseSerializer
    record_label = "University course"
    cache_prefix = "university"


class UniversityCourseDetailView(RecordDetailView):
    queryset = UniversityCourse.objects.all()
    serializer_class = UniversityCourseSerializer
    record_label = "University course"


class FacultyMemberListCreateView(RecordListCreateView):
    queryset = FacultyMember.objects.all()
    serializer_class = FacultyMemberSerializer
    record_label = "Faculty member"
    cache_prefix = "university"


class FacultyMemberDetailView(RecordDetailView):
    queryset = FacultyMember.objects.all()
    serializer_class = FacultyMemberSerializer
    record_label = "Faculty member"
