from rest_framework import serializers

from common.serializers import min_length_field
from content.models import Event, FacultyMember, HistoryEvent, NewsArticle, Program, TeamMember, UniversityCourse, Video


class EventSerializer(serializers.ModelSerializer):
    title = min_length_field(3, "Title", max_length=255)
    description = min_length_field(10, "Description")
    location = min_length_field(3, "Location", max_length=255)

    class Meta:
        model = Event
        fields = "__all__"
        read_only_fields = ["id", "created_at", "updated_at"]


class ProgramSerializer(serializers.ModelSerializer):
    title = min_length_field(3, "Title", max_length=255)
    description = min_length_field(10, "Description")
    long_description = min_length_field(50, "Long description")

    class Meta:
        model = Program
        fields = "__all__"
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_slug(self, value):
        if len(value) < 3:
            raise serializers.ValidationError("Slug must be at least 3 characters")
        if value.isdigit():
            raise serializers.ValidationError("Slug can not be only digits")
        return value


class NewsArticleSerializer(serializers.ModelSerializer):
    title = min_length_field(3, "Title", max_length=255)
    excerpt = min_length_field(10, "Excerpt")
    content = min_length_field(50, "Content")

    class Meta:
        model = NewsArticle
        fields = "__all__"
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_slug(self, value):
        if len(value) < 3:
            raise serializers.ValidationError("Slug must be at least 3 characters")
        if value.isdigit():
            raise serializers.ValidationError("Slug can not be only digits")
        return value


class VideoSerializer(serializers.ModelSerializer):
    title = min_length_field(3, "Title", max_length=255)
    description = min_length_field(10, "Description")

    class Meta:
        model = Video
        fields = "__all__"
        read_only_fields = ["id", "views", "created_at", "updated_at"]


class TeamMemberSerializer(serializers.ModelSerializer):
    name = min_length_field(2, "Name", max_length=150)
    title = min_length_field(2, "Title", max_length=150)
    bio = min_length_field(10, "Bio")

    class Meta:
        model = TeamMember
        fields = "__all__"
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_social_links(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Social links must be an object of network name to url")
        return value


class HistoryEventSerializer(serializers.ModelSerializer):
    title = min_length_field(3, "Title", max_length=255)
    description = min_length_field(10, "Description")

    class Meta:
        model = HistoryEvent
        fields = "__all__"
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_year(self, value):
        if value <= 0:
            raise serializers.ValidationError("Year must be positive")
        return value


class UniversityCourseSerializer(serializers.ModelSerializer):
    title = min_length_field(3, "Title", max_length=255)
    description = min_length_field(10, "Description")
    instructors = serializers.ListField(child=serializers.CharField(), required=False)

    class Meta:
        model = UniversityCourse
        fields = "__all__"
        read_only_fields = ["id", "created_at", "updated_at"]


class FacultyMemberSerializer(serializers.ModelSerializer):
    name = min_length_field(2, "Name", max_length=150)
    title = min_length_field(2, "Title", max_length=150)
    specialization = min_length_field(3, "Specialization", max_length=255)
    bio = min_length_field(10, "Bio")

    class Meta:
        model = FacultyMember
        fields = "__all__"
        read_only_fields = ["id", "created_at", "updated_at"]
