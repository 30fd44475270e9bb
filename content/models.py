from django.db import models
from django.utils import timezone


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Event(TimeStampedModel):
    title = models.CharField(max_length=255)
    description = models.TextField()
    date = models.DateField()
    time = models.CharField(max_length=50) # free form, example: 6:00 PM - 8:00 PM
    location = models.CharField(max_length=255)
    image_url = models.CharField(max_length=500)
    registration_link = models.CharField(max_length=500, null=True, blank=True)
    is_past = models.BooleanField(default=False)

    class Meta:
        ordering = ["-date"]

    def __str__(self):
        return self.title


class Program(TimeStampedModel):
    title = models.CharField(max_length=255)
    description = models.TextField()
    long_description = models.TextField()
    category = models.CharField(max_length=100)
    image_url = models.CharField(max_length=500)
    slug = models.SlugField(max_length=255, unique=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.title


class NewsArticle(TimeStampedModel):
    title = models.CharField(max_length=255)
    excerpt = models.TextField()
    content = models.TextField()
    date = models.DateField(default=timezone.localdate)
    image_url = models.CharField(max_length=500)
    category = models.CharField(max_length=100)
    author = models.CharField(max_length=150)
    slug = models.SlugField(max_length=255, unique=True)

    class Meta:
        ordering = ["-date", "-id"]

    def __str__(self):
        return self.title


class Video(TimeStampedModel):
    title = models.CharField(max_length=255)
    description = models.TextField()
    thumbnail_url = models.CharField(max_length=500)
    video_url = models.CharField(max_length=500)
    duration = models.CharField(max_length=20) # example: 12:45
    views = models.PositiveIntegerField(default=0)
    date = models.DateField(default=timezone.localdate)
    category = models.CharField(max_length=100)
    is_featured = models.BooleanField(default=False)
    is_main_feature = models.BooleanField(default=False)

    class Meta:
        ordering = ["-date", "-id"]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if self._state.adding:
            # the first video uploaded becomes the main feature, later ones never do on creation
            self.is_main_feature = not Video.objects.exists()
        super().save(*args, **kwargs)


class TeamMember(TimeStampedModel):
    name = models.CharField(max_length=150)
    title = models.CharField(max_length=150)
    bio = models.TextField()
    image_url = models.CharField(max_length=500)
    social_links = models.JSONField(default=dict, blank=True) # example: {"twitter": "...", "linkedin": "..."}
    is_leadership = models.BooleanField(default=False)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.name} ({self.title})"


class HistoryEvent(TimeStampedModel):
    """A milestone shown on the about page timeline"""
    year = models.PositiveIntegerField()
    title = models.CharField(max_length=255)
    description = models.TextField()
    image_url = models.CharField(max_length=500, null=True, blank=True)
    sort_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["year", "sort_order"]

    def __str__(self):
        return f"{self.year} - {self.title}"


class UniversityCourse(TimeStampedModel):
    title = models.CharField(max_length=255)
    description = models.TextField()
    level = models.CharField(max_length=50) # example: Beginner
    duration = models.CharField(max_length=50) # example: 12 weeks
    instructors = models.JSONField(default=list, blank=True)
    image_url = models.CharField(max_length=500)
    application_link = models.CharField(max_length=500, null=True, blank=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.title


class FacultyMember(TimeStampedModel):
    name = models.CharField(max_length=150)
    title = models.CharField(max_length=150)
    specialization = models.CharField(max_length=255)
    bio = models.TextField()
    image_url = models.CharField(max_length=500)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.name
