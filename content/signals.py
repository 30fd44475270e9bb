from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver

from common.caching import invalidate_cache_prefix
from content.models import Event, FacultyMember, HistoryEvent, NewsArticle, Program, TeamMember, UniversityCourse, Video

CACHE_PREFIXES = {
    Event: "events",
    Program: "programs",
    NewsArticle: "news",
    Video: "videos",
    TeamMember: "team",
    HistoryEvent: "history",
    UniversityCourse: "university",
    FacultyMember: "university",
}


@receiver([post_save, post_delete])
def invalidate_content_cache(sender, instance, **kwargs):
    """Invalidate the cached public responses of the content type that changed"""
    cache_prefix = CACHE_PREFIXES.get(sender)
    if cache_prefix:
        invalidate_cache_prefix(cache_prefix)
