from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver

from common.caching import invalidate_cache_prefix
from common.models import SiteSetting
from common.utils import clear_settings_cache


@receiver([post_save, post_delete], sender=SiteSetting)
def invalidate_site_settings_cache(sender, instance, **kwargs):
    """Invalidate the cached settings map and the cached settings responses"""
    clear_settings_cache()
    invalidate_cache_prefix("site_settings")
