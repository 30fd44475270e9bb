from django.core.cache import cache

SETTINGS_CACHE_KEY = "site_settings_map"


def get_settings_map():
    """
    Retrieve all site settings as a dictionary keyed by their `key` values.

    The map is kept in the django cache to avoid hitting the database every time a page needs
    a setting, it is dropped whenever a setting is saved or deleted (see common.signals).
    """
    settings_map = cache.get(SETTINGS_CACHE_KEY)
    if settings_map is None:
        from django.apps import apps
        SiteSetting = apps.get_model("common", "SiteSetting")
        settings_map = {s.key: s.value for s in SiteSetting.objects.all()}
        cache.set(SETTINGS_CACHE_KEY, settings_map, None)
    return settings_map


def get_setting_value(key: str, fallback: str = None):
    """Value of the setting named `key`, or `fallback` when the setting is missing or empty"""
    value = get_settings_map().get(key)
    return value if value not in (None, "") else fallback


def clear_settings_cache():
    cache.delete(SETTINGS_CACHE_KEY)
