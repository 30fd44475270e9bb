from django.conf import settings
from django.core.cache import cache
from rest_framework.response import Response


def _version_key(cache_prefix: str) -> str:
    return f"{cache_prefix}_version"


def get_cache_version(cache_prefix: str) -> int:
    version = cache.get(_version_key(cache_prefix))
    if version is None:
        cache.add(_version_key(cache_prefix), 1, None)
        version = cache.get(_version_key(cache_prefix), 1)
    return version


def invalidate_cache_prefix(*cache_prefixes: str):
    """
    Invalidate every cached response stored under the given prefixes.

    Each prefix carries a version number that is part of every cache key built for it,
    bumping the version orphans the old entries, which then simply expire.
    """
    for cache_prefix in cache_prefixes:
        try:
            cache.incr(_version_key(cache_prefix))
        except ValueError:
            # the version key was never set or has been evicted
            cache.set(_version_key(cache_prefix), 2, None)


def get_or_cache_response(request, cache_prefix: str, produce_response, cache_timeout: int = None):
    """
    Serve `request` from the cache, otherwise call `produce_response()` and cache its result.

    Only successful GET responses are stored. The cache key is built from the prefix, its current
    version, the HTTP method and the full request path.
    """
    timeout = cache_timeout if cache_timeout is not None else getattr(settings, "CACHE_TIMEOUT", 60 * 10)
    version = get_cache_version(cache_prefix)
    cache_key = f"{cache_prefix}_v{version}_{request.method}_{request.get_full_path()}"

    cached_response = cache.get(cache_key)
    if cached_response:
        return Response(
            cached_response.get("data", {}),
            status=cached_response.get("status", 200),
        )
    response = produce_response()

    if request.method == "GET" and response.status_code == 200:
        cache_data = {
            "data": response.data,
            "status": response.status_code,
        }
        cache.set(cache_key, cache_data, timeout)
    return response


def cache_response_decorator(cache_prefix: str, cache_timeout: int = None):
    """
    Decorator to cache the response of a view function.

    This decorator caches API responses to avoid repeated database queries for public pages.
    Entries are dropped by invalidating the prefix (see invalidate_cache_prefix).

    Args:
        cache_prefix (str): The prefix to use for the cache key
        cache_timeout (int): The timeout for the cache in seconds (defaults to settings.CACHE_TIMEOUT)

    Returns:
        The cached response if available, otherwise executes the view function and caches the response

    Example:
        @cache_response_decorator('events')
        def get(self, request):
            # View logic here
            return Response(data)
    """
    def decorator(view_func):
        def wrapper(self, request, *args, **kwargs):
            return get_or_cache_response(
                request, cache_prefix, lambda: view_func(self, request, *args, **kwargs), cache_timeout
            )

        return wrapper
    return decorator
