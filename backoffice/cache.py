import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from backoffice.client import ApiError

logger = logging.getLogger("backoffice.cache")


@dataclass
class CacheEntry:
    data: Any = None
    loader: Optional[Callable[[], Any]] = None
    stale: bool = True
    error: Optional[ApiError] = None


class QueryCache:
    """
    Results of list queries keyed by the resource path.

    `query` serves the stored data while it is fresh. `invalidate` marks entries stale and
    refetches the ones that have a loader right away, so readers never see an empty list
    between a mutation and the next read. A failed refetch keeps the previous data.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, CacheEntry] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def query(self, key: str, loader: Callable[[], Any]):
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = CacheEntry(loader=loader)
        else:
            entry.loader = loader

        if entry.stale:
            self._load(key, entry)
        return entry.data

    def peek(self, key: str, default=None):
        entry = self._entries.get(key)
        return entry.data if entry is not None else default

    def set(self, key: str, data) -> None:
        entry = self._entries.setdefault(key, CacheEntry())
        entry.data = data
        entry.stale = False
        entry.error = None

    def is_stale(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is None or entry.stale

    def error(self, key: str) -> Optional[ApiError]:
        entry = self._entries.get(key)
        return entry.error if entry is not None else None

    def invalidate(self, *keys: str) -> None:
        for key in keys:
            entry = self._entries.get(key)
            if entry is None:
                continue
            entry.stale = True
            if entry.loader is not None:
                self._load(key, entry)

    def clear(self) -> None:
        self._entries.clear()

    def _load(self, key: str, entry: CacheEntry) -> None:
        try:
            entry.data = entry.loader()
        except ApiError as e:
            entry.error = e
            logger.error(f"Failed to load '{key}': {str(e)}")
            return
        entry.stale = False
        entry.error = None
