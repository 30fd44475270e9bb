"""
Filtering, sorting and pagination helpers shared by every admin table.

All functions work on in-memory lists of records (dicts or plain objects) and
never mutate the list they are given.
"""
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Optional, Sequence

from dateutil import parser as date_parser

ELLIPSIS = "..."
PAGE_SIZE_OPTIONS = (5, 10, 20, 50)
DEFAULT_PAGE_SIZE = 10


def get_field(record, field_name: str, default=None):
    """Read a field from a dict-like record or an object attribute."""
    if isinstance(record, Mapping):
        return record.get(field_name, default)
    return getattr(record, field_name, default)


def _matches_filter(item_value, value) -> bool:
    if item_value is None:
        return False
    if isinstance(item_value, (list, tuple, set)):
        return value in item_value
    if isinstance(item_value, bool):
        if isinstance(value, bool):
            return item_value is value
        return item_value == (str(value).strip().lower() == "true")
    return item_value == value


def filter_records(records: Optional[Sequence], search_text: str = "", filters: Optional[Mapping] = None,
                   searchable_fields: Iterable[str] = ()) -> list:
    """
    Narrow a list of records down by free text and exact-match field filters.

    Args:
        records: the full collection
        search_text: matched case-insensitively as a substring of any searchable field
        filters: mapping of field name -> required value, empty values are ignored
        searchable_fields: the fields the free text is matched against

    Returns:
        A new list holding the matching records in their original order.
    """
    if not records:
        return []

    filtered = list(records)

    if search_text:
        needle = search_text.lower()
        fields = list(searchable_fields)
        filtered = [
            record for record in filtered
            if any(
                get_field(record, name) is not None and needle in str(get_field(record, name)).lower()
                for name in fields
            )
        ]

    for key, value in (filters or {}).items():
        # "search" is the free text box, not a record field
        if key == "search" or value is None or value == "":
            continue
        filtered = [record for record in filtered if _matches_filter(get_field(record, key), value)]

    return filtered


def _sort_value(value):
    if isinstance(value, bool):
        return (1, int(value))
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, datetime):
        return (2, value.timestamp())
    if isinstance(value, date):
        return (2, datetime(value.year, value.month, value.day).timestamp())
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            number = None
        # "inf" and "nan" parse as floats but sort as words
        if number is not None and math.isfinite(number):
            return (1, number)
        try:
            parsed = date_parser.isoparse(value)
            if parsed.tzinfo is not None:
                parsed = parsed.replace(tzinfo=None)
            return (2, parsed.timestamp())
        except ValueError:
            return (3, value.lower())
    return (4, str(value))


def sort_records(records: Optional[Sequence], key: Optional[str] = None, direction: str = "asc") -> list:
    """
    Stable sort of records by one field.

    Missing values come first when ascending and last when descending.
    """
    if not records:
        return []
    if not key:
        return list(records)

    descending = direction == "desc"
    present = [record for record in records if get_field(record, key) is not None]
    missing = [record for record in records if get_field(record, key) is None]

    present = sorted(present, key=lambda record: _sort_value(get_field(record, key)), reverse=descending)
    return present + missing if descending else missing + present


def validate_page_size(page_size) -> int:
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise ValueError(f"page_size must be a positive integer, got {page_size!r}")
    return page_size


def calculate_total_pages(total_items: int, page_size: int) -> int:
    validate_page_size(page_size)
    return max(1, math.ceil(total_items / page_size))


def clamp_page(current_page: int, total_pages: int) -> int:
    return min(max(current_page, 1), max(total_pages, 1))


def paginate(records: Optional[Sequence], current_page: int, page_size: int) -> list:
    """
    Return the records on ``current_page``.

    A page past the end gives an empty list; callers re-derive a valid page
    with ``clamp_page``.
    """
    validate_page_size(page_size)
    if not records:
        return []
    start = (max(current_page, 1) - 1) * page_size
    return list(records[start:start + page_size])


def pagination_range(current_page: int, total_pages: int, delta: int = 2) -> list:
    """
    Page numbers to render as buttons, with ELLIPSIS wherever pages are skipped.

    The first and last page are always present; a single page renders nothing.
    """
    if total_pages <= 1:
        return []

    current_page = clamp_page(current_page, total_pages)
    left = max(2, current_page - delta)
    right = min(total_pages - 1, current_page + delta)

    pages: list = [1]
    if left > 2:
        pages.append(ELLIPSIS)
    pages.extend(range(left, right + 1))
    if right < total_pages - 1:
        pages.append(ELLIPSIS)
    pages.append(total_pages)
    return pages


@dataclass
class Page:
    rows: list
    current_page: int
    page_size: int
    total_items: int
    total_pages: int
    page_numbers: list = field(default_factory=list)

    @property
    def first_item(self) -> int:
        if self.total_items == 0:
            return 0
        return (self.current_page - 1) * self.page_size + 1

    @property
    def last_item(self) -> int:
        return min(self.current_page * self.page_size, self.total_items)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def summary(self) -> str:
        return f"Showing {self.first_item} to {self.last_item} of {self.total_items} items"


def build_page(records: Optional[Sequence], current_page: int, page_size: int) -> Page:
    """Clamp the requested page against the collection and slice it."""
    records = list(records or [])
    total_pages = calculate_total_pages(len(records), page_size)
    current_page = clamp_page(current_page, total_pages)
    return Page(
        rows=paginate(records, current_page, page_size),
        current_page=current_page,
        page_size=page_size,
        total_items=len(records),
        total_pages=total_pages,
        page_numbers=pagination_range(current_page, total_pages),
    )


def group_records(records: Optional[Sequence], field_name: str) -> dict:
    """Bucket records by the value of one field, keeping first-seen order."""
    groups: dict[Any, list] = {}
    for record in records or []:
        groups.setdefault(get_field(record, field_name), []).append(record)
    return groups
