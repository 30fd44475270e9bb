"""
Admin tables of the back-office.

A table loads the whole collection of one resource through the QueryCache, then
filters, sorts and pages it locally with the helpers in common.tables. Edits go
through a Mutation which invalidates the table's cached lists on success.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from backoffice.cache import QueryCache
from backoffice.client import ApiClient
from backoffice.exports import format_short_date, subscribers_csv, subscribers_csv_filename
from backoffice.mutations import Mutation, MutationResult
from backoffice.notifications import Notifier
from common.tables import (
    DEFAULT_PAGE_SIZE,
    PAGE_SIZE_OPTIONS,
    Page,
    build_page,
    filter_records,
    get_field,
    sort_records,
    validate_page_size,
)

ALL = "all"
STATS_KEY = "/api/admin/stats"


@dataclass
class Column:
    name: str
    label: str
    render: Optional[Callable[[Any], Any]] = None  # receives the field value

    def value(self, record):
        value = get_field(record, self.name)
        return self.render(value) if self.render else value


@dataclass
class FilterOption:
    """A select box filtering one field. Without `choices` the distinct values of the field are offered."""
    field: str
    label: str
    choices: Sequence[Tuple[Any, str]] = ()


def yes_no(value) -> str:
    return "Yes" if value else "No"


def truncate(length: int):
    def render(value):
        value = "" if value is None else str(value)
        return value if len(value) <= length else f"{value[:length]}..."
    return render


BOOLEAN_CHOICES = (("true", "Yes"), ("false", "No"))


class AdminTable:
    resource: str = None  # list endpoint, also the cache key of the list
    endpoint: str = None  # base of create/update/delete calls, defaults to `resource`
    record_label: str = "Record"
    searchable_fields: Sequence[str] = ()
    filter_options: Sequence[FilterOption] = ()
    columns: Sequence[Column] = ()
    default_sort: Optional[str] = None
    default_direction: str = "asc"
    invalidates: Sequence[str] = ()  # other cached lists showing the same records
    page_size_options = PAGE_SIZE_OPTIONS

    def __init__(self, client: ApiClient, cache: QueryCache, notifier: Notifier, page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.cache = cache
        self.notifier = notifier
        self.page_size = validate_page_size(page_size)
        self.current_page = 1
        self.search = ""
        self.filters: Dict[str, Any] = {}
        self.sort_key = self.default_sort
        self.sort_direction = self.default_direction

    # data

    @property
    def base_endpoint(self) -> str:
        return self.endpoint or self.resource

    def detail_endpoint(self, record_id) -> str:
        return f"{self.base_endpoint}/{record_id}"

    def load(self):
        return self.client.get(self.resource)

    def records(self) -> list:
        return self.cache.query(self.resource, self.load) or []

    def visible_records(self) -> list:
        filtered = filter_records(self.records(), self.search, self.filters, self.searchable_fields)
        return sort_records(filtered, self.sort_key, self.sort_direction)

    def page(self) -> Page:
        """The current page, re-clamped when the collection shrank under it."""
        page = build_page(self.visible_records(), self.current_page, self.page_size)
        self.current_page = page.current_page
        return page

    def rows(self) -> List[dict]:
        return [self.render_row(record) for record in self.page().rows]

    def render_row(self, record) -> dict:
        row = {column.label: column.value(record) for column in self.columns}
        row["id"] = get_field(record, "id")
        return row

    def summary(self) -> str:
        page = self.page()
        if page.total_items == 0:
            return f"No {self.record_label.lower()} records found"
        return page.summary()

    def filter_choices(self, option: FilterOption) -> List[Tuple[Any, str]]:
        if option.choices:
            return list(option.choices)
        values = {get_field(record, option.field) for record in self.records()}
        return [(value, str(value)) for value in sorted(v for v in values if v not in (None, ""))]

    # view state

    def set_search(self, text: str):
        self.search = text or ""
        self.current_page = 1

    def set_filter(self, field_name: str, value):
        if value in (None, "", ALL):
            self.filters.pop(field_name, None)
        else:
            self.filters[field_name] = value
        self.current_page = 1

    def clear_filters(self):
        self.search = ""
        self.filters = {}
        self.current_page = 1

    def set_sort(self, key: str, direction: Optional[str] = None):
        """Sort by `key`, choosing the same key again flips the direction."""
        if direction is None:
            direction = "desc" if key == self.sort_key and self.sort_direction == "asc" else "asc"
        self.sort_key = key
        self.sort_direction = direction

    def go_to_page(self, page_number: int):
        self.current_page = page_number
        return self.page()

    def next_page(self):
        return self.go_to_page(self.current_page + 1)

    def previous_page(self):
        return self.go_to_page(self.current_page - 1)

    def set_page_size(self, page_size: int):
        self.page_size = validate_page_size(page_size)
        self.current_page = 1

    # mutations

    def invalidation_keys(self) -> Tuple[str, ...]:
        return (self.resource, *self.invalidates)

    def mutation(self, action: str, **kwargs) -> Mutation:
        kwargs.setdefault("success_title", f"{self.record_label} {action}")
        kwargs.setdefault("success_message", f"The {self.record_label.lower()} has been {action} successfully.")
        kwargs.setdefault("failure_message", f"Failed to {action.rstrip('d')} {self.record_label.lower()}. Please try again.")
        return Mutation(cache=self.cache, notifier=self.notifier, invalidates=self.invalidation_keys(), **kwargs)

    def create(self, data: dict) -> MutationResult:
        return self.mutation("created").run(lambda: self.client.post(self.base_endpoint, data))

    def update(self, record_id, data: dict, partial: bool = False) -> MutationResult:
        method = self.client.patch if partial else self.client.put
        return self.mutation("updated").run(lambda: method(self.detail_endpoint(record_id), data))

    def delete(self, record_id) -> MutationResult:
        return self.mutation("deleted", not_found_is_success=True).run(
            lambda: self.client.delete(self.detail_endpoint(record_id))
        )


# Content

class EventsTable(AdminTable):
    resource = "/api/events"
    record_label = "Event"
    searchable_fields = ("title", "location", "description")
    filter_options = (FilterOption("is_past", "Status", (("true", "Past"), ("false", "Upcoming"))),)
    columns = (
        Column("title", "Title"),
        Column("date", "Date", format_short_date),
        Column("location", "Location"),
        Column("is_past", "Past", yes_no),
    )
    invalidates = ("/api/events/upcoming", "/api/events/past", STATS_KEY)


class ProgramsTable(AdminTable):
    resource = "/api/programs"
    record_label = "Program"
    searchable_fields = ("title", "description", "category", "slug")
    filter_options = (FilterOption("category", "Category"),)
    columns = (
        Column("title", "Title"),
        Column("category", "Category"),
        Column("slug", "Slug"),
    )
    invalidates = ("/api/programs/featured", "/api/programs/categories", STATS_KEY)


class NewsArticlesTable(AdminTable):
    resource = "/api/news"
    record_label = "Article"
    searchable_fields = ("title", "excerpt", "author", "category")
    filter_options = (FilterOption("category", "Category"),)
    columns = (
        Column("title", "Title"),
        Column("author", "Author"),
        Column("category", "Category"),
        Column("date", "Date", format_short_date),
    )
    default_sort = "date"
    default_direction = "desc"
    invalidates = ("/api/news/featured", "/api/news/categories", STATS_KEY)


class VideosTable(AdminTable):
    resource = "/api/videos"
    record_label = "Video"
    searchable_fields = ("title", "description", "category")
    filter_options = (
        FilterOption("category", "Category"),
        FilterOption("is_featured", "Featured", BOOLEAN_CHOICES),
    )
    columns = (
        Column("title", "Title"),
        Column("category", "Category"),
        Column("duration", "Duration"),
        Column("views", "Views"),
        Column("is_featured", "Featured", yes_no),
        Column("is_main_feature", "Main feature", yes_no),
    )
    invalidates = ("/api/videos/featured", "/api/videos/main-feature", "/api/videos/categories", STATS_KEY)


class TeamMembersTable(AdminTable):
    resource = "/api/team/all"
    endpoint = "/api/team"
    record_label = "Team member"
    searchable_fields = ("name", "title", "bio")
    filter_options = (FilterOption("is_leadership", "Leadership", BOOLEAN_CHOICES),)
    columns = (
        Column("name", "Name"),
        Column("title", "Title"),
        Column("is_leadership", "Leadership", yes_no),
    )
    invalidates = ("/api/team/leadership", STATS_KEY)


class HistoryEventsTable(AdminTable):
    resource = "/api/about/history"
    record_label = "History event"
    searchable_fields = ("title", "description", "year")
    columns = (
        Column("year", "Year"),
        Column("title", "Title"),
        Column("sort_order", "Order"),
    )


class UniversityCoursesTable(AdminTable):
    resource = "/api/university/courses"
    record_label = "Course"
    searchable_fields = ("title", "description", "instructors")
    filter_options = (FilterOption("level", "Level"),)
    columns = (
        Column("title", "Title"),
        Column("level", "Level"),
        Column("duration", "Duration"),
        Column("instructors", "Instructors", lambda value: ", ".join(value or [])),
    )


class FacultyMembersTable(AdminTable):
    resource = "/api/university/faculty"
    record_label = "Faculty member"
    searchable_fields = ("name", "title", "specialization")
    columns = (
        Column("name", "Name"),
        Column("title", "Title"),
        Column("specialization", "Specialization"),
    )


# Engagement

VOLUNTEER_STATUSES = ("pending", "approved", "contacted", "rejected")


class VolunteersTable(AdminTable):
    resource = "/api/volunteers"
    record_label = "Volunteer"
    searchable_fields = ("first_name", "last_name", "email", "phone")
    filter_options = (
        FilterOption("status", "Status", tuple((status, status.capitalize()) for status in VOLUNTEER_STATUSES)),
        FilterOption("areas", "Area"),
    )
    columns = (
        Column("first_name", "First name"),
        Column("last_name", "Last name"),
        Column("email", "Email"),
        Column("areas", "Areas", lambda value: ", ".join(value or [])),
        Column("status", "Status"),
        Column("created_at", "Applied", format_short_date),
    )
    invalidates = (STATS_KEY,)

    def filter_choices(self, option: FilterOption):
        if option.field != "areas":
            return super().filter_choices(option)
        areas = {area for record in self.records() for area in (get_field(record, "areas") or [])}
        return [(area, area) for area in sorted(areas)]

    def update_status(self, record_id, status: str) -> MutationResult:
        # any status may replace any other, the server rejects unknown values
        return self.mutation("updated", success_title="Status updated").run(
            lambda: self.client.put(f"{self.base_endpoint}/{record_id}/status", {"status": status})
        )


class DonationsTable(AdminTable):
    resource = "/api/donations"
    record_label = "Donation"
    searchable_fields = ("first_name", "last_name", "email", "transaction_id")
    filter_options = (
        FilterOption("status", "Status"),
        FilterOption("payment_method", "Payment method"),
        FilterOption("recurring", "Recurring", BOOLEAN_CHOICES),
    )
    columns = (
        Column("first_name", "First name"),
        Column("last_name", "Last name"),
        Column("amount", "Amount"),
        Column("payment_method", "Payment method"),
        Column("recurring", "Recurring", yes_no),
        Column("status", "Status"),
        Column("created_at", "Date", format_short_date),
    )
    invalidates = (STATS_KEY,)

    def update_status(self, record_id, status: str) -> MutationResult:
        return self.mutation("updated", success_title="Status updated").run(
            lambda: self.client.put(f"{self.base_endpoint}/{record_id}/status", {"status": status})
        )

    def total_amount(self) -> int:
        return sum(get_field(record, "amount", 0) or 0 for record in self.visible_records())


class ContactMessagesTable(AdminTable):
    resource = "/api/contact"
    record_label = "Message"
    searchable_fields = ("name", "email", "subject", "message")
    filter_options = (
        FilterOption("is_read", "Read", BOOLEAN_CHOICES),
        FilterOption("newsletter", "Newsletter", BOOLEAN_CHOICES),
    )
    columns = (
        Column("name", "Name"),
        Column("email", "Email"),
        Column("subject", "Subject"),
        Column("message", "Message", truncate(50)),
        Column("is_read", "Read", yes_no),
        Column("created_at", "Received", format_short_date),
    )
    invalidates = (STATS_KEY,)

    def mark_read(self, record_id, is_read: bool = True) -> MutationResult:
        return self.mutation(
            "updated",
            success_title="Message marked as read" if is_read else "Message marked as unread",
        ).run(lambda: self.client.put(f"{self.base_endpoint}/{record_id}/read", {"is_read": is_read}))

    def unread_count(self) -> int:
        return sum(1 for record in self.records() if not get_field(record, "is_read"))


class NewsletterSubscribersTable(AdminTable):
    resource = "/api/newsletter/subscribers"
    record_label = "Subscriber"
    searchable_fields = ("email",)
    columns = (
        Column("email", "Email"),
        Column("created_at", "Subscribed Date", format_short_date),
    )
    invalidates = (STATS_KEY,)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.selected: set = set()

    def toggle_select(self, record_id):
        if record_id in self.selected:
            self.selected.discard(record_id)
        else:
            self.selected.add(record_id)

    @property
    def all_selected(self) -> bool:
        ids = {get_field(record, "id") for record in self.records()}
        return bool(ids) and ids <= self.selected

    def toggle_select_all(self):
        if self.all_selected:
            self.selected.clear()
        else:
            self.selected = {get_field(record, "id") for record in self.records()}

    def delete(self, record_id) -> MutationResult:
        result = super().delete(record_id)
        if result.ok:
            self.selected.discard(record_id)
        return result

    def bulk_delete(self, record_ids: Optional[Iterable[int]] = None) -> MutationResult:
        ids = sorted(record_ids if record_ids is not None else self.selected)
        if not ids:
            self.notifier.failure("No subscribers selected", "Select at least one subscriber to remove.")
            return MutationResult(ok=False)

        result = self.mutation(
            "deleted",
            success_title="Subscribers removed",
            success_message="The selected subscribers have been removed.",
            failure_message="Failed to remove subscribers. Please try again.",
        ).run(lambda: self.client.delete(f"{self.base_endpoint}/bulk", {"ids": ids}))
        if result.ok:
            self.selected.difference_update(ids)
        return result

    def export_csv(self) -> Tuple[str, str]:
        """(file name, CSV text) of every subscriber currently loaded"""
        return subscribers_csv_filename(), subscribers_csv(self.records())
