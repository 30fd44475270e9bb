from datetime import date, datetime, timezone
from unittest import mock

import requests
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import SimpleTestCase
from rest_framework.test import APITransactionTestCase, RequestsClient
from rest_framework_simplejwt.tokens import AccessToken

from backoffice.cache import QueryCache
from backoffice.client import ApiClient, ApiError
from backoffice.exports import format_short_date, subscribers_csv, subscribers_csv_filename
from backoffice.mutations import Mutation
from backoffice.notifications import DESTRUCTIVE, DEFAULT, Notifier
from backoffice.site_settings import SettingsManager, SiteSettings, resolve_setting, validate_setting
from backoffice.tables import EventsTable, NewsletterSubscribersTable, VolunteersTable
from common.models import SiteSetting
from content.models import Event
from engagement.models import NewsletterSubscriber, Volunteer

User = get_user_model()

BASE_URL = "http://testserver"


class QueryCacheTestCase(SimpleTestCase):
    def setUp(self):
        self.cache = QueryCache()
        self.calls = 0

    def loader(self):
        self.calls += 1
        return [self.calls]

    def test_query_loads_once(self):
        self.assertEqual(self.cache.query("/api/events", self.loader), [1])
        self.assertEqual(self.cache.query("/api/events", self.loader), [1])
        self.assertEqual(self.calls, 1)

    def test_invalidate_refetches_immediately(self):
        self.cache.query("/api/events", self.loader)
        self.cache.invalidate("/api/events", "/api/unknown")
        self.assertEqual(self.calls, 2)
        self.assertFalse(self.cache.is_stale("/api/events"))
        self.assertEqual(self.cache.peek("/api/events"), [2])

    def test_failed_refetch_keeps_previous_data(self):
        self.cache.query("/api/events", self.loader)

        def failing():
            raise ApiError("Server error", 500)

        self.cache.query("/api/events", failing)  # fresh, loader not called
        self.cache.invalidate("/api/events")
        self.assertEqual(self.cache.peek("/api/events"), [1])
        self.assertTrue(self.cache.is_stale("/api/events"))
        self.assertEqual(self.cache.error("/api/events").status_code, 500)


class MutationTestCase(SimpleTestCase):
    def setUp(self):
        self.cache = QueryCache()
        self.cache.set("/api/events", ["original"])
        self.notifier = Notifier()

    def test_failure_notifies_and_keeps_cache(self):
        def call():
            raise ApiError("Server error", 500)

        result = Mutation(self.cache, self.notifier, invalidates=("/api/events",)).run(call)
        self.assertFalse(result.ok)
        self.assertEqual(self.notifier.last.variant, DESTRUCTIVE)
        self.assertEqual(self.cache.peek("/api/events"), ["original"])
        self.assertFalse(self.cache.is_stale("/api/events"))

    def test_not_found_can_count_as_done(self):
        def call():
            raise ApiError("Event not found", 404)

        result = Mutation(self.cache, self.notifier, not_found_is_success=True).run(call)
        self.assertTrue(result.ok)
        self.assertEqual(self.notifier.last.variant, DEFAULT)

    def test_listener_receives_notifications(self):
        received = []
        notifier = Notifier(listener=received.append)
        Mutation(self.cache, notifier, success_title="Saved").run(lambda: {"id": 1})
        self.assertEqual([n.title for n in received], ["Saved"])


class ExportTestCase(SimpleTestCase):
    def test_csv(self):
        subscribers = [
            {"id": 1, "email": "a@example.org", "created_at": "2024-03-07T10:15:00Z"},
            {"id": 2, "email": "b@example.org", "created_at": "2023-12-25T00:00:00.123456+00:00"},
        ]
        self.assertEqual(
            subscribers_csv(subscribers),
            "Email,Subscribed Date\na@example.org,3/7/2024\nb@example.org,12/25/2023\n",
        )

    def test_empty_csv_has_header(self):
        self.assertEqual(subscribers_csv([]), "Email,Subscribed Date\n")

    def test_filename(self):
        self.assertEqual(subscribers_csv_filename(date(2024, 3, 7)), "newsletter_subscribers_2024-03-07.csv")

    def test_format_short_date(self):
        self.assertEqual(format_short_date(date(2024, 1, 5)), "1/5/2024")
        self.assertEqual(format_short_date(None), "")


class SettingsHelpersTestCase(SimpleTestCase):
    settings = [
        {"key": "donateUrl", "value": "/donate"},
        {"key": "emptyUrl", "value": ""},
    ]

    def test_resolve_setting(self):
        self.assertEqual(resolve_setting(self.settings, "donateUrl", "/"), "/donate")
        self.assertEqual(resolve_setting(self.settings, "browseCoursesUrl", "/programs"), "/programs")
        self.assertEqual(resolve_setting(self.settings, "emptyUrl", "/fallback"), "/fallback")
        self.assertEqual(resolve_setting(None, "donateUrl", "/"), "/")

    def test_validate_setting(self):
        self.assertEqual(validate_setting({"key": "ab", "value": "x", "label": "La", "group": "urls"}), {})
        errors = validate_setting({"key": "a", "value": " ", "label": "", "group": "", "type": "color"})
        self.assertEqual(set(errors), {"key", "value", "label", "group", "type"})
        self.assertEqual(validate_setting({"value": "/new"}, creating=False), {})
        self.assertIn("value", validate_setting({"value": ""}, creating=False))


class BackofficeTestCase(APITransactionTestCase):
    """Drives the real API in-process through a requests session"""

    def setUp(self):
        cache.clear()
        self.admin = User.objects.create_user(username="admin", password="Testp@ssword123", is_staff=True)
        self.token = str(AccessToken.for_user(user=self.admin))
        self.api = ApiClient(BASE_URL, token=self.token, session=RequestsClient())
        self.cache = QueryCache()
        self.notifier = Notifier()


class ApiClientTestCase(BackofficeTestCase):
    def test_returns_envelope_data(self):
        Event.objects.create(title="Gala", description="An evening of music", date=date(2024, 4, 1),
                             time="6 PM", location="Hall", image_url="/gala.jpg")
        events = self.api.get("/api/events")
        self.assertEqual([e["title"] for e in events], ["Gala"])

    def test_error_carries_status_and_message(self):
        with self.assertRaises(ApiError) as context:
            self.api.delete("/api/events/999")
        self.assertEqual(context.exception.status_code, 404)
        self.assertEqual(context.exception.message, "Event not found")
        self.assertTrue(context.exception.is_not_found)

    def test_obtain_token(self):
        client = ApiClient(BASE_URL, session=RequestsClient())
        token = client.obtain_token("admin", "Testp@ssword123")
        self.assertTrue(token)
        self.assertEqual(client.get("/api/admin/stats")["subscribers"], 0)

        with self.assertRaises(ApiError) as context:
            ApiClient(BASE_URL, session=RequestsClient()).obtain_token("admin", "wrong")
        self.assertEqual(context.exception.status_code, 401)

    def test_transport_error(self):
        session = requests.Session()
        with mock.patch.object(session, "request", side_effect=requests.ConnectionError("refused")):
            with self.assertRaises(ApiError) as context:
                ApiClient(BASE_URL, session=session).get("/api/events")
        self.assertIsNone(context.exception.status_code)


class NewsletterTableTestCase(BackofficeTestCase):
    def setUp(self):
        super().setUp()
        self.subscribers = [NewsletterSubscriber.objects.create(email=f"reader{i:02d}@example.org") for i in range(45)]
        self.table = NewsletterSubscribersTable(self.api, self.cache, self.notifier, page_size=10)

    def test_pages(self):
        page = self.table.page()
        self.assertEqual(page.total_pages, 5)
        self.assertEqual(len(page.rows), 10)
        self.assertEqual(page.summary(), "Showing 1 to 10 of 45 items")

    def test_page_reclamps_after_deletes(self):
        self.table.go_to_page(5)
        self.assertEqual(self.table.current_page, 5)

        doomed = [s.id for s in self.subscribers[:30]]
        result = self.table.bulk_delete(doomed)
        self.assertTrue(result.ok)

        page = self.table.page()
        self.assertEqual(page.total_pages, 2)
        self.assertEqual(self.table.current_page, 2)
        self.assertEqual(len(page.rows), 5)

    def test_bulk_delete_selection(self):
        for subscriber in self.subscribers[:3]:
            self.table.toggle_select(subscriber.id)

        result = self.table.bulk_delete()
        self.assertTrue(result.ok)
        self.assertEqual(self.table.selected, set())
        self.assertEqual(self.notifier.last.variant, DEFAULT)
        self.assertEqual(len(self.table.records()), 42)

        self.assertEqual(result.data["deleted"], 3)

        # repeating the delete with ids that are gone is harmless
        result = self.table.bulk_delete([s.id for s in self.subscribers[:3]])
        self.assertTrue(result.ok)
        self.assertEqual(result.data["deleted"], 0)
        self.assertEqual(len(self.table.records()), 42)
        # the message does not claim a count the server did not delete
        self.assertEqual(self.notifier.last.description, "The selected subscribers have been removed.")
        self.assertNotIn("3", self.notifier.last.description)

    def test_bulk_delete_without_selection(self):
        result = self.table.bulk_delete()
        self.assertFalse(result.ok)
        self.assertEqual(self.notifier.last.variant, DESTRUCTIVE)

    def test_select_all(self):
        self.table.toggle_select_all()
        self.assertTrue(self.table.all_selected)
        self.table.toggle_select_all()
        self.assertEqual(self.table.selected, set())

    def test_search(self):
        self.table.set_search("READER0")
        self.assertEqual(self.table.page().total_items, 10)

    def test_delete_missing_subscriber_counts_as_done(self):
        subscriber_id = self.subscribers[0].id
        NewsletterSubscriber.objects.filter(id=subscriber_id).delete()
        result = self.table.delete(subscriber_id)
        self.assertTrue(result.ok)

    def test_export(self):
        NewsletterSubscriber.objects.exclude(id=self.subscribers[0].id).delete()
        NewsletterSubscriber.objects.filter(id=self.subscribers[0].id).update(
            created_at=datetime(2024, 3, 7, 12, 0, tzinfo=timezone.utc)
        )
        filename, content = self.table.export_csv()
        self.assertTrue(filename.startswith("newsletter_subscribers_"))
        self.assertEqual(content, "Email,Subscribed Date\nreader00@example.org,3/7/2024\n")


class EventsTableTestCase(BackofficeTestCase):
    def setUp(self):
        super().setUp()
        for i, is_past in enumerate([True, False, False]):
            Event.objects.create(title=f"Event {i}", description="Something happening", date=date(2024, 1, i + 1),
                                 time="6 PM", location="Hall", image_url="/e.jpg", is_past=is_past)
        self.table = EventsTable(self.api, self.cache, self.notifier)

    def test_filter_and_sort(self):
        self.table.set_filter("is_past", "false")
        self.table.set_sort("date")
        self.assertEqual([row["Title"] for row in self.table.rows()], ["Event 1", "Event 2"])
        self.table.set_sort("date")
        self.assertEqual([row["Title"] for row in self.table.rows()], ["Event 2", "Event 1"])

        self.table.set_filter("is_past", "all")
        self.assertEqual(self.table.page().total_items, 3)

    def test_create_refreshes_related_lists(self):
        upcoming = self.cache.query("/api/events/upcoming", lambda: self.api.get("/api/events/upcoming"))
        self.assertEqual(len(upcoming), 2)

        result = self.table.create({
            "title": "New event",
            "description": "Something happening",
            "date": "2024-02-01",
            "time": "7 PM",
            "location": "Hall",
            "image_url": "/n.jpg",
        })
        self.assertTrue(result.ok)
        self.assertEqual(len(self.cache.peek("/api/events/upcoming")), 3)
        self.assertEqual(self.table.page().total_items, 4)

    def test_failed_delete_leaves_list_unchanged(self):
        before = self.table.records()
        self.api.session.headers.pop("Authorization")

        result = self.table.delete(before[0]["id"])
        self.assertFalse(result.ok)
        self.assertEqual(result.error.status_code, 401)
        self.assertEqual(self.notifier.last.variant, DESTRUCTIVE)
        self.assertIs(self.table.records(), before)
        self.assertEqual(Event.objects.count(), 3)

    def test_invalid_update_is_reported(self):
        record_id = self.table.records()[0]["id"]
        result = self.table.update(record_id, {"title": "No"}, partial=True)
        self.assertFalse(result.ok)
        self.assertEqual(result.error.status_code, 400)
        self.assertEqual(result.error.message, "(title) Title must be at least 3 characters")


class VolunteersTableTestCase(BackofficeTestCase):
    def test_update_status(self):
        volunteer = Volunteer.objects.create(first_name="Ada", last_name="Lovelace", email="ada@example.org",
                                             phone="5550102030", areas=["teaching"], availability=["weekends"],
                                             message="Happy to help out")
        table = VolunteersTable(self.api, self.cache, self.notifier)
        self.assertEqual(table.records()[0]["status"], "pending")

        result = table.update_status(volunteer.id, "approved")
        self.assertTrue(result.ok)
        self.assertEqual(table.records()[0]["status"], "approved")

        table.set_filter("areas", "teaching")
        self.assertEqual(table.page().total_items, 1)
        self.assertEqual(table.filter_choices(table.filter_options[1]), [("teaching", "teaching")])

        result = table.update_status(volunteer.id, "hired")
        self.assertFalse(result.ok)
        self.assertEqual(table.records()[0]["status"], "approved")


class SettingsManagerTestCase(BackofficeTestCase):
    def setUp(self):
        super().setUp()
        self.manager = SettingsManager(self.api, self.cache, self.notifier)
        self.site_settings = SiteSettings(self.api, self.cache)

    def test_fallback_until_created(self):
        self.assertEqual(self.site_settings.get("browseCoursesUrl", "/programs"), "/programs")

        result = self.manager.create({"key": "browseCoursesUrl", "value": "/courses", "label": "Browse courses", "group": "urls"})
        self.assertTrue(result.ok)
        self.assertEqual(self.site_settings.get("browseCoursesUrl", "/programs"), "/courses")

    def test_groups(self):
        SiteSetting.objects.create(key="donateUrl", value="/donate", label="Donate", group="urls")
        SiteSetting.objects.create(key="contactEmail", value="info@example.org", label="Email", group="contact", type="email")
        self.assertEqual(self.manager.group_names(), ["contact", "urls"])

    def test_update_by_key_and_delete_by_id(self):
        setting = SiteSetting.objects.create(key="donateUrl", value="/donate", label="Donate", group="urls")
        self.manager.settings()

        result = self.manager.update("donateUrl", {"value": "/give", "key": "ignored"})
        self.assertTrue(result.ok)
        self.assertEqual(self.site_settings.get("donateUrl"), "/give")

        result = self.manager.delete(setting.id)
        self.assertTrue(result.ok)
        self.assertIsNone(self.site_settings.get("donateUrl"))

        # deleting again finds nothing, which is what was asked for
        self.assertTrue(self.manager.delete(setting.id).ok)

    def test_invalid_form_is_not_sent(self):
        result = self.manager.create({"key": "x", "value": "", "label": "L", "group": ""})
        self.assertFalse(result.ok)
        self.assertEqual(set(self.manager.errors), {"key", "value", "label", "group"})
        self.assertEqual(self.notifier.notifications, [])
        self.assertFalse(SiteSetting.objects.exists())

    def test_duplicate_key(self):
        SiteSetting.objects.create(key="donateUrl", value="/donate", label="Donate", group="urls")
        result = self.manager.create({"key": "donateUrl", "value": "/give", "label": "Donate", "group": "urls"})
        self.assertFalse(result.ok)
        self.assertEqual(result.error.message, "(key) A setting with this key already exists")
        self.assertEqual(self.notifier.last.variant, DESTRUCTIVE)
