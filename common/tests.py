from datetime import date

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.management import call_command
from django.test import SimpleTestCase, TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from backoffice.site_settings import resolve_setting
from common.models import SiteSetting
from common.responses import format_first_error
from common.tables import (
    ELLIPSIS,
    build_page,
    calculate_total_pages,
    clamp_page,
    filter_records,
    group_records,
    paginate,
    pagination_range,
    sort_records,
)
from common.utils import get_setting_value

User = get_user_model()


EVENTS = [
    {"id": 1, "title": "Spring Gala", "location": "Main Hall", "category": "fundraiser", "is_past": True, "tags": ["music"], "date": "2024-03-01"},
    {"id": 2, "title": "Coding Bootcamp", "location": "Library", "category": "education", "is_past": False, "tags": ["tech"], "date": "2024-05-12"},
    {"id": 3, "title": "Charity Run", "location": None, "category": "fundraiser", "is_past": False, "tags": [], "date": None},
    {"id": 4, "title": "Book Fair", "location": "main square", "category": "education", "is_past": True, "tags": ["music", "books"], "date": "2023-11-20"},
]


class FilterRecordsTestCase(SimpleTestCase):
    def test_no_criteria_returns_everything(self):
        self.assertEqual(filter_records(EVENTS, "", {}, ["title"]), EVENTS)

    def test_result_is_a_new_list(self):
        result = filter_records(EVENTS, "", {}, ["title"])
        self.assertIsNot(result, EVENTS)

    def test_search_is_case_insensitive_over_searchable_fields(self):
        result = filter_records(EVENTS, "MAIN", {}, ["title", "location"])
        self.assertEqual([e["id"] for e in result], [1, 4])

    def test_search_ignores_fields_not_listed(self):
        self.assertEqual(filter_records(EVENTS, "fundraiser", {}, ["title"]), [])

    def test_none_values_never_match(self):
        result = filter_records(EVENTS, "none", {}, ["location"])
        self.assertEqual(result, [])

    def test_exact_match_filters(self):
        result = filter_records(EVENTS, "", {"category": "education"}, ["title"])
        self.assertTrue(all(e["category"] == "education" for e in result))
        self.assertEqual(len(result), 2)

    def test_empty_filter_values_and_search_key_are_ignored(self):
        result = filter_records(EVENTS, "", {"category": "", "search": "gala", "location": None}, ["title"])
        self.assertEqual(result, EVENTS)

    def test_boolean_filter_accepts_strings(self):
        result = filter_records(EVENTS, "", {"is_past": "true"}, [])
        self.assertEqual([e["id"] for e in result], [1, 4])
        result = filter_records(EVENTS, "", {"is_past": "false"}, [])
        self.assertEqual([e["id"] for e in result], [2, 3])

    def test_list_field_filter_uses_membership(self):
        result = filter_records(EVENTS, "", {"tags": "music"}, [])
        self.assertEqual([e["id"] for e in result], [1, 4])

    def test_missing_value_does_not_match_filter(self):
        self.assertEqual(filter_records(EVENTS, "", {"location": "Library"}, [])[0]["id"], 2)
        self.assertEqual(len(filter_records(EVENTS, "", {"location": "Library"}, [])), 1)

    def test_search_and_filters_combine(self):
        result = filter_records(EVENTS, "b", {"category": "education"}, ["title"])
        self.assertEqual([e["id"] for e in result], [2, 4])

    def test_empty_collection(self):
        self.assertEqual(filter_records(None, "x", {"a": 1}, ["title"]), [])
        self.assertEqual(filter_records([], "", {}, []), [])

    def test_source_is_not_mutated(self):
        records = list(EVENTS)
        filter_records(records, "gala", {"category": "fundraiser"}, ["title"])
        self.assertEqual(records, EVENTS)

    def test_works_with_objects(self):
        class Record:
            def __init__(self, title):
                self.title = title

        records = [Record("Alpha"), Record("Beta")]
        self.assertEqual(filter_records(records, "bet", {}, ["title"]), [records[1]])


class SortRecordsTestCase(SimpleTestCase):
    def test_no_key_keeps_order(self):
        self.assertEqual(sort_records(EVENTS), EVENTS)

    def test_sort_strings_case_insensitively(self):
        result = sort_records(EVENTS, "location")
        self.assertEqual([e["id"] for e in result], [3, 2, 1, 4])

    def test_none_last_when_descending(self):
        result = sort_records(EVENTS, "date", "desc")
        self.assertEqual([e["id"] for e in result], [2, 1, 4, 3])

    def test_numbers_sort_naturally(self):
        records = [{"amount": 100}, {"amount": 25}, {"amount": 5}]
        self.assertEqual([r["amount"] for r in sort_records(records, "amount")], [5, 25, 100])

    def test_dates(self):
        records = [{"d": date(2024, 1, 2)}, {"d": date(2023, 5, 1)}]
        self.assertEqual(sort_records(records, "d")[0]["d"], date(2023, 5, 1))

    def test_float_words_sort_as_strings(self):
        records = [{"title": "Zeta"}, {"title": "Infinity"}, {"title": "Alpha"}]
        self.assertEqual([r["title"] for r in sort_records(records, "title")], ["Alpha", "Infinity", "Zeta"])

    def test_nan_does_not_scramble_numbers(self):
        records = [{"t": "10"}, {"t": "NaN"}, {"t": "2"}, {"t": "1"}]
        self.assertEqual([r["t"] for r in sort_records(records, "t")], ["1", "2", "10", "NaN"])
        self.assertEqual([r["t"] for r in sort_records(records, "t", "desc")], ["NaN", "10", "2", "1"])

    def test_source_is_not_mutated(self):
        records = [dict(event) for event in EVENTS]
        result = sort_records(records, "location", "desc")
        self.assertEqual(records, EVENTS)
        self.assertIsNot(result, records)


class PaginationTestCase(SimpleTestCase):
    records = list(range(1, 26))

    def test_twenty_five_records_by_ten(self):
        self.assertEqual(calculate_total_pages(25, 10), 3)
        self.assertEqual(len(paginate(self.records, 1, 10)), 10)
        self.assertEqual(paginate(self.records, 3, 10), [21, 22, 23, 24, 25])

    def test_first_page_length(self):
        for size in (5, 10, 20, 50):
            self.assertEqual(len(paginate(self.records, 1, size)), min(size, len(self.records)))

    def test_pages_concatenate_to_collection(self):
        for size in (1, 3, 7, 10, 25, 30):
            pages = calculate_total_pages(len(self.records), size)
            joined = []
            for page in range(1, pages + 1):
                joined.extend(paginate(self.records, page, size))
            self.assertEqual(joined, self.records)

    def test_page_out_of_range_is_empty(self):
        self.assertEqual(paginate(self.records, 4, 10), [])

    def test_page_below_one_is_first_page(self):
        self.assertEqual(paginate(self.records, 0, 10), paginate(self.records, 1, 10))

    def test_invalid_page_size(self):
        for size in (0, -1, 2.5, None, True):
            with self.assertRaises(ValueError):
                paginate(self.records, 1, size)
            with self.assertRaises(ValueError):
                calculate_total_pages(10, size)

    def test_empty_collection_has_one_page(self):
        self.assertEqual(calculate_total_pages(0, 10), 1)
        self.assertEqual(paginate([], 1, 10), [])

    def test_clamp_page(self):
        self.assertEqual(clamp_page(5, 2), 2)
        self.assertEqual(clamp_page(0, 2), 1)
        self.assertEqual(clamp_page(3, 0), 1)

    def test_build_page_reclamps(self):
        page = build_page(self.records[:15], 5, 10)
        self.assertEqual(page.current_page, 2)
        self.assertEqual(page.rows, list(range(11, 16)))
        self.assertEqual(page.summary(), "Showing 11 to 15 of 15 items")
        self.assertTrue(page.has_previous)
        self.assertFalse(page.has_next)

    def test_build_page_empty(self):
        page = build_page([], 3, 10)
        self.assertEqual(page.current_page, 1)
        self.assertEqual(page.summary(), "Showing 0 to 0 of 0 items")
        self.assertEqual(page.page_numbers, [])

    def test_source_is_not_mutated(self):
        records = list(self.records)
        rows = paginate(records, 1, 25)
        page = build_page(records, 9, 10)
        self.assertEqual(records, list(range(1, 26)))
        self.assertIsNot(rows, records)
        self.assertIsNot(page.rows, records)

        rows.append(99)
        page.rows.clear()
        self.assertEqual(records, list(range(1, 26)))


class PaginationRangeTestCase(SimpleTestCase):
    def test_single_page_renders_nothing(self):
        self.assertEqual(pagination_range(1, 1), [])
        self.assertEqual(pagination_range(1, 0), [])

    def test_short_range_has_no_ellipsis(self):
        self.assertEqual(pagination_range(2, 5), [1, 2, 3, 4, 5])

    def test_ellipsis_on_both_sides(self):
        self.assertEqual(pagination_range(10, 20), [1, ELLIPSIS, 8, 9, 10, 11, 12, ELLIPSIS, 20])

    def test_current_page_is_clamped(self):
        self.assertEqual(pagination_range(50, 3), [1, 2, 3])

    def test_first_and_last_always_present_without_duplicates(self):
        for total in range(2, 15):
            for current in range(1, total + 1):
                pages = pagination_range(current, total)
                numbers = [p for p in pages if p != ELLIPSIS]
                self.assertEqual(numbers[0], 1)
                self.assertEqual(numbers[-1], total)
                self.assertEqual(len(numbers), len(set(numbers)))
                self.assertEqual(numbers, sorted(numbers))


class HelpersTestCase(SimpleTestCase):
    def test_group_records(self):
        groups = group_records(EVENTS, "category")
        self.assertEqual(list(groups.keys()), ["fundraiser", "education"])
        self.assertEqual([e["id"] for e in groups["education"]], [2, 4])

    def test_format_first_error(self):
        self.assertEqual(format_first_error({"key": ["Key must be at least 2 characters"]}), "(key) Key must be at least 2 characters")
        self.assertEqual(format_first_error({"non_field_errors": ["Invalid"]}), "Invalid")
        self.assertEqual(format_first_error({"ids": {"0": ["A valid integer is required."]}}, False), "A valid integer is required.")


class SiteSettingApiTestCase(APITestCase):
    def setUp(self):
        cache.clear()
        self.admin = User.objects.create_user(username="admin", password="Testp@ssword123", is_staff=True)
        self.token = str(AccessToken.for_user(user=self.admin))
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.token}")
        self.settings_url = reverse("common:settings")
        self.setting = SiteSetting.objects.create(key="donateUrl", value="/donate", label="Donate URL", group="urls", type="url")

    def detail_url(self, identifier):
        return reverse("common:setting-detail", kwargs={"identifier": identifier})

    def test_list_settings_is_public(self):
        self.client.credentials()
        SiteSetting.objects.create(key="contactEmail", value="info@example.org", label="Email", group="contact", type="email")
        response = self.client.get(self.settings_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([s["key"] for s in response.data["data"]], ["contactEmail", "donateUrl"])

    def test_create_setting(self):
        response = self.client.post(
            self.settings_url,
            {"key": "applyNowUrl", "value": "/apply", "label": "Apply Now", "group": "urls"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["type"], "text")
        self.assertTrue(SiteSetting.objects.filter(key="applyNowUrl").exists())

    def test_create_duplicate_key(self):
        response = self.client.post(
            self.settings_url,
            {"key": "donateUrl", "value": "/other", "label": "Donate", "group": "urls"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "(key) A setting with this key already exists")

    def test_create_validation(self):
        response = self.client.post(
            self.settings_url,
            {"key": "a", "value": "x", "label": "Label", "group": "urls"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["status"], "error")
        self.assertIn("key", response.data["data"])

        response = self.client.post(
            self.settings_url,
            {"key": "someKey", "value": "", "label": "Label", "group": "urls"},
            format="json",
        )
        self.assertEqual(response.data["error"], "(value) Value is required")

    def test_create_without_auth(self):
        self.client.credentials()
        response = self.client.post(
            self.settings_url,
            {"key": "applyNowUrl", "value": "/apply", "label": "Apply Now", "group": "urls"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["status"], "error")

    def test_create_as_non_staff(self):
        user = User.objects.create_user(username="visitor", password="Testp@ssword123")
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user=user)}")
        response = self.client.post(
            self.settings_url,
            {"key": "applyNowUrl", "value": "/apply", "label": "Apply Now", "group": "urls"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_get_by_key(self):
        response = self.client.get(self.detail_url("donateUrl"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["value"], "/donate")

        response = self.client.get(self.detail_url("missing"))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_patch_by_key(self):
        response = self.client.patch(self.detail_url("donateUrl"), {"value": "/give"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.setting.refresh_from_db()
        self.assertEqual(self.setting.value, "/give")

    def test_patch_rejects_empty_value(self):
        response = self.client.patch(self.detail_url("donateUrl"), {"value": ""}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_patch_missing_key(self):
        response = self.client.patch(self.detail_url("missing"), {"value": "/x"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_by_id_twice(self):
        response = self.client.delete(self.detail_url(self.setting.id))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["key"], "donateUrl")
        self.assertFalse(SiteSetting.objects.filter(id=self.setting.id).exists())

        response = self.client.delete(self.detail_url(self.setting.id))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_by_key_is_rejected(self):
        response = self.client.delete(self.detail_url("donateUrl"))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(SiteSetting.objects.filter(key="donateUrl").exists())

    def test_list_reflects_updates(self):
        self.client.get(self.settings_url)
        self.client.patch(self.detail_url("donateUrl"), {"value": "/give"}, format="json")
        response = self.client.get(self.settings_url)
        self.assertEqual(response.data["data"][0]["value"], "/give")


class SettingValueTestCase(TestCase):
    def setUp(self):
        cache.clear()

    def test_fallback_when_missing(self):
        self.assertEqual(get_setting_value("browseCoursesUrl", "/programs"), "/programs")

    def test_fallback_when_empty(self):
        # the API refuses empty values, but rows written directly may hold one
        SiteSetting.objects.create(key="browseCoursesUrl", value="", label="Browse", group="urls")
        self.assertEqual(get_setting_value("browseCoursesUrl", "/programs"), "/programs")
        self.assertEqual(resolve_setting([{"key": "browseCoursesUrl", "value": ""}], "browseCoursesUrl", "/programs"), "/programs")

    def test_value_follows_updates(self):
        setting = SiteSetting.objects.create(key="browseCoursesUrl", value="/courses", label="Browse", group="urls")
        self.assertEqual(get_setting_value("browseCoursesUrl", "/programs"), "/courses")
        setting.value = "/university"
        setting.save()
        self.assertEqual(get_setting_value("browseCoursesUrl", "/programs"), "/university")
        setting.delete()
        self.assertEqual(get_setting_value("browseCoursesUrl", "/programs"), "/programs")

    def test_seed_command_is_idempotent(self):
        call_command("seed_site_settings", verbosity=0)
        count = SiteSetting.objects.count()
        SiteSetting.objects.filter(key="browseCoursesUrl").update(value="/custom")

        call_command("seed_site_settings", verbosity=0)
        self.assertEqual(SiteSetting.objects.count(), count)
        self.assertEqual(SiteSetting.objects.get(key="browseCoursesUrl").value, "/custom")

        call_command("seed_site_settings", "--overwrite", verbosity=0)
        self.assertEqual(SiteSetting.objects.get(key="browseCoursesUrl").value, "/programs")


class AdminStatsTestCase(APITestCase):
    def setUp(self):
        cache.clear()
        self.url = reverse("common:admin-stats")

    def test_requires_staff(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_counts(self):
        admin = User.objects.create_user(username="admin", password="Testp@ssword123", is_staff=True)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user=admin)}")
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["articles"], 0)
        self.assertEqual(set(response.data["data"].keys()), {
            "articles", "programs", "events", "team", "videos", "donations", "volunteers", "contacts", "subscribers",
        })


class MigrationsTestCase(TestCase):
    def test_models_have_no_missing_migrations(self):
        # makemigrations --check exits with a non-zero status when a model changed without a migration
        try:
            call_command("makemigrations", "common", "content", "engagement", "--check", "--dry-run", verbosity=0)
        except SystemExit:
            self.fail("Models have changes that are not reflected in a migration")
