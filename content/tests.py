from datetime import date

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from .models import Event, HistoryEvent, NewsArticle, Program, TeamMember, Video

User = get_user_model()


def make_event(**kwargs):
    data = {
        "title": "Spring Gala",
        "description": "An evening of music and giving",
        "date": date(2024, 4, 1),
        "time": "6:00 PM",
        "location": "Main Hall",
        "image_url": "/images/gala.jpg",
    }
    data.update(kwargs)
    return Event.objects.create(**data)


def make_program(slug, **kwargs):
    data = {
        "title": "Coding for teens",
        "description": "Learn to build websites",
        "long_description": "A twelve week program teaching teenagers the basics of web development.",
        "category": "education",
        "image_url": "/images/coding.jpg",
        "slug": slug,
    }
    data.update(kwargs)
    return Program.objects.create(**data)


def make_video(title, **kwargs):
    data = {
        "title": title,
        "description": "Highlights from our latest event",
        "thumbnail_url": "/images/thumb.jpg",
        "video_url": "https://example.org/video",
        "duration": "3:45",
        "category": "events",
    }
    data.update(kwargs)
    return Video.objects.create(**data)


class ContentTestCase(APITestCase):
    def setUp(self):
        cache.clear()
        self.admin = User.objects.create_user(username="admin", password="Testp@ssword123", is_staff=True)
        self.token = str(AccessToken.for_user(user=self.admin))

    def login(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.token}")


class EventApiTestCase(ContentTestCase):
    def setUp(self):
        super().setUp()
        self.events_url = reverse("content:events")
        self.event_data = {
            "title": "Charity Run",
            "description": "Five kilometers around the park",
            "date": "2024-06-01",
            "time": "8:00 AM",
            "location": "City Park",
            "image_url": "/images/run.jpg",
        }

    def test_list_events_is_public(self):
        make_event()
        response = self.client.get(self.events_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "success")
        self.assertEqual(len(response.data["data"]), 1)

    def test_create_event(self):
        self.login()
        response = self.client.post(self.events_url, self.event_data, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["title"], "Charity Run")
        self.assertFalse(response.data["data"]["is_past"])

    def test_create_event_without_auth(self):
        response = self.client.post(self.events_url, self.event_data, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(Event.objects.exists())

    def test_create_invalid_event(self):
        self.login()
        self.event_data["title"] = "Ab"
        response = self.client.post(self.events_url, self.event_data, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "(title) Title must be at least 3 characters")

    def test_upcoming_and_past(self):
        later = make_event(title="Later", date=date(2024, 9, 1))
        sooner = make_event(title="Sooner", date=date(2024, 5, 1))
        past = make_event(title="Past", date=date(2023, 1, 1), is_past=True)

        response = self.client.get(reverse("content:events-upcoming"))
        self.assertEqual([e["id"] for e in response.data["data"]], [sooner.id, later.id])

        response = self.client.get(reverse("content:events-past"))
        self.assertEqual([e["id"] for e in response.data["data"]], [past.id])

    def test_cached_list_follows_changes(self):
        event = make_event()
        self.client.get(self.events_url)
        self.login()

        response = self.client.patch(reverse("content:event-detail", kwargs={"id": event.id}), {"is_past": True}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.get(reverse("content:events-past"))
        self.assertEqual(len(response.data["data"]), 1)
        response = self.client.get(self.events_url)
        self.assertTrue(response.data["data"][0]["is_past"])

    def test_put_requires_every_field(self):
        event = make_event()
        self.login()
        url = reverse("content:event-detail", kwargs={"id": event.id})

        response = self.client.put(url, {"title": "Renamed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.put(url, {**self.event_data, "title": "Renamed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["title"], "Renamed")

    def test_delete_twice(self):
        event = make_event()
        self.login()
        url = reverse("content:event-detail", kwargs={"id": event.id})

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["id"], event.id)

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"], "Event not found")


class ProgramApiTestCase(ContentTestCase):
    def test_by_slug_and_by_id(self):
        program = make_program("coding-for-teens")

        response = self.client.get(reverse("content:program-by-slug", kwargs={"slug": "coding-for-teens"}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["id"], program.id)

        response = self.client.get(reverse("content:program-detail", kwargs={"id": program.id}))
        self.assertEqual(response.data["data"]["slug"], "coding-for-teens")

        response = self.client.get(reverse("content:program-by-slug", kwargs={"slug": "missing"}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_featured_is_limited(self):
        for i in range(8):
            make_program(f"program-{i}")
        response = self.client.get(reverse("content:programs-featured"))
        self.assertEqual(len(response.data["data"]), 6)

    def test_categories(self):
        make_program("one", category="health")
        make_program("two", category="education")
        make_program("three", category="education")
        response = self.client.get(reverse("content:program-categories"))
        self.assertEqual(response.data["data"], ["education", "health"])

    def test_duplicate_slug(self):
        make_program("coding-for-teens")
        self.login()
        response = self.client.post(reverse("content:programs"), {
            "title": "Coding again",
            "description": "Learn to build websites",
            "long_description": "A twelve week program teaching teenagers the basics of web development.",
            "category": "education",
            "image_url": "/images/coding.jpg",
            "slug": "coding-for-teens",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Program.objects.count(), 1)

    def test_numeric_slug_is_rejected(self):
        self.login()
        response = self.client.post(reverse("content:programs"), {
            "title": "Class of 2024",
            "description": "Learn to build websites",
            "long_description": "A twelve week program teaching teenagers the basics of web development.",
            "category": "education",
            "image_url": "/images/coding.jpg",
            "slug": "2024",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "(slug) Slug can not be only digits")
        self.assertFalse(Program.objects.exists())


class NewsApiTestCase(ContentTestCase):
    def test_news_newest_first(self):
        common = {"excerpt": "A short summary", "content": "x" * 60, "image_url": "/a.jpg", "category": "news", "author": "Staff"}
        older = NewsArticle.objects.create(title="Older", slug="older", date=date(2024, 1, 1), **common)
        newer = NewsArticle.objects.create(title="Newer", slug="newer", date=date(2024, 2, 1), **common)

        response = self.client.get(reverse("content:news"))
        self.assertEqual([a["id"] for a in response.data["data"]], [newer.id, older.id])

        response = self.client.get(reverse("content:news-by-slug", kwargs={"slug": "older"}))
        self.assertEqual(response.data["data"]["title"], "Older")

    def test_numeric_slug_is_rejected(self):
        self.login()
        article = {
            "title": "Looking back at 2024",
            "excerpt": "A short summary of the year",
            "content": "x" * 60,
            "image_url": "/a.jpg",
            "category": "news",
            "author": "Staff",
        }
        response = self.client.post(reverse("content:news"), {**article, "slug": "2024"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "(slug) Slug can not be only digits")

        response = self.client.post(reverse("content:news"), {**article, "slug": "year-2024"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        response = self.client.get(reverse("content:news-by-slug", kwargs={"slug": "year-2024"}))
        self.assertEqual(response.data["data"]["title"], "Looking back at 2024")


class VideoApiTestCase(ContentTestCase):
    def test_first_video_becomes_main_feature(self):
        first = make_video("First")
        second = make_video("Second")
        self.assertTrue(first.is_main_feature)
        self.assertFalse(Video.objects.get(id=second.id).is_main_feature)

        response = self.client.get(reverse("content:videos-main-feature"))
        self.assertEqual(response.data["data"]["id"], first.id)

    def test_main_feature_is_null_without_videos(self):
        response = self.client.get(reverse("content:videos-main-feature"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data["data"])

    def test_featured_videos(self):
        make_video("One", is_featured=True)
        make_video("Two")
        response = self.client.get(reverse("content:videos-featured"))
        self.assertEqual([v["title"] for v in response.data["data"]], ["One"])

    def test_views_are_read_only(self):
        video = make_video("Counted")
        self.login()
        response = self.client.patch(reverse("content:video-detail", kwargs={"id": video.id}), {"views": 1000}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["views"], 0)


class TeamApiTestCase(ContentTestCase):
    def test_leadership_and_all(self):
        common = {"bio": "Has been with us for years", "image_url": "/a.jpg"}
        lead = TeamMember.objects.create(name="Ada", title="Director", is_leadership=True, **common)
        TeamMember.objects.create(name="Bob", title="Volunteer lead", **common)

        response = self.client.get(reverse("content:team-all"))
        self.assertEqual(len(response.data["data"]), 2)
        response = self.client.get(reverse("content:team-leadership"))
        self.assertEqual([m["id"] for m in response.data["data"]], [lead.id])

    def test_create_member(self):
        self.login()
        response = self.client.post(reverse("content:team-create"), {
            "name": "Cleo",
            "title": "Coordinator",
            "bio": "Coordinates our weekend programs",
            "image_url": "/c.jpg",
            "social_links": {"twitter": "https://twitter.com/cleo"},
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["social_links"]["twitter"], "https://twitter.com/cleo")

        response = self.client.get(reverse("content:team-create"))
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)


class HistoryApiTestCase(ContentTestCase):
    def test_history_in_timeline_order(self):
        common = {"description": "Something important happened"}
        later = HistoryEvent.objects.create(year=2010, title="Expansion", **common)
        first_b = HistoryEvent.objects.create(year=1999, title="Second milestone", sort_order=2, **common)
        first_a = HistoryEvent.objects.create(year=1999, title="Founded", sort_order=1, **common)

        response = self.client.get(reverse("content:history"))
        self.assertEqual([h["id"] for h in response.data["data"]], [first_a.id, first_b.id, later.id])

    def test_year_must_be_positive(self):
        self.login()
        response = self.client.post(reverse("content:history"), {
            "year": 0, "title": "Nothing", "description": "Something important happened",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class UniversityApiTestCase(ContentTestCase):
    def test_course_crud(self):
        self.login()
        response = self.client.post(reverse("content:courses"), {
            "title": "Intro to Python",
            "description": "Programming from the very beginning",
            "level": "Beginner",
            "duration": "12 weeks",
            "instructors": ["Ada", "Grace"],
            "image_url": "/python.jpg",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        course_id = response.data["data"]["id"]

        response = self.client.get(reverse("content:courses"))
        self.assertEqual(response.data["data"][0]["instructors"], ["Ada", "Grace"])

        response = self.client.delete(reverse("content:course-detail", kwargs={"id": course_id}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        response = self.client.get(reverse("content:courses"))
        self.assertEqual(response.data["data"], [])
