from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from engagement.choices import VolunteerStatusChoices
from .models import ContactMessage, Donation, NewsletterSubscriber, Volunteer

User = get_user_model()


VOLUNTEER_DATA = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.org",
    "phone": "+1 555 010 2030",
    "areas": ["teaching", "events"],
    "availability": ["weekends"],
    "message": "I would love to help with the coding classes",
}


class EngagementTestCase(APITestCase):
    def setUp(self):
        cache.clear()
        self.admin = User.objects.create_user(username="admin", password="Testp@ssword123", is_staff=True)
        self.token = str(AccessToken.for_user(user=self.admin))

    def login(self):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.token}")


class VolunteerApiTestCase(EngagementTestCase):
    def setUp(self):
        super().setUp()
        self.volunteers_url = reverse("engagement:volunteers")

    def status_url(self, volunteer_id):
        return reverse("engagement:volunteer-status", kwargs={"id": volunteer_id})

    def test_anyone_can_apply(self):
        response = self.client.post(self.volunteers_url, {**VOLUNTEER_DATA, "status": "approved"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        # applicants can not choose their own status
        self.assertEqual(response.data["data"]["status"], VolunteerStatusChoices.PENDING)

    def test_listing_requires_staff(self):
        Volunteer.objects.create(**VOLUNTEER_DATA)
        response = self.client.get(self.volunteers_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        self.login()
        response = self.client.get(self.volunteers_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data["data"]), 1)

    def test_areas_can_not_be_empty(self):
        response = self.client.post(self.volunteers_url, {**VOLUNTEER_DATA, "areas": []}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_any_status_can_follow_any_other(self):
        volunteer = Volunteer.objects.create(**VOLUNTEER_DATA)
        self.login()
        for value in ["rejected", "approved", "pending", "contacted", "approved"]:
            response = self.client.put(self.status_url(volunteer.id), {"status": value}, format="json")
            self.assertEqual(response.status_code, status.HTTP_200_OK)
            volunteer.refresh_from_db()
            self.assertEqual(volunteer.status, value)

    def test_unknown_status(self):
        volunteer = Volunteer.objects.create(**VOLUNTEER_DATA)
        self.login()
        response = self.client.patch(self.status_url(volunteer.id), {"status": "hired"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        volunteer.refresh_from_db()
        self.assertEqual(volunteer.status, "pending")

    def test_status_of_missing_volunteer(self):
        self.login()
        response = self.client.put(self.status_url(999), {"status": "approved"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_status_requires_staff(self):
        volunteer = Volunteer.objects.create(**VOLUNTEER_DATA)
        response = self.client.put(self.status_url(volunteer.id), {"status": "approved"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class DonationApiTestCase(EngagementTestCase):
    donation_data = {
        "first_name": "Grace",
        "last_name": "Hopper",
        "email": "grace@example.org",
        "amount": 50,
        "payment_method": "card",
        "recurring": True,
    }

    def test_donate_and_update_status(self):
        response = self.client.post(reverse("engagement:donations"), self.donation_data, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        donation_id = response.data["data"]["id"]

        self.login()
        response = self.client.put(reverse("engagement:donation-status", kwargs={"id": donation_id}), {"status": "completed"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Donation.objects.get(id=donation_id).status, "completed")

    def test_amount_must_be_positive(self):
        response = self.client.post(reverse("engagement:donations"), {**self.donation_data, "amount": 0}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class ContactMessageApiTestCase(EngagementTestCase):
    message_data = {
        "name": "Alan",
        "email": "alan@example.org",
        "subject": "Partnership",
        "message": "We would like to sponsor your next event",
    }

    def test_contact_with_newsletter_subscribes(self):
        response = self.client.post(reverse("engagement:contact"), {**self.message_data, "newsletter": True}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(NewsletterSubscriber.objects.filter(email="alan@example.org").exists())

        # a second message does not subscribe twice
        response = self.client.post(reverse("engagement:contact"), {**self.message_data, "newsletter": True}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(NewsletterSubscriber.objects.count(), 1)

    def test_contact_without_newsletter(self):
        self.client.post(reverse("engagement:contact"), self.message_data, format="json")
        self.assertEqual(ContactMessage.objects.count(), 1)
        self.assertFalse(NewsletterSubscriber.objects.exists())

    def test_mark_read_and_delete(self):
        message = ContactMessage.objects.create(**self.message_data)
        self.login()

        response = self.client.put(reverse("engagement:contact-read", kwargs={"id": message.id}), {"is_read": True}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["data"]["is_read"])

        url = reverse("engagement:contact-detail", kwargs={"id": message.id})
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_404_NOT_FOUND)


class NewsletterApiTestCase(EngagementTestCase):
    def setUp(self):
        super().setUp()
        self.bulk_url = reverse("engagement:newsletter-bulk-delete")
        self.subscribers_url = reverse("engagement:newsletter-subscribers")

    def test_subscribe_is_idempotent(self):
        url = reverse("engagement:newsletter-subscribe")
        response = self.client.post(url, {"email": "reader@example.org"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        first_id = response.data["data"]["id"]

        response = self.client.post(url, {"email": "reader@example.org"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["id"], first_id)
        self.assertEqual(NewsletterSubscriber.objects.count(), 1)

    def test_subscribe_invalid_email(self):
        response = self.client.post(reverse("engagement:newsletter-subscribe"), {"email": "not-an-email"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "(email) Must provide a valid email")

    def test_bulk_delete(self):
        subscribers = [NewsletterSubscriber.objects.create(email=f"reader{i}@example.org") for i in range(10)]
        ids = [subscribers[2].id, subscribers[6].id, subscribers[8].id]
        self.login()

        response = self.client.delete(self.bulk_url, {"ids": ids}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["deleted"], 3)

        response = self.client.get(self.subscribers_url)
        listed = [s["id"] for s in response.data["data"]]
        self.assertEqual(len(listed), 7)
        self.assertFalse(set(ids) & set(listed))

        # deleting the same ids again is a no-op
        response = self.client.delete(self.bulk_url, {"ids": ids}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["deleted"], 0)
        self.assertEqual(NewsletterSubscriber.objects.count(), 7)

    def test_bulk_delete_requires_ids(self):
        self.login()
        response = self.client.delete(self.bulk_url, {"ids": []}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invalid request: ids must be a non-empty array")

        response = self.client.delete(self.bulk_url, {"ids": "3,7"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_bulk_delete_requires_staff(self):
        subscriber = NewsletterSubscriber.objects.create(email="reader@example.org")
        response = self.client.delete(self.bulk_url, {"ids": [subscriber.id]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertTrue(NewsletterSubscriber.objects.exists())

    def test_delete_single_subscriber(self):
        subscriber = NewsletterSubscriber.objects.create(email="reader@example.org")
        self.login()
        url = reverse("engagement:newsletter-subscriber-detail", kwargs={"id": subscriber.id})
        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["email"], "reader@example.org")
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_404_NOT_FOUND)
