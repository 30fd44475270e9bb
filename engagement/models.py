from django.db import models

from engagement.choices import VolunteerStatusChoices


class Volunteer(models.Model):
    """A volunteer application submitted from the get involved page"""
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField()
    phone = models.CharField(max_length=30)
    areas = models.JSONField(default=list) # areas of interest, example: ["events", "teaching"]
    availability = models.JSONField(default=list) # example: ["weekends", "evenings"]
    message = models.TextField()
    status = models.CharField(max_length=20, choices=VolunteerStatusChoices.choices, default=VolunteerStatusChoices.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.first_name} {self.last_name} ({self.status})"


class Donation(models.Model):
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField()
    amount = models.PositiveIntegerField()
    payment_method = models.CharField(max_length=50)
    recurring = models.BooleanField(default=False)
    transaction_id = models.CharField(max_length=255, null=True, blank=True)
    status = models.CharField(max_length=30, default="pending") # free form, set by the admin
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.first_name} {self.last_name}: {self.amount}"


class ContactMessage(models.Model):
    name = models.CharField(max_length=150)
    email = models.EmailField()
    subject = models.CharField(max_length=255)
    message = models.TextField()
    newsletter = models.BooleanField(default=False) # sender asked to be subscribed to the newsletter
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.subject} from {self.email}"


class NewsletterSubscriber(models.Model):
    email = models.EmailField(unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return self.email

    @classmethod
    def subscribe(cls, email):
        """Subscribe `email`, returns (subscriber, created). Subscribing twice keeps the first subscription."""
        return cls.objects.get_or_create(email=email)
