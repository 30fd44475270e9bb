from django.db import models


class VolunteerStatusChoices(models.TextChoices):
    # an admin may move an application to any status at any time
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    CONTACTED = 'contacted', 'Contacted'
    REJECTED = 'rejected', 'Rejected'
