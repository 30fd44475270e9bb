from django.db import models


class SettingTypeChoices(models.TextChoices):
    TEXT = "text", "Text"
    TEXTAREA = "textarea", "Textarea"
    URL = "url", "Url"
    EMAIL = "email", "Email"
