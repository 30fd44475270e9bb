from django.db import models

from common.choices import SettingTypeChoices


class SiteSetting(models.Model):
    """
    A site setting is a named key-value pair editable from the back-office.
    Public pages read settings by key to resolve configurable values such as link targets,
    for example the destination of the "Browse Courses" button.
    """
    key = models.CharField(max_length=100, unique=True) # example: browseCoursesUrl
    value = models.TextField() # example: /programs
    label = models.CharField(max_length=150)
    description = models.TextField(null=True, blank=True)
    group = models.CharField(max_length=50, default="urls") # tab the setting is listed under
    type = models.CharField(max_length=20, choices=SettingTypeChoices.choices, default=SettingTypeChoices.TEXT)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["group", "key"]

    def __str__(self):
        return f"{self.key} → {self.value}"
