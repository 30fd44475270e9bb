from django.contrib import admin
from .models import SiteSetting

@admin.register(SiteSetting)
class SiteSettingAdmin(admin.ModelAdmin):
    list_display = ("key", "value", "group", "type", "updated_at")
    list_filter = ("group", "type")
    search_fields = ("key", "label")
    readonly_fields = ("created_at", "updated_at")
