from django.core.management.base import BaseCommand
from common.models import SiteSetting

DEFAULT_SETTINGS = [
    {"key": "browseCoursesUrl", "value": "/programs", "label": "Browse Courses URL", "group": "urls", "type": "url",
     "description": "Destination of the Browse Courses button on the university page"},
    {"key": "applyNowUrl", "value": "/university#apply", "label": "Apply Now URL", "group": "urls", "type": "url"},
    {"key": "donateUrl", "value": "/get-involved#donate", "label": "Donate URL", "group": "urls", "type": "url"},
    {"key": "volunteerUrl", "value": "/get-involved#volunteer", "label": "Volunteer URL", "group": "urls", "type": "url"},
    {"key": "youtubeChannelUrl", "value": "https://www.youtube.com/", "label": "YouTube Channel", "group": "social", "type": "url"},
    {"key": "contactEmail", "value": "info@example.org", "label": "Contact Email", "group": "contact", "type": "email"},
    {"key": "contactPhone", "value": "+1 (000) 000-0000", "label": "Contact Phone", "group": "contact", "type": "text"},
    {"key": "contactAddress", "value": "123 Main Street", "label": "Contact Address", "group": "contact", "type": "textarea"},
]


class Command(BaseCommand):
    help = "Seed the default site settings, existing values are kept"

    def add_arguments(self, parser):
        parser.add_argument("--overwrite", action="store_true", help="Reset existing settings to their default values")

    def handle(self, *args, **options):
        created_count = 0
        for setting in DEFAULT_SETTINGS:
            defaults = {k: v for k, v in setting.items() if k != "key"}
            if options["overwrite"]:
                _, created = SiteSetting.objects.update_or_create(key=setting["key"], defaults=defaults)
            else:
                _, created = SiteSetting.objects.get_or_create(key=setting["key"], defaults=defaults)
            created_count += int(created)

        self.stdout.write(self.style.SUCCESS(f"Site settings seeded successfully! ({created_count} created)"))
