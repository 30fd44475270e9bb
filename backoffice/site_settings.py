import logging
from typing import Dict, Iterable, List, Optional

from backoffice.cache import QueryCache
from backoffice.client import ApiClient
from backoffice.mutations import Mutation, MutationResult
from backoffice.notifications import Notifier
from common.tables import get_field, group_records

logger = logging.getLogger("backoffice.site_settings")

SETTINGS_KEY = "/api/settings"
SETTING_TYPES = ("text", "textarea", "url", "email")


def resolve_setting(settings: Optional[Iterable], key: str, fallback=None):
    """Value of the setting named `key` in a fetched settings list, `fallback` when it is missing or empty."""
    for setting in settings or []:
        if get_field(setting, "key") == key:
            value = get_field(setting, "value")
            return value if value not in (None, "") else fallback
    return fallback


class SiteSettings:
    """Read side used by the public pages, the list is fetched once and shared through the cache"""

    def __init__(self, client: ApiClient, cache: QueryCache):
        self.client = client
        self.cache = cache

    def all(self) -> list:
        return self.cache.query(SETTINGS_KEY, lambda: self.client.get(SETTINGS_KEY)) or []

    def get(self, key: str, fallback=None):
        return resolve_setting(self.all(), key, fallback)


def validate_setting(data: dict, creating: bool = True) -> Dict[str, str]:
    """Field errors of a setting form, the same rules the server applies. Empty when the form is valid."""
    errors = {}

    def text(name):
        value = data.get(name)
        return value.strip() if isinstance(value, str) else ""

    if creating or "key" in data:
        if len(text("key")) < 2:
            errors["key"] = "Key must be at least 2 characters"
    if creating or "value" in data:
        if not text("value"):
            errors["value"] = "Value is required"
    if creating or "label" in data:
        if len(text("label")) < 2:
            errors["label"] = "Label must be at least 2 characters"
    if creating or "group" in data:
        if not text("group"):
            errors["group"] = "Group is required"
    if creating or "type" in data:
        setting_type = data.get("type", "text") if creating else data.get("type")
        if setting_type not in SETTING_TYPES:
            errors["type"] = f"Type must be one of {', '.join(SETTING_TYPES)}"
    return errors


class SettingsManager:
    """Admin page of the site settings, shown as one tab per group"""

    def __init__(self, client: ApiClient, cache: QueryCache, notifier: Notifier):
        self.client = client
        self.cache = cache
        self.notifier = notifier
        self.errors: Dict[str, str] = {}

    def settings(self) -> list:
        return self.cache.query(SETTINGS_KEY, lambda: self.client.get(SETTINGS_KEY)) or []

    def groups(self) -> Dict[str, list]:
        return group_records(self.settings(), "group")

    def group_names(self) -> List[str]:
        return list(self.groups().keys())

    def _mutation(self, success_title: str, success_message: str, failure_message: str, **kwargs) -> Mutation:
        return Mutation(
            cache=self.cache,
            notifier=self.notifier,
            invalidates=(SETTINGS_KEY,),
            success_title=success_title,
            success_message=success_message,
            failure_message=failure_message,
            **kwargs,
        )

    def _invalid(self, errors: Dict[str, str]) -> MutationResult:
        self.errors = errors
        logger.info(f"Setting form rejected: {errors}")
        return MutationResult(ok=False)

    def create(self, data: dict) -> MutationResult:
        data = {"type": "text", **data}
        errors = validate_setting(data, creating=True)
        if errors:
            return self._invalid(errors)

        self.errors = {}
        return self._mutation(
            "Setting created",
            f"The setting '{data['key']}' has been created successfully.",
            "Failed to create setting. Please try again.",
        ).run(lambda: self.client.post(SETTINGS_KEY, data))

    def update(self, key: str, data: dict) -> MutationResult:
        data = {name: value for name, value in data.items() if name != "key"}
        errors = validate_setting(data, creating=False)
        if errors:
            return self._invalid(errors)

        self.errors = {}
        return self._mutation(
            "Setting updated",
            f"The setting '{key}' has been updated successfully.",
            "Failed to update setting. Please try again.",
        ).run(lambda: self.client.patch(f"{SETTINGS_KEY}/{key}", data))

    def delete(self, setting_id: int) -> MutationResult:
        return self._mutation(
            "Setting deleted",
            "The setting has been deleted successfully.",
            "Failed to delete setting. Please try again.",
            not_found_is_success=True,
        ).run(lambda: self.client.delete(f"{SETTINGS_KEY}/{setting_id}"))
