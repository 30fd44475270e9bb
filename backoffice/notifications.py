from dataclasses import dataclass
from typing import Callable, List, Optional


DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str = ""
    variant: str = DEFAULT  # "default" or "destructive"


class Notifier:
    """Collects the toasts shown to the admin, an optional listener receives each one as it is sent"""

    def __init__(self, listener: Optional[Callable[[Notification], None]] = None) -> None:
        self.notifications: List[Notification] = []
        self.listener = listener

    def notify(self, title: str, description: str = "", variant: str = DEFAULT) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.notifications.append(notification)
        if self.listener:
            self.listener(notification)
        return notification

    def success(self, title: str, description: str = "") -> Notification:
        return self.notify(title, description, DEFAULT)

    def failure(self, title: str, description: str = "") -> Notification:
        return self.notify(title, description, DESTRUCTIVE)

    @property
    def last(self) -> Optional[Notification]:
        return self.notifications[-1] if self.notifications else None

    def clear(self):
        self.notifications.clear()
