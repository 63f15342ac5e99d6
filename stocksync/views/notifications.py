"""User-facing notifications (the dashboard's toasts)."""

from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel

from stocksync.utils.logger import get_logger

logger = get_logger("stocksync.views.notifications")


class Notification(BaseModel):
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class Notifier:
    """Collects notifications and forwards each one to an optional sink (e.g. the console)."""

    def __init__(self, sink: Callable[[Notification], None] | None = None):
        self._sink = sink
        self.notifications: list[Notification] = []

    def notify(self, title: str, description: str, variant: Literal["default", "destructive"] = "default") -> Notification:
        note = Notification(title=title, description=description, variant=variant)
        self.notifications.append(note)
        logger.debug("notification.raised", title=title, variant=variant)
        if self._sink is not None:
            self._sink(note)
        return note

    def success(self, title: str, description: str) -> Notification:
        return self.notify(title, description)

    def error(self, title: str, description: str) -> Notification:
        return self.notify(title, description, variant="destructive")

    @property
    def last(self) -> Notification | None:
        return self.notifications[-1] if self.notifications else None
