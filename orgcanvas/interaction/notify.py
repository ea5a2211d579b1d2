"""Short-lived user notifications (toasts) raised by canvas actions."""

import logging
from enum import Enum
from typing import Protocol

from pydantic import BaseModel

from orgcanvas.utils.identifiers import generate_notification_id, utc_timestamp

logger = logging.getLogger(__name__)


class NotificationLevel(str, Enum):
    info = "info"
    success = "success"
    error = "error"


class Notification(BaseModel):
    """one message shown to the user."""

    notification_id: str
    level: NotificationLevel
    message: str
    created_at: str


class Notifier(Protocol):
    """Protocol for surfacing action outcomes to the user."""

    def info(self, message: str) -> None:
        ...

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class ListNotifier:
    """keeps notifications in a list until a UI drains them."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def _push(self, level: NotificationLevel, message: str) -> None:
        self.notifications.append(
            Notification(
                notification_id=generate_notification_id(),
                level=level,
                message=message,
                created_at=utc_timestamp(),
            )
        )

    def info(self, message: str) -> None:
        self._push(NotificationLevel.info, message)

    def success(self, message: str) -> None:
        self._push(NotificationLevel.success, message)

    def error(self, message: str) -> None:
        self._push(NotificationLevel.error, message)

    def messages(self, level: NotificationLevel | None = None) -> list[str]:
        return [n.message for n in self.notifications if level is None or n.level == level]

    def drain(self) -> list[Notification]:
        """Return and forget every pending notification."""
        drained, self.notifications = self.notifications, []
        return drained


class LogNotifier:
    """writes notifications to the log (headless sessions)."""

    def __init__(self, log: logging.Logger = logger) -> None:
        self.log = log

    def info(self, message: str) -> None:
        self.log.info(message)

    def success(self, message: str) -> None:
        self.log.info(message)

    def error(self, message: str) -> None:
        self.log.error(message)
