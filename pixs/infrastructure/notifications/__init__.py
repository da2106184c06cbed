"""Local notification center and delivery."""

from pixs.infrastructure.notifications.dispatcher import NotificationDispatcher
from pixs.infrastructure.notifications.memory_center import (
    InMemoryNotificationCenter,
    PendingNotification,
)
from pixs.infrastructure.notifications.presenters import (
    LoggingPresenter,
    OsascriptPresenter,
    create_presenter,
)

__all__ = [
    "InMemoryNotificationCenter",
    "PendingNotification",
    "NotificationDispatcher",
    "LoggingPresenter",
    "OsascriptPresenter",
    "create_presenter",
]
