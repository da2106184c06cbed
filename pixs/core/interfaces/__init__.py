"""Core interfaces (ports) for dependency injection."""

from pixs.core.interfaces.notifications import INotificationCenter, INotificationPresenter
from pixs.core.interfaces.storage import IReminderStore

__all__ = [
    "INotificationCenter",
    "INotificationPresenter",
    "IReminderStore",
]
