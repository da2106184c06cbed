"""
Abstract interfaces for the local notification service.

The notification center keeps pending calendar-triggered requests;
a presenter puts a fired notification in front of the user.
"""

from abc import ABC, abstractmethod

from pixs.core.entities.notification import NotificationContent, NotificationRequest


class INotificationCenter(ABC):
    """
    Abstract interface for scheduling local notifications.

    Both operations are best-effort. Submitting an identifier that is
    already pending replaces the earlier request.
    """

    @abstractmethod
    async def request_authorization(self) -> bool:
        """Ask for permission to show notifications; return whether granted."""
        pass

    @abstractmethod
    async def cancel(self, identifiers: set[str]) -> None:
        """Remove pending requests. Unknown identifiers are ignored."""
        pass

    @abstractmethod
    async def submit(self, request: NotificationRequest) -> None:
        """
        Add a pending request.

        Raises:
            NotificationPermissionError: permission was not granted.
            NotificationError: the request could not be scheduled.
        """
        pass

    @abstractmethod
    async def pending(self) -> list[NotificationRequest]:
        """List pending requests."""
        pass


class INotificationPresenter(ABC):
    """Abstract interface for displaying a fired notification."""

    @abstractmethod
    async def present(self, content: NotificationContent) -> bool:
        """Show the notification; return False if it could not be shown."""
        pass
