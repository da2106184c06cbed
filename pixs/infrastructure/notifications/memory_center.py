"""
In-process notification center.

Holds pending calendar-triggered requests keyed by identifier and tracks
when each one fires next. Delivery is left to NotificationDispatcher.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from pixs.config import get_logger
from pixs.core.entities.notification import NotificationRequest
from pixs.core.exceptions import NotificationPermissionError, NotificationSubmitError
from pixs.core.interfaces.notifications import INotificationCenter

logger = get_logger(__name__)


@dataclass
class PendingNotification:
    """A scheduled request and the next minute it fires."""

    request: NotificationRequest
    next_fire: datetime


class InMemoryNotificationCenter(INotificationCenter):
    """
    Notification center backed by a dict.

    Authorization starts undetermined; ``submit`` is refused until
    ``request_authorization`` has granted it. Pass ``authorized`` to
    pre-seed the decision.
    """

    def __init__(
        self,
        authorized: bool | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._authorized = authorized
        self._clock = clock or datetime.now
        self._pending: dict[str, PendingNotification] = {}

    @property
    def authorized(self) -> bool:
        return bool(self._authorized)

    def set_authorized(self, granted: bool) -> None:
        """Record the user's permission decision."""
        self._authorized = granted

    async def request_authorization(self) -> bool:
        """Grant permission unless it was explicitly denied."""
        if self._authorized is None:
            self._authorized = True
        logger.info("notification_authorization", granted=self._authorized)
        return self._authorized

    async def cancel(self, identifiers: set[str]) -> None:
        """Remove pending requests. Unknown identifiers are ignored."""
        for identifier in identifiers:
            if self._pending.pop(identifier, None) is not None:
                logger.debug("notification_cancelled", identifier=identifier)

    async def submit(self, request: NotificationRequest) -> None:
        """Add or replace a pending request."""
        if not self._authorized:
            raise NotificationPermissionError(request.identifier)

        next_fire = request.trigger.next_fire_after(self._clock())
        if next_fire is None:
            raise NotificationSubmitError(request.identifier, "trigger never fires")

        self._pending[request.identifier] = PendingNotification(request, next_fire)
        logger.debug(
            "notification_scheduled",
            identifier=request.identifier,
            next_fire=next_fire.isoformat(),
            repeats=request.trigger.repeats,
        )

    async def pending(self) -> list[NotificationRequest]:
        """List pending requests, soonest first."""
        entries = sorted(self._pending.values(), key=lambda p: p.next_fire)
        return [entry.request for entry in entries]

    def next_fire(self, identifier: str) -> datetime | None:
        """Return when a pending request fires next, or None if not pending."""
        entry = self._pending.get(identifier)
        return entry.next_fire if entry else None

    def due(self, now: datetime) -> list[NotificationRequest]:
        """List requests whose next fire time is at or before ``now``."""
        entries = sorted(
            (p for p in self._pending.values() if p.next_fire <= now),
            key=lambda p: p.next_fire,
        )
        return [entry.request for entry in entries]

    def mark_delivered(self, identifier: str, now: datetime) -> None:
        """
        Advance a fired request.

        One-off requests are removed; repeating ones move to their next
        occurrence after ``now``, skipping any that were missed.
        """
        entry = self._pending.get(identifier)
        if entry is None:
            return

        next_fire = None
        if entry.request.trigger.repeats:
            next_fire = entry.request.trigger.next_fire_after(now)

        if next_fire is None:
            del self._pending[identifier]
        else:
            entry.next_fire = next_fire

    def __len__(self) -> int:
        return len(self._pending)
