"""
Notification dispatcher.

Polls the in-process notification center and presents every request
whose trigger has come due. Presentation failures are logged and the
request is advanced anyway; nothing is retried.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime

from pixs.config import get_logger
from pixs.core.interfaces.notifications import INotificationPresenter
from pixs.infrastructure.notifications.memory_center import InMemoryNotificationCenter

logger = get_logger(__name__)


class NotificationDispatcher:
    """Background delivery loop for InMemoryNotificationCenter."""

    def __init__(
        self,
        center: InMemoryNotificationCenter,
        presenter: INotificationPresenter,
        poll_interval: float = 15.0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._center = center
        self._presenter = presenter
        self.poll_interval = poll_interval
        self._clock = clock or datetime.now
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self, now: datetime | None = None) -> int:
        """
        Deliver everything due at ``now``.

        Returns:
            Number of notifications presented successfully.
        """
        now = now or self._clock()
        delivered = 0

        for request in self._center.due(now):
            try:
                shown = await self._presenter.present(request.content)
            except Exception:
                logger.error(
                    "notification_present_error",
                    identifier=request.identifier,
                    exc_info=True,
                )
                shown = False

            if shown:
                delivered += 1
            else:
                logger.warning("notification_not_presented", identifier=request.identifier)

            self._center.mark_delivered(request.identifier, now)

        return delivered

    def start(self) -> None:
        """Start the polling loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run_loop())
        logger.info("notification_dispatcher_started", poll_interval=self.poll_interval)

    async def stop(self) -> None:
        """Stop the polling loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("notification_dispatcher_stopped")

    async def _run_loop(self) -> None:
        while True:
            try:
                await self.run_once()
            except Exception:
                logger.error("notification_dispatch_failed", exc_info=True)
            await asyncio.sleep(self.poll_interval)
