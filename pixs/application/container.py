"""
Application container.

Wires infrastructure implementations to core services. One container is
created by the application root and handed to whoever needs it; nothing
in the reminder path reaches for module-level singletons.
"""

from dataclasses import dataclass

from pixs.application.use_cases import ImportLegacyRemindersUseCase, ReminderService
from pixs.config import Settings, get_logger
from pixs.core.interfaces.storage import IReminderStore
from pixs.core.services.reminder_scheduler import ReminderScheduler
from pixs.infrastructure.notifications import (
    InMemoryNotificationCenter,
    NotificationDispatcher,
    create_presenter,
)
from pixs.infrastructure.storage.sqlite import ConnectionPool, SQLiteReminderStore
from pixs.infrastructure.storage.sqlite.migrations import run_migrations

logger = get_logger(__name__)


@dataclass
class AppContainer:
    """Explicitly owned application state."""

    settings: Settings
    store: IReminderStore
    notification_center: InMemoryNotificationCenter
    scheduler: ReminderScheduler
    dispatcher: NotificationDispatcher
    reminders: ReminderService
    legacy_import: ImportLegacyRemindersUseCase
    pool: ConnectionPool | None = None

    async def startup(self) -> None:
        """
        Bring the reminder subsystem up.

        Permission is requested once here; a denial is logged and every
        later submission degrades to a logged no-op. If any step fails,
        whatever was already opened is released before the error propagates.
        """
        try:
            if self.pool is not None:
                await run_migrations(self.pool.db_path)
                await self.pool.initialize()

            granted = await self.notification_center.request_authorization()
            if not granted:
                logger.warning("notifications_disabled", reason="permission_denied")

            await self.reminders.resync_all()

            if self.settings.notifications.dispatcher_enabled:
                self.dispatcher.start()
        except Exception:
            await self.shutdown()
            raise

    async def shutdown(self) -> None:
        """Stop delivery and release the database."""
        await self.dispatcher.stop()
        if self.pool is not None:
            await self.pool.close()


def build_container(
    settings: Settings,
    store: IReminderStore | None = None,
    notification_center: InMemoryNotificationCenter | None = None,
) -> AppContainer:
    """Create a container from settings, optionally overriding adapters."""
    pool = None
    if store is None:
        pool = ConnectionPool(
            db_path=settings.storage.db_path,
            pool_size=settings.storage.pool_size,
            busy_timeout=settings.storage.busy_timeout,
        )
        store = SQLiteReminderStore(pool)

    # An empty center has len() == 0, so test for None explicitly.
    center = notification_center
    if center is None:
        center = InMemoryNotificationCenter()
    notify = settings.notifications
    scheduler = ReminderScheduler(
        center,
        brand_title=notify.brand_title,
        all_day_hour=notify.all_day_hour,
        sound=notify.sound,
    )
    dispatcher = NotificationDispatcher(
        center,
        create_presenter(notify),
        poll_interval=notify.poll_interval,
    )

    return AppContainer(
        settings=settings,
        store=store,
        notification_center=center,
        scheduler=scheduler,
        dispatcher=dispatcher,
        reminders=ReminderService(store, scheduler),
        legacy_import=ImportLegacyRemindersUseCase(store, scheduler),
        pool=pool,
    )
