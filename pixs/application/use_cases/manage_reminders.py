"""
Manage Reminders Use Case.

Every mutation is persisted first and then handed to the scheduler, so
the notification center always reflects what is stored.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from pixs.config import get_logger
from pixs.core.entities.notification import SchedulePlan
from pixs.core.entities.reminder import EarlyReminderChoice, Reminder, RepeatInterval
from pixs.core.exceptions import ReminderNotFoundError
from pixs.core.interfaces.storage import IReminderStore
from pixs.core.services.reminder_scheduler import ReminderScheduler

logger = get_logger(__name__)

# Fields that feed into trigger times or notification content.
SCHEDULING_FIELDS = frozenset(
    {
        "title",
        "date",
        "has_date",
        "has_time",
        "repeat_interval",
        "early_reminder",
        "is_complete",
    }
)

# Fields an update may clear by sending null.
NULLABLE_FIELDS = frozenset({"note_id"})


class ReminderChanges(BaseModel):
    """Partial update of a reminder; only explicitly set fields apply."""

    title: str | None = None
    date: datetime | None = None
    is_complete: bool | None = None
    note_id: UUID | None = None
    has_date: bool | None = None
    has_time: bool | None = None
    repeat_interval: RepeatInterval | None = None
    early_reminder: EarlyReminderChoice | None = None


@dataclass
class ResyncResult:
    """Counts from re-arming every stored reminder."""

    reminders: int = 0
    submitted: int = 0
    skipped: int = 0
    failed: int = 0


class ReminderService:
    """Create, edit, complete and delete reminders, keeping notifications in sync."""

    def __init__(self, store: IReminderStore, scheduler: ReminderScheduler) -> None:
        self._store = store
        self._scheduler = scheduler

    @property
    def all_day_hour(self) -> int:
        """Hour used for reminders without a time of day."""
        return self._scheduler.all_day_hour

    async def get(self, reminder_id: UUID) -> Reminder:
        reminder = await self._store.get(reminder_id)
        if reminder is None:
            raise ReminderNotFoundError(str(reminder_id))
        return reminder

    async def list_reminders(
        self, include_complete: bool = True, limit: int = 100, offset: int = 0
    ) -> list[Reminder]:
        return await self._store.list_reminders(
            include_complete=include_complete, limit=limit, offset=offset
        )

    async def create(self, reminder: Reminder) -> Reminder:
        """Store a new reminder and schedule its notifications."""
        created = await self._store.create(reminder)
        await self._scheduler.reconcile(created)
        return created

    async def update(self, reminder_id: UUID, changes: ReminderChanges) -> Reminder:
        """
        Apply ``changes`` to a stored reminder.

        Notifications are recomputed from scratch when any field that
        affects them changed; other edits leave them alone.
        """
        reminder = await self.get(reminder_id)
        updates = {
            name: value
            for name, value in changes.model_dump(exclude_unset=True).items()
            if value is not None or name in NULLABLE_FIELDS
        }

        touched = {
            name for name, value in updates.items() if getattr(reminder, name) != value
        }
        for name, value in updates.items():
            setattr(reminder, name, value)

        updated = await self._store.update(reminder)
        if touched & SCHEDULING_FIELDS:
            await self._scheduler.reconcile(updated)
        else:
            logger.debug("reminder_update_without_reschedule", reminder_id=str(reminder_id))
        return updated

    async def toggle_complete(self, reminder_id: UUID) -> Reminder:
        """Flip completion; completing tears notifications down, reopening re-arms them."""
        reminder = await self.get(reminder_id)
        reminder.is_complete = not reminder.is_complete
        updated = await self._store.update(reminder)

        if updated.is_complete:
            await self._scheduler.cancel_all(updated.id)
        else:
            await self._scheduler.reconcile(updated)
        return updated

    async def delete(self, reminder_id: UUID) -> None:
        """Delete a reminder and its notifications."""
        if not await self._store.delete(reminder_id):
            raise ReminderNotFoundError(str(reminder_id))
        await self._scheduler.cancel_all(reminder_id)

    async def preview(self, reminder_id: UUID) -> SchedulePlan:
        """Show what the scheduler would submit for a stored reminder right now."""
        return self._scheduler.plan(await self.get(reminder_id))

    async def resync_all(self) -> ResyncResult:
        """
        Reconcile every schedulable reminder.

        Run at startup: pending notifications do not survive a restart.
        """
        result = ResyncResult()
        for reminder in await self._store.list_schedulable():
            plan = await self._scheduler.reconcile(reminder)
            result.reminders += 1
            result.submitted += len(plan.submit) - len(plan.failed)
            result.skipped += len(plan.skipped)
            result.failed += len(plan.failed)

        logger.info(
            "reminders_resynced",
            reminders=result.reminders,
            submitted=result.submitted,
            skipped=result.skipped,
            failed=result.failed,
        )
        return result
