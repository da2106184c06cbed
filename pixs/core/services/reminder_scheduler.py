"""
Reminder Scheduler.

Derives the notification triggers a reminder should own and keeps the
notification center in sync with them. Every call starts from scratch:
both identifiers of the reminder are cancelled, then the main and the
optional early request are recomputed from the reminder's current values.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from pixs.config import get_logger
from pixs.core.entities.notification import (
    NotificationContent,
    NotificationRequest,
    ScheduleKind,
    SchedulePlan,
    TriggerComponents,
)
from pixs.core.entities.reminder import (
    DEFAULT_ALL_DAY_HOUR,
    EarlyReminderChoice,
    Reminder,
    RepeatInterval,
)
from pixs.core.exceptions import NotificationPermissionError
from pixs.core.interfaces.notifications import INotificationCenter

logger = get_logger(__name__)

EARLY_SUFFIX = "-early"
EARLY_TITLE_PREFIX = "Upcoming: "
DEFAULT_BRAND_TITLE = "Px Reminder"


def notification_identifiers(reminder_id: UUID | str) -> tuple[str, str]:
    """Return the (main, early) notification identifiers of a reminder."""
    main = str(reminder_id)
    return main, main + EARLY_SUFFIX


def effective_time(reminder: Reminder, all_day_hour: int = DEFAULT_ALL_DAY_HOUR) -> datetime:
    """Resolve the moment a reminder is due, applying the all-day default."""
    return reminder.effective_time(all_day_hour)


def trigger_components(base: datetime, repeat: RepeatInterval) -> TriggerComponents:
    """
    Extract the calendar fields a trigger matches on.

    One-off triggers pin the full date. Repeating ones keep only the
    fields that stay constant between occurrences, so they recur across
    day and month boundaries.
    """
    if repeat is RepeatInterval.DAILY:
        return TriggerComponents(hour=base.hour, minute=base.minute, repeats=True)
    if repeat is RepeatInterval.WEEKLY:
        return TriggerComponents(
            weekday=base.isoweekday(), hour=base.hour, minute=base.minute, repeats=True
        )
    if repeat is RepeatInterval.MONTHLY:
        return TriggerComponents(
            day=base.day, hour=base.hour, minute=base.minute, repeats=True
        )
    return TriggerComponents(
        year=base.year,
        month=base.month,
        day=base.day,
        hour=base.hour,
        minute=base.minute,
        repeats=False,
    )


class ReminderScheduler:
    """
    Keeps a reminder's local notifications consistent with its state.

    Takes reminders as plain values; never reads or mutates the
    reminder collection. Notification failures are logged and dropped.
    """

    def __init__(
        self,
        notification_center: INotificationCenter,
        brand_title: str = DEFAULT_BRAND_TITLE,
        all_day_hour: int = DEFAULT_ALL_DAY_HOUR,
        sound: str | None = "default",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._center = notification_center
        self._brand_title = brand_title
        self._all_day_hour = all_day_hour
        self._sound = sound
        self._clock = clock or datetime.now

    @property
    def all_day_hour(self) -> int:
        return self._all_day_hour

    def plan(self, reminder: Reminder, now: datetime | None = None) -> SchedulePlan:
        """
        Compute what ``reconcile`` would do for ``reminder`` at ``now``.

        Pure: no calls are made to the notification center.
        """
        now = now or self._clock()
        main_id, early_id = notification_identifiers(reminder.id)
        plan = SchedulePlan(reminder_id=reminder.id, cancel=[main_id, early_id])

        if not reminder.is_schedulable:
            return plan

        base = effective_time(reminder, self._all_day_hour)
        candidates = [
            NotificationRequest(
                identifier=main_id,
                content=NotificationContent(
                    title=self._brand_title, body=reminder.title, sound=self._sound
                ),
                trigger=trigger_components(base, reminder.repeat_interval),
                base_time=base,
                kind=ScheduleKind.MAIN,
            )
        ]

        if reminder.early_reminder is not EarlyReminderChoice.NONE:
            early_base = base - reminder.early_reminder.offset
            candidates.append(
                NotificationRequest(
                    identifier=early_id,
                    content=NotificationContent(
                        title=EARLY_TITLE_PREFIX + reminder.title,
                        body=f"In {reminder.early_reminder.label}",
                        sound=self._sound,
                    ),
                    trigger=trigger_components(early_base, reminder.repeat_interval),
                    base_time=early_base,
                    kind=ScheduleKind.EARLY,
                )
            )

        # One-off triggers in the past would never match again; repeating
        # ones still have future occurrences. Main and early are judged
        # separately, so an elapsed early warning is dropped on its own.
        for request in candidates:
            if request.trigger.repeats or request.base_time > now:
                plan.submit.append(request)
            else:
                plan.skipped.append(request)

        return plan

    async def reconcile(self, reminder: Reminder) -> SchedulePlan:
        """
        Replace the reminder's scheduled notifications with freshly derived ones.

        Idempotent: calling it twice with the same reminder leaves the
        notification center in the same state as calling it once.
        """
        plan = self.plan(reminder)
        await self._cancel(plan.cancel)

        for request in plan.skipped:
            logger.info(
                "notification_skipped_past",
                identifier=request.identifier,
                kind=request.kind.value,
                base_time=request.base_time.isoformat(),
            )

        for request in plan.submit:
            if not await self._submit(request):
                plan.failed.append(request.identifier)

        logger.info(
            "reminder_reconciled",
            reminder_id=str(reminder.id),
            submitted=len(plan.submit) - len(plan.failed),
            skipped=len(plan.skipped),
            failed=len(plan.failed),
        )
        return plan

    async def cancel_all(self, reminder_id: UUID | str) -> None:
        """Cancel both the main and the early notification of a reminder."""
        await self._cancel(list(notification_identifiers(reminder_id)))
        logger.info("reminder_notifications_cancelled", reminder_id=str(reminder_id))

    async def _cancel(self, identifiers: list[str]) -> None:
        try:
            await self._center.cancel(set(identifiers))
        except Exception:
            logger.warning("notification_cancel_failed", identifiers=identifiers, exc_info=True)

    async def _submit(self, request: NotificationRequest) -> bool:
        try:
            await self._center.submit(request)
        except NotificationPermissionError:
            logger.warning("notification_permission_denied", identifier=request.identifier)
            return False
        except Exception:
            logger.warning(
                "notification_submit_failed", identifier=request.identifier, exc_info=True
            )
            return False
        return True
