"""Core domain entities."""

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

__all__ = [
    # Reminder entities
    "Reminder",
    "RepeatInterval",
    "EarlyReminderChoice",
    "DEFAULT_ALL_DAY_HOUR",
    # Notification entities
    "NotificationContent",
    "NotificationRequest",
    "ScheduleKind",
    "SchedulePlan",
    "TriggerComponents",
]
