"""Core domain services."""

from pixs.core.services.reminder_scheduler import (
    EARLY_SUFFIX,
    ReminderScheduler,
    effective_time,
    notification_identifiers,
    trigger_components,
)

__all__ = [
    "EARLY_SUFFIX",
    "ReminderScheduler",
    "effective_time",
    "notification_identifiers",
    "trigger_components",
]
