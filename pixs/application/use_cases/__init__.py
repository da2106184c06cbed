"""Application use cases."""

from pixs.application.use_cases.import_legacy_reminders import (
    ImportLegacyRemindersUseCase,
    LegacyImportResult,
)
from pixs.application.use_cases.manage_reminders import (
    ReminderChanges,
    ReminderService,
    ResyncResult,
)

__all__ = [
    "ImportLegacyRemindersUseCase",
    "LegacyImportResult",
    "ReminderChanges",
    "ReminderService",
    "ResyncResult",
]
