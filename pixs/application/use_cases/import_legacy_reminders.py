"""
Import Legacy Reminders Use Case.

Loads the original app's reminder export, migrates each record and stores
the ones not already present, scheduling their notifications.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pixs.config import get_logger
from pixs.core.interfaces.storage import IReminderStore
from pixs.core.services.reminder_scheduler import ReminderScheduler
from pixs.infrastructure.legacy import RejectedRecord, load_legacy_reminders

logger = get_logger(__name__)


@dataclass
class LegacyImportResult:
    """Result of a legacy import."""

    imported: int = 0
    already_present: int = 0
    rejected: list[RejectedRecord] = field(default_factory=list)
    imported_ids: list[str] = field(default_factory=list)


class ImportLegacyRemindersUseCase:
    """Use case for importing reminders exported by the original app."""

    def __init__(self, store: IReminderStore, scheduler: ReminderScheduler) -> None:
        self._store = store
        self._scheduler = scheduler

    async def execute(self, path: Path) -> LegacyImportResult:
        """
        Import reminders from ``path``.

        Raises:
            LegacyImportError: the export cannot be read at all.
        """
        loaded = load_legacy_reminders(path)
        result = LegacyImportResult(rejected=loaded.rejected)

        for reminder in loaded.reminders:
            if await self._store.get(reminder.id) is not None:
                result.already_present += 1
                continue

            created = await self._store.create(reminder)
            await self._scheduler.reconcile(created)
            result.imported += 1
            result.imported_ids.append(str(created.id))

        for rejected in result.rejected:
            logger.warning("legacy_record_rejected", index=rejected.index, reason=rejected.reason)

        logger.info(
            "legacy_import_complete",
            imported=result.imported,
            already_present=result.already_present,
            rejected=len(result.rejected),
        )
        return result
