"""Import of reminder data written by the original menu-bar app."""

from pixs.infrastructure.legacy.reminder_migration import (
    LegacyLoadResult,
    RejectedRecord,
    legacy_reminder_id,
    load_legacy_reminders,
    migrate_reminder_record,
    parse_legacy_date,
    parse_legacy_payload,
)

__all__ = [
    "LegacyLoadResult",
    "RejectedRecord",
    "legacy_reminder_id",
    "load_legacy_reminders",
    "migrate_reminder_record",
    "parse_legacy_date",
    "parse_legacy_payload",
]
