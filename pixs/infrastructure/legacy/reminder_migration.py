"""
Legacy reminder data migration.

The menu-bar app kept reminders as one JSON array under the
``pixelnotes_reminders`` defaults key. Records written before repeat and
early-warning support lack those fields, dates are Apple reference-date
seconds, and keys are camelCase. Every record is passed through
``migrate_reminder_record`` before it becomes a Reminder, so the rest of
the code only ever sees complete values.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from uuid import NAMESPACE_URL, UUID, uuid5

from pydantic import ValidationError as PydanticValidationError

from pixs.config import get_logger
from pixs.core.entities.reminder import EarlyReminderChoice, Reminder, RepeatInterval
from pixs.core.exceptions import LegacyImportError

logger = get_logger(__name__)

LEGACY_DEFAULTS_KEY = "pixelnotes_reminders"

# Foundation's Date encodes as seconds since 2001-01-01 00:00 UTC.
APPLE_REFERENCE_DATE = datetime(2001, 1, 1, tzinfo=timezone.utc)

_LEGACY_ID_NAMESPACE = uuid5(NAMESPACE_URL, "pixs://legacy-reminder")

_KEY_MAP = {
    "id": "id",
    "title": "title",
    "date": "date",
    "isComplete": "is_complete",
    "noteId": "note_id",
    "hasDate": "has_date",
    "hasTime": "has_time",
    "repeatInterval": "repeat_interval",
    "earlyReminder": "early_reminder",
}
_KNOWN_FIELDS = frozenset(_KEY_MAP.values())

_FIELD_DEFAULTS: dict[str, Any] = {
    "is_complete": False,
    "note_id": None,
    "has_date": True,
    "has_time": True,
    "repeat_interval": RepeatInterval.NEVER,
    "early_reminder": EarlyReminderChoice.NONE,
}


@dataclass
class RejectedRecord:
    """A legacy record that could not be turned into a Reminder."""

    index: int
    reason: str
    record: Any = None


@dataclass
class LegacyLoadResult:
    """Reminders read from a legacy export."""

    reminders: list[Reminder] = field(default_factory=list)
    rejected: list[RejectedRecord] = field(default_factory=list)


def parse_legacy_date(value: Any) -> datetime:
    """
    Parse a stored date.

    Accepts Apple reference-date seconds (the Foundation default) or an
    ISO 8601 string. Aware results are left aware; Reminder converts them
    to local time.
    """
    if isinstance(value, bool):
        raise ValueError(f"Unsupported date value: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return APPLE_REFERENCE_DATE + timedelta(seconds=value)
        except (OverflowError, ValueError) as e:
            raise ValueError(f"Date out of range: {value!r}") from e
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise ValueError(f"Unsupported date value: {value!r}")


def legacy_reminder_id(title: str, raw_date: Any) -> UUID:
    """Derive a stable id for a record that was stored without one."""
    return uuid5(_LEGACY_ID_NAMESPACE, f"{title}|{raw_date}")


def _coerce_enum(enum_cls: type, value: Any, default: Any) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "yes", "1"):
            return True
        if text in ("false", "no", "0"):
            return False
    return default


def migrate_reminder_record(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Bring one legacy record up to the current Reminder shape.

    Total for any dict that carries a title and a date: missing or
    unrecognized optional fields take their defaults. Does not mutate
    ``raw``.

    Raises:
        ValueError: the record has no usable title or date.
    """
    if not isinstance(raw, dict):
        raise ValueError("record is not an object")

    # camelCase from the app, snake_case from newer exports; others dropped
    data: dict[str, Any] = {}
    for key, value in raw.items():
        target = _KEY_MAP.get(key, key)
        if target in _KNOWN_FIELDS:
            data[target] = value

    title = data.get("title")
    if not isinstance(title, str):
        raise ValueError("missing title")
    if "date" not in data or data["date"] is None:
        raise ValueError("missing date")

    raw_date = data["date"]
    migrated: dict[str, Any] = {
        "title": title,
        "date": parse_legacy_date(raw_date),
    }

    raw_id = data.get("id")
    migrated["id"] = UUID(str(raw_id)) if raw_id else legacy_reminder_id(title, raw_date)

    for name, default in _FIELD_DEFAULTS.items():
        value = data.get(name)
        if value is None:
            migrated[name] = default
        elif name == "repeat_interval":
            migrated[name] = _coerce_enum(RepeatInterval, value, default)
        elif name == "early_reminder":
            migrated[name] = _coerce_enum(EarlyReminderChoice, value, default)
        elif name == "note_id":
            migrated[name] = UUID(str(value))
        else:
            migrated[name] = _coerce_bool(value, default)

    return migrated


def parse_legacy_payload(payload: Any) -> LegacyLoadResult:
    """Migrate every record of an already-decoded legacy payload."""
    if isinstance(payload, dict):
        payload = payload.get(LEGACY_DEFAULTS_KEY, [])
    if not isinstance(payload, list):
        raise ValueError("expected a list of reminders")

    result = LegacyLoadResult()
    for index, raw in enumerate(payload):
        try:
            result.reminders.append(Reminder(**migrate_reminder_record(raw)))
        except (ValueError, TypeError, OverflowError, PydanticValidationError) as e:
            result.rejected.append(RejectedRecord(index=index, reason=str(e), record=raw))

    return result


def load_legacy_reminders(path: Path) -> LegacyLoadResult:
    """
    Read and migrate a legacy reminder export.

    Raises:
        LegacyImportError: the file is missing, not UTF-8 or not valid JSON.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LegacyImportError(str(path), f"cannot read file: {e}") from e
    except UnicodeDecodeError as e:
        raise LegacyImportError(str(path), f"not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise LegacyImportError(str(path), f"invalid JSON: {e}") from e

    try:
        result = parse_legacy_payload(payload)
    except ValueError as e:
        raise LegacyImportError(str(path), str(e)) from e

    logger.info(
        "legacy_reminders_loaded",
        path=str(path),
        loaded=len(result.reminders),
        rejected=len(result.rejected),
    )
    return result
