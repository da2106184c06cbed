"""Tests for legacy reminder migration."""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from uuid import UUID

import pytest

from pixs.core.entities.reminder import EarlyReminderChoice, RepeatInterval
from pixs.core.exceptions import LegacyImportError
from pixs.infrastructure.legacy import (
    legacy_reminder_id,
    load_legacy_reminders,
    migrate_reminder_record,
    parse_legacy_date,
    parse_legacy_payload,
)

# 2024-06-01T09:00:00Z in seconds since 2001-01-01
JUNE_FIRST_APPLE = (
    datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc) - datetime(2001, 1, 1, tzinfo=timezone.utc)
).total_seconds()


class TestParseLegacyDate:
    def test_apple_reference_seconds(self):
        assert parse_legacy_date(JUNE_FIRST_APPLE) == datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)

    def test_zero_is_reference_date(self):
        assert parse_legacy_date(0) == datetime(2001, 1, 1, tzinfo=timezone.utc)

    def test_iso_string_with_z(self):
        parsed = parse_legacy_date("2024-06-01T09:00:00Z")
        assert parsed == datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)

    def test_naive_iso_string(self):
        assert parse_legacy_date("2024-06-01T09:00:00") == datetime(2024, 6, 1, 9, 0)

    @pytest.mark.parametrize("value", [4e11, -4e11, float("inf"), float("nan")])
    def test_out_of_range_seconds_raise_value_error(self, value):
        with pytest.raises(ValueError):
            parse_legacy_date(value)

    @pytest.mark.parametrize("value", [True, None, "", "tomorrow", [1]])
    def test_rejects_unusable_values(self, value):
        with pytest.raises(ValueError):
            parse_legacy_date(value)


class TestMigrateReminderRecord:
    def test_oldest_record_gets_defaults(self):
        raw = {
            "id": "3F2504E0-4F89-11D3-9A0C-0305E82C3301",
            "title": "Call the bank",
            "date": JUNE_FIRST_APPLE,
            "isComplete": False,
        }

        migrated = migrate_reminder_record(raw)

        assert migrated["id"] == UUID("3F2504E0-4F89-11D3-9A0C-0305E82C3301")
        assert migrated["has_date"] is True
        assert migrated["has_time"] is True
        assert migrated["repeat_interval"] == RepeatInterval.NEVER
        assert migrated["early_reminder"] == EarlyReminderChoice.NONE
        assert migrated["note_id"] is None

    def test_full_record_keeps_values(self):
        note = "7C9E6679-7425-40DE-944B-E07FC1F90AE7"
        raw = {
            "id": "3F2504E0-4F89-11D3-9A0C-0305E82C3301",
            "title": "Standup",
            "date": "2024-06-03T14:30:00",
            "isComplete": True,
            "noteId": note,
            "hasDate": True,
            "hasTime": False,
            "repeatInterval": "Weekly",
            "earlyReminder": "30 min before",
        }

        migrated = migrate_reminder_record(raw)

        assert migrated["is_complete"] is True
        assert migrated["note_id"] == UUID(note)
        assert migrated["has_time"] is False
        assert migrated["repeat_interval"] == RepeatInterval.WEEKLY
        assert migrated["early_reminder"] == EarlyReminderChoice.THIRTY_MINUTES

    def test_unknown_enum_values_fall_back(self):
        raw = {
            "title": "t",
            "date": 0,
            "repeatInterval": "Fortnightly",
            "earlyReminder": "2 days before",
        }

        migrated = migrate_reminder_record(raw)

        assert migrated["repeat_interval"] == RepeatInterval.NEVER
        assert migrated["early_reminder"] == EarlyReminderChoice.NONE

    def test_snake_case_keys_and_unknown_keys(self):
        migrated = migrate_reminder_record(
            {"title": "t", "date": 0, "repeat_interval": "Daily", "color": "red"}
        )

        assert migrated["repeat_interval"] == RepeatInterval.DAILY
        assert "color" not in migrated

    @pytest.mark.parametrize(
        ("stored", "expected"),
        [("false", False), ("TRUE", True), (0, False), (1, True), ("maybe", True), ([], True)],
    )
    def test_boolean_flags_from_strings_and_numbers(self, stored, expected):
        migrated = migrate_reminder_record({"title": "t", "date": 0, "hasTime": stored})
        assert migrated["has_time"] is expected

    def test_string_false_keeps_reminder_incomplete(self):
        migrated = migrate_reminder_record({"title": "t", "date": 0, "isComplete": "false"})
        assert migrated["is_complete"] is False

    def test_missing_id_is_deterministic(self):
        raw = {"title": "t", "date": 12345.0}

        first = migrate_reminder_record(raw)["id"]
        second = migrate_reminder_record(dict(raw))["id"]

        assert first == second == legacy_reminder_id("t", 12345.0)

    def test_does_not_mutate_input(self):
        raw = {"title": "t", "date": 0}
        migrate_reminder_record(raw)
        assert raw == {"title": "t", "date": 0}

    @pytest.mark.parametrize(
        "raw",
        [{"date": 0}, {"title": "t"}, {"title": "t", "date": None}, {"title": 5, "date": 0}, "x"],
    )
    def test_rejects_incomplete_records(self, raw):
        with pytest.raises(ValueError):
            migrate_reminder_record(raw)


class TestParseLegacyPayload:
    def test_list_payload_with_rejections(self):
        result = parse_legacy_payload(
            [
                {"title": "good", "date": JUNE_FIRST_APPLE},
                {"title": "no date"},
                {"title": "bad note", "date": 0, "noteId": "not-a-uuid"},
            ]
        )

        assert [r.title for r in result.reminders] == ["good"]
        assert [r.index for r in result.rejected] == [1, 2]

    def test_out_of_range_date_rejects_only_that_record(self):
        result = parse_legacy_payload(
            [{"title": "ok", "date": 7e8}, {"title": "far future", "date": 4e11}]
        )

        assert [r.title for r in result.reminders] == ["ok"]
        assert [r.index for r in result.rejected] == [1]

    def test_dates_become_local_naive(self):
        result = parse_legacy_payload([{"title": "t", "date": JUNE_FIRST_APPLE}])

        expected = (
            datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        )
        assert result.reminders[0].date == expected

    def test_defaults_dict_payload(self):
        result = parse_legacy_payload(
            {"pixelnotes_reminders": [{"title": "t", "date": 0}], "other": 1}
        )
        assert len(result.reminders) == 1

    def test_rejects_non_list(self):
        with pytest.raises(ValueError):
            parse_legacy_payload("nope")


class TestLoadLegacyReminders:
    def test_load_file(self, tmp_path: Path):
        path = tmp_path / "reminders.json"
        path.write_text(
            json.dumps([{"title": "t", "date": JUNE_FIRST_APPLE + timedelta(days=1).total_seconds()}])
        )

        result = load_legacy_reminders(path)

        assert len(result.reminders) == 1

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(LegacyImportError) as exc_info:
            load_legacy_reminders(tmp_path / "missing.json")
        assert exc_info.value.code == "LEGACY_IMPORT_FAILED"

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(LegacyImportError):
            load_legacy_reminders(path)

    def test_wrong_shape(self, tmp_path: Path):
        path = tmp_path / "shape.json"
        path.write_text('"just a string"')

        with pytest.raises(LegacyImportError):
            load_legacy_reminders(path)

    def test_infinity_literal_is_rejected_per_record(self, tmp_path: Path):
        path = tmp_path / "infinite.json"
        path.write_text('[{"title": "ok", "date": 0}, {"title": "never", "date": Infinity}]')

        result = load_legacy_reminders(path)

        assert [r.title for r in result.reminders] == ["ok"]
        assert [r.index for r in result.rejected] == [1]

    def test_non_utf8_file(self, tmp_path: Path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'[{"title": "caf\xff", "date": 0}]')

        with pytest.raises(LegacyImportError) as exc_info:
            load_legacy_reminders(path)
        assert exc_info.value.code == "LEGACY_IMPORT_FAILED"
