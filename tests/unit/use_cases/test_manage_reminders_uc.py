"""Tests for ReminderService."""

from datetime import datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from pixs.application.use_cases import ReminderChanges, ReminderService
from pixs.core.entities.reminder import EarlyReminderChoice, Reminder, RepeatInterval
from pixs.core.exceptions import ReminderNotFoundError


@pytest.fixture
def mock_store(sample_reminder: Reminder) -> AsyncMock:
    store = AsyncMock()
    store.get.return_value = sample_reminder
    store.create.side_effect = lambda r: r
    store.update.side_effect = lambda r: r
    store.delete.return_value = True
    store.list_reminders.return_value = [sample_reminder]
    store.list_schedulable.return_value = [sample_reminder]
    return store


@pytest.fixture
def service(mock_store, scheduler) -> ReminderService:
    return ReminderService(mock_store, scheduler)


async def _pending_ids(center) -> set[str]:
    return {r.identifier for r in await center.pending()}


class TestReminderService:
    async def test_create_schedules(self, service, mock_store, center):
        reminder = Reminder(
            title="Dentist",
            date=datetime(2024, 6, 1),
            early_reminder=EarlyReminderChoice.FIFTEEN_MINUTES,
        )

        created = await service.create(reminder)

        mock_store.create.assert_awaited_once_with(reminder)
        assert await _pending_ids(center) == {str(created.id), f"{created.id}-early"}

    async def test_get_missing(self, service, mock_store):
        mock_store.get.return_value = None

        with pytest.raises(ReminderNotFoundError) as exc_info:
            await service.get(uuid4())
        assert exc_info.value.code == "REMINDER_NOT_FOUND"

    async def test_list_passes_paging(self, service, mock_store):
        await service.list_reminders(include_complete=False, limit=5, offset=10)

        mock_store.list_reminders.assert_awaited_once_with(
            include_complete=False, limit=5, offset=10
        )

    async def test_update_scheduling_field_reschedules(
        self, service, sample_reminder, center
    ):
        updated = await service.update(
            sample_reminder.id,
            ReminderChanges(date=datetime(2024, 6, 2, 18, 0), repeat_interval=RepeatInterval.DAILY),
        )

        assert updated.repeat_interval == RepeatInterval.DAILY
        pending = await center.pending()
        assert [r.identifier for r in pending] == [str(sample_reminder.id)]
        assert pending[0].trigger.matched_fields() == {"hour": 18, "minute": 0}

    async def test_update_note_only_does_not_reschedule(
        self, mock_store, sample_reminder
    ):
        scheduler = AsyncMock()
        service = ReminderService(mock_store, scheduler)
        note_id = uuid4()

        updated = await service.update(sample_reminder.id, ReminderChanges(note_id=note_id))

        assert updated.note_id == note_id
        mock_store.update.assert_awaited_once()
        scheduler.reconcile.assert_not_awaited()

    async def test_update_can_clear_note(self, mock_store, sample_reminder):
        sample_reminder.note_id = uuid4()
        service = ReminderService(mock_store, AsyncMock())

        updated = await service.update(sample_reminder.id, ReminderChanges(note_id=None))

        assert updated.note_id is None

    async def test_update_ignores_null_for_required_fields(self, service, sample_reminder):
        updated = await service.update(sample_reminder.id, ReminderChanges(title=None))
        assert updated.title == "Water the plants"

    async def test_toggle_complete_cancels_then_rearms(self, service, sample_reminder, center):
        sample_reminder.early_reminder = EarlyReminderChoice.FIVE_MINUTES
        await service.create(sample_reminder)
        assert len(center) == 2

        done = await service.toggle_complete(sample_reminder.id)
        assert done.is_complete is True
        assert len(center) == 0

        reopened = await service.toggle_complete(sample_reminder.id)
        assert reopened.is_complete is False
        assert await _pending_ids(center) == {
            str(sample_reminder.id),
            f"{sample_reminder.id}-early",
        }

    async def test_delete_cancels(self, service, sample_reminder, center):
        await service.create(sample_reminder)

        await service.delete(sample_reminder.id)

        assert len(center) == 0

    async def test_delete_missing(self, service, mock_store):
        mock_store.delete.return_value = False

        with pytest.raises(ReminderNotFoundError):
            await service.delete(uuid4())

    async def test_preview_does_not_submit(self, service, sample_reminder, center):
        plan = await service.preview(sample_reminder.id)

        assert plan.main is not None
        assert len(center) == 0

    async def test_resync_all(self, service, mock_store, center, now):
        overdue = Reminder(title="Overdue", date=datetime(2024, 5, 1, 9, 0))
        mock_store.list_schedulable.return_value = [
            Reminder(title="Future", date=datetime(2024, 6, 1, 9, 0)),
            overdue,
        ]

        result = await service.resync_all()

        assert result.reminders == 2
        assert result.submitted == 1
        assert result.skipped == 1
        assert result.failed == 0
        assert len(center) == 1
