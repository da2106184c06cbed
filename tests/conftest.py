"""Pytest configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from pixs.config import reset_settings
from pixs.core.entities.reminder import Reminder
from pixs.core.services.reminder_scheduler import ReminderScheduler
from pixs.infrastructure.notifications import InMemoryNotificationCenter

# A Monday
FIXED_NOW = datetime(2024, 5, 20, 12, 0)


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point settings at a temp data dir and reset the cached instance."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("NOTIFY_PRESENTER", "log")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    return lambda: now


@pytest.fixture
def center(clock) -> InMemoryNotificationCenter:
    """Authorized notification center on the fixed clock."""
    return InMemoryNotificationCenter(authorized=True, clock=clock)


@pytest.fixture
def scheduler(center: InMemoryNotificationCenter, clock) -> ReminderScheduler:
    return ReminderScheduler(center, clock=clock)


@pytest.fixture
def sample_reminder() -> Reminder:
    """One-off reminder due in the future relative to FIXED_NOW."""
    return Reminder(
        title="Water the plants",
        date=datetime(2024, 6, 1, 9, 0),
    )
