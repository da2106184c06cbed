"""Reminder entity and its scheduling options."""

from datetime import datetime, timedelta
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ALL_DAY_HOUR = 9


class RepeatInterval(str, Enum):
    """How often a reminder recurs."""

    NEVER = "Never"
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"

    @property
    def repeats(self) -> bool:
        return self is not RepeatInterval.NEVER


class EarlyReminderChoice(str, Enum):
    """Advance warning sent before the main notification.

    Values double as the human label shown in the early notification body.
    """

    NONE = "None"
    FIVE_MINUTES = "5 min before"
    FIFTEEN_MINUTES = "15 min before"
    THIRTY_MINUTES = "30 min before"
    ONE_HOUR = "1 hour before"

    @property
    def offset(self) -> timedelta:
        return _EARLY_OFFSETS[self]

    @property
    def label(self) -> str:
        return self.value


_EARLY_OFFSETS: dict[EarlyReminderChoice, timedelta] = {
    EarlyReminderChoice.NONE: timedelta(0),
    EarlyReminderChoice.FIVE_MINUTES: timedelta(minutes=5),
    EarlyReminderChoice.FIFTEEN_MINUTES: timedelta(minutes=15),
    EarlyReminderChoice.THIRTY_MINUTES: timedelta(minutes=30),
    EarlyReminderChoice.ONE_HOUR: timedelta(hours=1),
}


class Reminder(BaseModel):
    """
    Reminder entity.

    ``date`` is the nominal due moment as a naive local datetime. When
    ``has_time`` is False only its calendar day is meaningful and the
    notification fires at the all-day hour. A reminder without a date is
    a plain to-do item and never produces notifications.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    title: str
    date: datetime
    is_complete: bool = False
    note_id: UUID | None = None

    has_date: bool = True
    has_time: bool = True
    repeat_interval: RepeatInterval = RepeatInterval.NEVER
    early_reminder: EarlyReminderChoice = EarlyReminderChoice.NONE

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("date")
    @classmethod
    def to_local_naive(cls, v: datetime) -> datetime:
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @property
    def is_schedulable(self) -> bool:
        """True when the reminder may own notification triggers."""
        return not self.is_complete and self.has_date

    def effective_time(self, all_day_hour: int = DEFAULT_ALL_DAY_HOUR) -> datetime:
        """Moment the main notification is due, at minute precision."""
        if self.has_time:
            return self.date.replace(second=0, microsecond=0)
        return self.date.replace(hour=all_day_hour, minute=0, second=0, microsecond=0)

    def is_overdue(
        self,
        now: datetime | None = None,
        all_day_hour: int = DEFAULT_ALL_DAY_HOUR,
    ) -> bool:
        """Check if a one-off reminder is past its effective time and not done."""
        if not self.is_schedulable or self.repeat_interval.repeats:
            return False
        return self.effective_time(all_day_hour) <= (now or datetime.now())
