"""
Local notification entities.

A trigger is a calendar-field matching rule rather than an absolute
timestamp: it fires at every minute whose fields equal the set ones.
"""

from datetime import datetime, time, timedelta
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

# Longest gap between two matches of any trigger we build (a monthly
# trigger on the 31st) is well under this.
_SEARCH_HORIZON_DAYS = 400


class ScheduleKind(str, Enum):
    """Which of a reminder's notifications a request represents."""

    MAIN = "main"
    EARLY = "early"


class TriggerComponents(BaseModel):
    """
    Calendar components a notification fires on.

    ``weekday`` uses ISO numbering: Monday is 1, Sunday is 7.
    Unset fields match any value.
    """

    year: int | None = None
    month: int | None = Field(default=None, ge=1, le=12)
    day: int | None = Field(default=None, ge=1, le=31)
    weekday: int | None = Field(default=None, ge=1, le=7)
    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)
    repeats: bool = False

    def matched_fields(self) -> dict[str, int]:
        """Return only the fields that constrain the trigger."""
        return self.model_dump(exclude_none=True, exclude={"repeats"})

    def matches(self, moment: datetime) -> bool:
        """Check whether ``moment`` (minute precision) satisfies every set field."""
        return (
            (self.year is None or moment.year == self.year)
            and (self.month is None or moment.month == self.month)
            and (self.day is None or moment.day == self.day)
            and (self.weekday is None or moment.isoweekday() == self.weekday)
            and moment.hour == self.hour
            and moment.minute == self.minute
        )

    def next_fire_after(self, moment: datetime) -> datetime | None:
        """
        Find the first matching minute strictly after ``moment``.

        Returns None when no such minute exists, e.g. a one-off trigger
        whose date has already passed.
        """
        if self.year is not None and self.month is not None and self.day is not None:
            try:
                exact = datetime(self.year, self.month, self.day, self.hour, self.minute)
            except ValueError:
                return None
            return exact if exact > moment else None

        at = time(self.hour, self.minute)
        start = moment.date()
        for offset in range(_SEARCH_HORIZON_DAYS):
            candidate = datetime.combine(start + timedelta(days=offset), at)
            if candidate > moment and self.matches(candidate):
                return candidate
        return None


class NotificationContent(BaseModel):
    """What the user sees when a notification fires."""

    title: str
    body: str = ""
    sound: str | None = "default"


class NotificationRequest(BaseModel):
    """A notification submitted to the notification center."""

    identifier: str
    content: NotificationContent
    trigger: TriggerComponents
    base_time: datetime
    kind: ScheduleKind = ScheduleKind.MAIN


class SchedulePlan(BaseModel):
    """
    Outcome of planning notifications for one reminder.

    ``cancel`` always lists both identifiers of the reminder. Requests the
    submission guard rejected are kept in ``skipped`` for logging, and
    identifiers the notification center refused end up in ``failed``.
    """

    reminder_id: UUID
    cancel: list[str]
    submit: list[NotificationRequest] = Field(default_factory=list)
    skipped: list[NotificationRequest] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)

    @property
    def main(self) -> NotificationRequest | None:
        return next((r for r in self.submit if r.kind == ScheduleKind.MAIN), None)

    @property
    def early(self) -> NotificationRequest | None:
        return next((r for r in self.submit if r.kind == ScheduleKind.EARLY), None)
