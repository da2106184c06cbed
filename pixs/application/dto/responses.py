"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from pixs.core.entities.reminder import EarlyReminderChoice, RepeatInterval


# --- Reminders ---


class ReminderResponse(BaseModel):
    """Reminder response DTO."""

    id: str
    title: str
    date: datetime
    is_complete: bool = False
    is_overdue: bool = False
    has_date: bool = True
    has_time: bool = True
    repeat_interval: RepeatInterval = RepeatInterval.NEVER
    early_reminder: EarlyReminderChoice = EarlyReminderChoice.NONE
    note_id: str | None = None
    created_at: datetime
    updated_at: datetime


class ReminderListResponse(BaseModel):
    """Paginated list of reminders."""

    reminders: list[ReminderResponse]
    total: int


# --- Notifications ---


class TriggerResponse(BaseModel):
    """Calendar trigger of a notification request."""

    fields: dict[str, int] = Field(..., description="Matched calendar fields")
    repeats: bool


class NotificationRequestResponse(BaseModel):
    """A scheduled (or would-be scheduled) notification."""

    identifier: str
    kind: str
    title: str
    body: str
    base_time: datetime
    trigger: TriggerResponse
    next_fire: datetime | None = None


class SchedulePreviewResponse(BaseModel):
    """What the scheduler would do for a reminder right now."""

    reminder_id: str
    cancel: list[str]
    submit: list[NotificationRequestResponse]
    skipped: list[NotificationRequestResponse]


class PendingNotificationsResponse(BaseModel):
    """Requests currently pending in the notification center."""

    authorized: bool
    notifications: list[NotificationRequestResponse]
    total: int


class LegacyImportResponse(BaseModel):
    """Result of a legacy import."""

    imported: int
    already_present: int
    rejected: int
    imported_ids: list[str] = Field(default_factory=list)


# --- Health ---


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    uptime_seconds: float
    pending_notifications: int | None = None
    dispatcher_running: bool | None = None


# --- Errors ---


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. REMINDER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
