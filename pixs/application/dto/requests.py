"""Request DTOs for API endpoints.

Pydantic v2 models for request validation.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from pixs.core.entities.reminder import EarlyReminderChoice, RepeatInterval


class CreateReminderRequest(BaseModel):
    """Request to create a reminder."""

    title: str = Field(..., min_length=1, description="Reminder title")
    date: datetime = Field(..., description="Due moment (ISO 8601, local time if naive)")
    has_date: bool = Field(default=True, description="False for an undated to-do item")
    has_time: bool = Field(default=True, description="False to fire at the all-day hour")
    repeat_interval: RepeatInterval = Field(default=RepeatInterval.NEVER)
    early_reminder: EarlyReminderChoice = Field(default=EarlyReminderChoice.NONE)
    note_id: UUID | None = Field(default=None, description="Note this reminder refers to")


class UpdateReminderRequest(BaseModel):
    """Request to update a reminder. Omitted fields are left unchanged."""

    title: str | None = Field(default=None, min_length=1, description="Reminder title")
    date: datetime | None = Field(default=None, description="Due moment")
    is_complete: bool | None = Field(default=None, description="Mark as complete/incomplete")
    has_date: bool | None = None
    has_time: bool | None = None
    repeat_interval: RepeatInterval | None = None
    early_reminder: EarlyReminderChoice | None = None
    note_id: UUID | None = Field(default=None, description="Note link; null clears it")


class LegacyImportRequest(BaseModel):
    """Request to import a legacy reminder export from disk."""

    path: str = Field(..., description="Path of the exported JSON file")
