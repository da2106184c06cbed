"""
Reminder management endpoints.
"""

from pathlib import Path
from uuid import UUID

from fastapi import APIRouter, Depends, status

from pixs.api.dependencies import get_legacy_import_use_case, get_reminder_service
from pixs.api.routes.notifications import request_to_response
from pixs.application.dto.requests import (
    CreateReminderRequest,
    LegacyImportRequest,
    UpdateReminderRequest,
)
from pixs.application.dto.responses import (
    ErrorResponse,
    LegacyImportResponse,
    ReminderListResponse,
    ReminderResponse,
    SchedulePreviewResponse,
)
from pixs.application.use_cases import (
    ImportLegacyRemindersUseCase,
    ReminderChanges,
    ReminderService,
)
from pixs.core.entities.reminder import Reminder

router = APIRouter(prefix="/api/reminders", tags=["reminders"])


def _entity_to_response(reminder: Reminder, all_day_hour: int) -> ReminderResponse:
    """Convert entity to response DTO."""
    return ReminderResponse(
        id=str(reminder.id),
        title=reminder.title,
        date=reminder.date,
        is_complete=reminder.is_complete,
        is_overdue=reminder.is_overdue(all_day_hour=all_day_hour),
        has_date=reminder.has_date,
        has_time=reminder.has_time,
        repeat_interval=reminder.repeat_interval,
        early_reminder=reminder.early_reminder,
        note_id=str(reminder.note_id) if reminder.note_id else None,
        created_at=reminder.created_at,
        updated_at=reminder.updated_at,
    )


@router.post(
    "",
    response_model=ReminderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_reminder(
    request: CreateReminderRequest,
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderResponse:
    """Create a new reminder and schedule its notifications."""
    reminder = Reminder(
        title=request.title,
        date=request.date,
        has_date=request.has_date,
        has_time=request.has_time,
        repeat_interval=request.repeat_interval,
        early_reminder=request.early_reminder,
        note_id=request.note_id,
    )
    created = await service.create(reminder)
    return _entity_to_response(created, service.all_day_hour)


@router.get("", response_model=ReminderListResponse)
async def list_reminders(
    include_complete: bool = True,
    limit: int = 100,
    offset: int = 0,
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderListResponse:
    """List reminders, newest first."""
    reminders = await service.list_reminders(
        include_complete=include_complete, limit=limit, offset=offset
    )
    return ReminderListResponse(
        reminders=[_entity_to_response(r, service.all_day_hour) for r in reminders],
        total=len(reminders),
    )


@router.post(
    "/import",
    response_model=LegacyImportResponse,
    responses={400: {"model": ErrorResponse}},
)
async def import_legacy_reminders(
    request: LegacyImportRequest,
    use_case: ImportLegacyRemindersUseCase = Depends(get_legacy_import_use_case),
) -> LegacyImportResponse:
    """Import reminders exported by the original menu-bar app."""
    result = await use_case.execute(Path(request.path).expanduser())
    return LegacyImportResponse(
        imported=result.imported,
        already_present=result.already_present,
        rejected=len(result.rejected),
        imported_ids=result.imported_ids,
    )


@router.get(
    "/{reminder_id}",
    response_model=ReminderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_reminder(
    reminder_id: UUID,
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderResponse:
    """Get a reminder by ID."""
    return _entity_to_response(await service.get(reminder_id), service.all_day_hour)


@router.put(
    "/{reminder_id}",
    response_model=ReminderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_reminder(
    reminder_id: UUID,
    request: UpdateReminderRequest,
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderResponse:
    """Update a reminder; notifications are recomputed when needed."""
    changes = ReminderChanges(**request.model_dump(exclude_unset=True))
    updated = await service.update(reminder_id, changes)
    return _entity_to_response(updated, service.all_day_hour)


@router.post(
    "/{reminder_id}/toggle",
    response_model=ReminderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def toggle_reminder(
    reminder_id: UUID,
    service: ReminderService = Depends(get_reminder_service),
) -> ReminderResponse:
    """Flip a reminder between complete and incomplete."""
    reminder = await service.toggle_complete(reminder_id)
    return _entity_to_response(reminder, service.all_day_hour)


@router.delete(
    "/{reminder_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_reminder(
    reminder_id: UUID,
    service: ReminderService = Depends(get_reminder_service),
) -> None:
    """Delete a reminder and cancel its notifications."""
    await service.delete(reminder_id)


@router.get(
    "/{reminder_id}/schedule",
    response_model=SchedulePreviewResponse,
    responses={404: {"model": ErrorResponse}},
)
async def preview_schedule(
    reminder_id: UUID,
    service: ReminderService = Depends(get_reminder_service),
) -> SchedulePreviewResponse:
    """Show which notifications the reminder would get if reconciled now."""
    plan = await service.preview(reminder_id)
    return SchedulePreviewResponse(
        reminder_id=str(plan.reminder_id),
        cancel=plan.cancel,
        submit=[request_to_response(r) for r in plan.submit],
        skipped=[request_to_response(r) for r in plan.skipped],
    )
