"""
Notification center endpoints.
"""

from datetime import datetime

from fastapi import APIRouter, Depends

from pixs.api.dependencies import get_notification_center
from pixs.application.dto.responses import (
    NotificationRequestResponse,
    PendingNotificationsResponse,
    TriggerResponse,
)
from pixs.core.entities.notification import NotificationRequest
from pixs.infrastructure.notifications import InMemoryNotificationCenter

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def request_to_response(
    request: NotificationRequest, next_fire: datetime | None = None
) -> NotificationRequestResponse:
    """Convert a notification request to its response DTO."""
    return NotificationRequestResponse(
        identifier=request.identifier,
        kind=request.kind.value,
        title=request.content.title,
        body=request.content.body,
        base_time=request.base_time,
        trigger=TriggerResponse(
            fields=request.trigger.matched_fields(),
            repeats=request.trigger.repeats,
        ),
        next_fire=next_fire,
    )


@router.get("/pending", response_model=PendingNotificationsResponse)
async def list_pending(
    center: InMemoryNotificationCenter = Depends(get_notification_center),
) -> PendingNotificationsResponse:
    """List notifications waiting to fire, soonest first."""
    pending = await center.pending()
    return PendingNotificationsResponse(
        authorized=center.authorized,
        notifications=[
            request_to_response(r, center.next_fire(r.identifier)) for r in pending
        ],
        total=len(pending),
    )
