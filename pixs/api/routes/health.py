"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Request

from pixs.application.dto.responses import HealthResponse
from pixs.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Basic health check.

    Returns service status, uptime and notification delivery state.
    """
    container = getattr(request.app.state, "container", None)
    if container is None:
        return HealthResponse(
            status="starting",
            version=get_settings().app_version,
            uptime_seconds=time.time() - _start_time,
        )

    return HealthResponse(
        status="healthy" if container.notification_center.authorized else "degraded",
        version=container.settings.app_version,
        uptime_seconds=time.time() - _start_time,
        pending_notifications=len(container.notification_center),
        dispatcher_running=container.dispatcher.running,
    )
