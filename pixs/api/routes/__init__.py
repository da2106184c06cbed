"""API route modules."""

from pixs.api.routes.health import router as health_router
from pixs.api.routes.notifications import router as notifications_router
from pixs.api.routes.reminders import router as reminders_router

__all__ = [
    "health_router",
    "notifications_router",
    "reminders_router",
]
