"""
Dependency injection for FastAPI.

Route handlers receive services from the AppContainer stored on the
application state by the lifespan handler.
"""

from fastapi import Request

from pixs.application.container import AppContainer
from pixs.application.use_cases import ImportLegacyRemindersUseCase, ReminderService
from pixs.core.exceptions import ConfigurationError
from pixs.infrastructure.notifications import InMemoryNotificationCenter


def get_container(request: Request) -> AppContainer:
    """Get the application container."""
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise ConfigurationError("Application container is not initialized")
    return container


def get_reminder_service(request: Request) -> ReminderService:
    """Get the reminder service."""
    return get_container(request).reminders


def get_legacy_import_use_case(request: Request) -> ImportLegacyRemindersUseCase:
    """Get the legacy import use case."""
    return get_container(request).legacy_import


def get_notification_center(request: Request) -> InMemoryNotificationCenter:
    """Get the local notification center."""
    return get_container(request).notification_center

