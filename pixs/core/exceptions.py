"""
Domain exceptions for the PIXS reminder service.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class PixsError(Exception):
    """Base exception for all PIXS errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(PixsError):
    """Base exception for storage operations."""

    pass


class ReminderNotFoundError(StorageError):
    """Reminder not found in storage."""

    def __init__(self, reminder_id: str):
        super().__init__(
            f"Reminder not found: {reminder_id}",
            code="REMINDER_NOT_FOUND",
            details={"reminder_id": str(reminder_id)},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Notification Exceptions
class NotificationError(PixsError):
    """Base exception for notification scheduling and delivery."""

    pass


class NotificationPermissionError(NotificationError):
    """The user has not granted notification permission."""

    def __init__(self, identifier: str | None = None):
        super().__init__(
            "Notification permission not granted",
            code="NOTIFICATION_PERMISSION_DENIED",
            details={"identifier": identifier},
        )


class NotificationSubmitError(NotificationError):
    """Notification center rejected a request."""

    def __init__(self, identifier: str, reason: str):
        super().__init__(
            f"Failed to schedule notification '{identifier}': {reason}",
            code="NOTIFICATION_SUBMIT_FAILED",
            details={"identifier": identifier, "reason": reason},
        )


# Validation Exceptions
class ValidationError(PixsError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class LegacyImportError(PixsError):
    """Legacy reminder export could not be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cannot import legacy reminders from '{path}': {reason}",
            code="LEGACY_IMPORT_FAILED",
            details={"path": path, "reason": reason},
        )


class ConfigurationError(PixsError):
    """Configuration error."""

    pass
