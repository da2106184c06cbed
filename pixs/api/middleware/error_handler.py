"""
Error responses.

Every failure leaves the API as an ErrorResponse body carrying a
machine-readable ``error_code``, the message and a recovery hint.
Domain errors are converted by a registered exception handler; the
middleware is the last resort for anything else.
"""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from pixs.application.dto.responses import ErrorResponse
from pixs.config import get_logger
from pixs.core.exceptions import (
    ConfigurationError,
    LegacyImportError,
    NotificationError,
    PixsError,
    ReminderNotFoundError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)

# First match wins, so subclasses come before their bases.
ERROR_STATUS: list[tuple[type[Exception], int]] = [
    (ReminderNotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (LegacyImportError, status.HTTP_400_BAD_REQUEST),
    (NotificationError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ValueError, status.HTTP_400_BAD_REQUEST),
]

HINTS: dict[str, str] = {
    "REMINDER_NOT_FOUND": "List reminders with GET /api/reminders and retry with an existing ID.",
    "NOTIFICATION_PERMISSION_DENIED": "Allow notifications for PIXS in System Settings.",
    "NOTIFICATION_SUBMIT_FAILED": "The notification could not be scheduled; see the server log.",
    "LEGACY_IMPORT_FAILED": "Pass the path of a readable JSON export of the old reminder list.",
    "VALIDATION_ERROR": "Compare the request body with the schema at /docs.",
    "DATABASE_ERROR": "The reminder database rejected the operation; see the server log.",
}

FALLBACK_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "Nothing exists at this path.",
    405: "This path does not accept that method.",
    500: "Unexpected server error; see the server log.",
    503: "Notifications are unavailable right now. Retry later.",
}


def hint_for(error_code: str, status_code: int) -> str | None:
    return HINTS.get(error_code) or FALLBACK_HINTS.get(status_code)


def status_for(exc: Exception) -> int:
    for exc_type, code in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=hint_for(error_code, status_code),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def exception_response(request: Request, exc: Exception) -> JSONResponse:
    """Log ``exc`` and turn it into an error response."""
    status_code = status_for(exc)
    error_code = exc.code if isinstance(exc, PixsError) else type(exc).__name__

    if status_code >= 500:
        logger.error("request_error", error_code=error_code, error=str(exc), exc_info=exc)
    else:
        logger.info("request_rejected", error_code=error_code, error=str(exc))

    return error_json(request, status_code, error_code, str(exc))


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Converts exceptions no handler claimed into 500-style responses."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return exception_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain, validation and HTTP errors."""

    @app.exception_handler(PixsError)
    async def handle_domain_error(request: Request, exc: PixsError) -> JSONResponse:
        return exception_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return error_json(
            request,
            422,
            "VALIDATION_ERROR",
            "Request validation failed",
            detail=problems,
        )

    @app.exception_handler(HTTPException)
    async def handle_http_error(request: Request, exc: HTTPException) -> JSONResponse:
        return error_json(
            request,
            exc.status_code,
            _http_error_code(exc.status_code),
            str(exc.detail or "Request failed"),
        )


def _http_error_code(status_code: int) -> str:
    return {
        400: "BAD_REQUEST",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
    }.get(status_code, "HTTP_ERROR")
