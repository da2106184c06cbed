"""API middleware."""

from pixs.api.middleware.error_handler import ErrorHandlerMiddleware, setup_exception_handlers
from pixs.api.middleware.logging import LoggingMiddleware

__all__ = ["ErrorHandlerMiddleware", "LoggingMiddleware", "setup_exception_handlers"]
