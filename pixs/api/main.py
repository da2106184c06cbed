"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pixs.api.middleware import (
    ErrorHandlerMiddleware,
    LoggingMiddleware,
    setup_exception_handlers,
)
from pixs.api.routes import health_router, notifications_router, reminders_router
from pixs.application.container import build_container
from pixs.config import Settings, configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Builds the container on startup and tears it down on shutdown.
    """
    settings: Settings = app.state.settings

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        db_path=str(settings.storage.db_path),
    )

    container = build_container(settings)
    try:
        await container.startup()
    except Exception as e:
        logger.error("application_start_failed", error=str(e))
        raise
    app.state.container = container

    logger.info(
        "application_started",
        authorized=container.notification_center.authorized,
        pending=len(container.notification_center),
    )

    yield

    logger.info("application_stopping")
    await container.shutdown()
    app.state.container = None
    logger.info("application_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings to use; defaults to the global settings

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()
    configure_logging()

    app = FastAPI(
        title="PIXS Reminder API",
        description="Reminders with scheduled local notifications",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = None

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(reminders_router)
    app.include_router(notifications_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Return API info."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    return app


def run() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.api.host,
        port=settings.api.port,
    )


if __name__ == "__main__":
    run()
