"""
PIXS settings.

Read from the environment (and ``.env``) through pydantic-settings. Each
concern has its own prefix: ``STORAGE_``, ``NOTIFY_`` and ``API_``.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where reminders are persisted."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Field(default=Path("data"), description="Created on first use")
    db_name: str = "pixs.db"
    pool_size: int = Field(default=5, ge=1)
    busy_timeout: int = Field(default=30000, ge=0, description="SQLite busy timeout in ms")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class NotificationSettings(BaseSettings):
    """Local notification scheduling and delivery."""

    model_config = SettingsConfigDict(env_prefix="NOTIFY_")

    brand_title: str = "Px Reminder"
    all_day_hour: int = Field(default=9, ge=0, le=23)
    sound: str | None = "default"

    presenter: Literal["auto", "osascript", "log"] = "auto"
    osascript_timeout: float = Field(default=5.0, gt=0)
    dispatcher_enabled: bool = True
    poll_interval: float = Field(default=15.0, gt=0, description="Seconds between due checks")


class APISettings(BaseSettings):
    """HTTP server."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "127.0.0.1"
    port: int = 8765
    debug: bool = False
    cors_origins: list[str] = []


class Settings(BaseSettings):
    """Top-level settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "PIXS"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    api: APISettings = Field(default_factory=APISettings)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first call."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
