"""
Notification presenters.

OsascriptPresenter shows native macOS notifications; LoggingPresenter
writes them to the log on hosts without a notification UI.
"""

import asyncio
import platform

from pixs.config import get_logger
from pixs.config.settings import NotificationSettings
from pixs.core.entities.notification import NotificationContent
from pixs.core.exceptions import ConfigurationError
from pixs.core.interfaces.notifications import INotificationPresenter

logger = get_logger(__name__)


def escape_applescript(text: str) -> str:
    """Escape special characters for AppleScript strings."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def build_applescript(content: NotificationContent) -> str:
    """Build the ``display notification`` statement for ``content``."""
    script = (
        f'display notification "{escape_applescript(content.body)}" '
        f'with title "{escape_applescript(content.title)}"'
    )
    if content.sound:
        script += f' sound name "{escape_applescript(content.sound)}"'
    return script


class OsascriptPresenter(INotificationPresenter):
    """Deliver notifications through macOS Notification Center via osascript."""

    def __init__(self, timeout: float = 5.0, executable: str = "osascript") -> None:
        self.timeout = timeout
        self.executable = executable

    async def present(self, content: NotificationContent) -> bool:
        script = build_applescript(content)
        try:
            proc = await asyncio.create_subprocess_exec(
                self.executable,
                "-e",
                script,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error("osascript_unavailable", error=str(e))
            return False

        try:
            _, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            logger.error("osascript_timeout", timeout=self.timeout, title=content.title)
            return False

        if proc.returncode != 0:
            logger.error(
                "osascript_failed",
                returncode=proc.returncode,
                stderr=stderr.decode(errors="replace").strip(),
            )
            return False

        logger.info("notification_presented", title=content.title)
        return True


class LoggingPresenter(INotificationPresenter):
    """Write notifications to the log instead of showing them."""

    async def present(self, content: NotificationContent) -> bool:
        logger.info("notification_presented", title=content.title, body=content.body)
        return True


def create_presenter(settings: NotificationSettings) -> INotificationPresenter:
    """Create the presenter selected in settings (``auto`` picks by platform)."""
    choice = settings.presenter
    if choice == "auto":
        choice = "osascript" if platform.system() == "Darwin" else "log"

    if choice == "osascript":
        return OsascriptPresenter(timeout=settings.osascript_timeout)
    if choice == "log":
        return LoggingPresenter()
    raise ConfigurationError(f"Unknown notification presenter: {settings.presenter}")
