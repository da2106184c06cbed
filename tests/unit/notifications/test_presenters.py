"""Tests for notification presenters."""

import sys
from unittest.mock import patch

import pytest

from pixs.config.settings import NotificationSettings
from pixs.core.entities.notification import NotificationContent
from pixs.core.exceptions import ConfigurationError
from pixs.infrastructure.notifications import (
    LoggingPresenter,
    OsascriptPresenter,
    create_presenter,
)
from pixs.infrastructure.notifications.presenters import build_applescript, escape_applescript


class TestAppleScript:
    def test_escape(self):
        assert escape_applescript('say "hi" \\ bye') == 'say \\"hi\\" \\\\ bye'

    def test_build_with_sound(self):
        content = NotificationContent(title="Px Reminder", body="Water the plants")

        assert build_applescript(content) == (
            'display notification "Water the plants" with title "Px Reminder" '
            'sound name "default"'
        )

    def test_build_without_sound(self):
        content = NotificationContent(title="Upcoming: Tea", body="In 5 min before", sound=None)

        assert build_applescript(content) == (
            'display notification "In 5 min before" with title "Upcoming: Tea"'
        )


class TestCreatePresenter:
    def test_explicit_choices(self):
        assert isinstance(create_presenter(NotificationSettings(presenter="log")), LoggingPresenter)
        presenter = create_presenter(NotificationSettings(presenter="osascript", osascript_timeout=2))
        assert isinstance(presenter, OsascriptPresenter)
        assert presenter.timeout == 2

    def test_auto_picks_by_platform(self):
        settings = NotificationSettings(presenter="auto")

        with patch("platform.system", return_value="Darwin"):
            assert isinstance(create_presenter(settings), OsascriptPresenter)
        with patch("platform.system", return_value="Linux"):
            assert isinstance(create_presenter(settings), LoggingPresenter)

    def test_unknown_choice(self):
        settings = NotificationSettings.model_construct(presenter="carrier-pigeon")

        with pytest.raises(ConfigurationError):
            create_presenter(settings)


class TestPresenters:
    async def test_logging_presenter(self):
        assert await LoggingPresenter().present(NotificationContent(title="t", body="b")) is True

    async def test_osascript_missing_executable(self):
        presenter = OsascriptPresenter(executable="/nonexistent/osascript")

        assert await presenter.present(NotificationContent(title="t")) is False

    @pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell")
    async def test_osascript_nonzero_exit(self):
        # `false -e <script>` exits 1 without reading its arguments
        presenter = OsascriptPresenter(executable="false")

        assert await presenter.present(NotificationContent(title="t")) is False
