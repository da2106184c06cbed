"""API tests for reminder and notification endpoints."""

from collections.abc import AsyncGenerator
from datetime import datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from pixs.api.main import create_app
from pixs.application.container import build_container
from pixs.config import get_settings
from pixs.core.entities.reminder import Reminder
from pixs.infrastructure.notifications import InMemoryNotificationCenter

FUTURE = datetime(2099, 6, 1, 9, 0)


@pytest.fixture
def stored_reminder() -> Reminder:
    return Reminder(title="Water the plants", date=FUTURE, early_reminder="15 min before")


@pytest.fixture
def mock_reminder_store(stored_reminder: Reminder) -> AsyncMock:
    store = AsyncMock()
    store.create.side_effect = lambda r: r
    store.update.side_effect = lambda r: r
    store.get.side_effect = lambda rid: stored_reminder if rid == stored_reminder.id else None
    store.delete.side_effect = lambda rid: rid == stored_reminder.id
    store.list_reminders.return_value = [stored_reminder]
    store.list_schedulable.return_value = []
    return store


@pytest.fixture
def app(mock_reminder_store) -> FastAPI:
    """App with a container over a mocked store; lifespan is not run."""
    app = create_app()
    app.state.container = build_container(
        get_settings(),
        store=mock_reminder_store,
        notification_center=InMemoryNotificationCenter(authorized=True),
    )
    return app


@pytest.fixture
async def rem_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestRemindersAPI:
    async def test_create(self, rem_client: AsyncClient, app: FastAPI):
        response = await rem_client.post(
            "/api/reminders",
            json={
                "title": "Dentist",
                "date": "2099-06-01T00:00:00",
                "has_time": False,
                "early_reminder": "1 hour before",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Dentist"
        assert data["early_reminder"] == "1 hour before"
        assert data["is_overdue"] is False
        assert len(app.state.container.notification_center) == 2

    async def test_create_requires_title(self, rem_client: AsyncClient):
        response = await rem_client.post(
            "/api/reminders", json={"title": "", "date": "2099-06-01T09:00:00"}
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_list(self, rem_client: AsyncClient, stored_reminder: Reminder):
        response = await rem_client.get("/api/reminders")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["reminders"][0]["id"] == str(stored_reminder.id)

    async def test_get(self, rem_client: AsyncClient, stored_reminder: Reminder):
        response = await rem_client.get(f"/api/reminders/{stored_reminder.id}")

        assert response.status_code == 200
        assert response.json()["repeat_interval"] == "Never"

    async def test_get_missing(self, rem_client: AsyncClient):
        response = await rem_client.get(f"/api/reminders/{uuid4()}")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "REMINDER_NOT_FOUND"
        assert data["hint"]

    async def test_update(self, rem_client: AsyncClient, stored_reminder: Reminder):
        response = await rem_client.put(
            f"/api/reminders/{stored_reminder.id}",
            json={"title": "Water the garden", "repeat_interval": "Daily"},
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Water the garden"
        assert response.json()["repeat_interval"] == "Daily"

    async def test_toggle(self, rem_client: AsyncClient, stored_reminder: Reminder):
        response = await rem_client.post(f"/api/reminders/{stored_reminder.id}/toggle")

        assert response.status_code == 200
        assert response.json()["is_complete"] is True

    async def test_delete(self, rem_client: AsyncClient, stored_reminder: Reminder):
        response = await rem_client.delete(f"/api/reminders/{stored_reminder.id}")
        assert response.status_code == 204

        response = await rem_client.delete(f"/api/reminders/{uuid4()}")
        assert response.status_code == 404

    async def test_schedule_preview(self, rem_client: AsyncClient, stored_reminder: Reminder):
        response = await rem_client.get(f"/api/reminders/{stored_reminder.id}/schedule")

        assert response.status_code == 200
        data = response.json()
        assert data["cancel"] == [str(stored_reminder.id), f"{stored_reminder.id}-early"]
        early = next(r for r in data["submit"] if r["kind"] == "early")
        assert early["title"] == "Upcoming: Water the plants"
        assert early["body"] == "In 15 min before"
        assert early["trigger"]["fields"] == {
            "year": 2099,
            "month": 6,
            "day": 1,
            "hour": 8,
            "minute": 45,
        }

    async def test_import_missing_file(self, rem_client: AsyncClient, tmp_path):
        response = await rem_client.post(
            "/api/reminders/import", json={"path": str(tmp_path / "missing.json")}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "LEGACY_IMPORT_FAILED"


class TestNotificationsAPI:
    async def test_pending(self, rem_client: AsyncClient):
        await rem_client.post(
            "/api/reminders", json={"title": "Tea", "date": "2099-01-01T16:00:00"}
        )

        response = await rem_client.get("/api/notifications/pending")

        assert response.status_code == 200
        data = response.json()
        assert data["authorized"] is True
        assert data["total"] == 1
        assert data["notifications"][0]["next_fire"] == "2099-01-01T16:00:00"


class TestHealthAPI:
    async def test_health(self, rem_client: AsyncClient):
        response = await rem_client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["pending_notifications"] == 0
        assert data["dispatcher_running"] is False
        assert "X-Request-ID" in response.headers

    async def test_health_before_startup(self):
        transport = ASGITransport(app=create_app())
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "starting"
