"""Tests for the reminder HTTP API."""

import asyncio
import time
from unittest.mock import Mock

import httpx
import pytest
import pytest_asyncio

import medremind.storage.reminder as reminder_storage
from medremind.admin.app import create_app
from medremind.admin.schemas import RuntimeControl
from medremind.config import settings
from medremind.world.reminder import ReminderSweeper
from medremind.world.tips import HEALTH_TIPS

TOKEN = "test-token"
AUTH = {"Authorization": f"Bearer {TOKEN}"}

REMINDER_BODY = {
    "medicationName": "Amoxicillin (antibiotic)",
    "dosage": "500mg",
    "frequency": "twice",
    "startDate": "2024-01-01",
    "endDate": "2024-01-03",
}


@pytest.fixture
def control(notifier):
    sweeper = ReminderSweeper(notifier)
    sweeper.start = Mock(return_value=True)
    return RuntimeControl(
        shutdown_event=asyncio.Event(),
        sweeper=sweeper,
        started_at=time.time(),
    )


@pytest_asyncio.fixture
async def client(db, control, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_AUTH_TOKEN", TOKEN)
    app = create_app(control)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def test_health_is_public(client):
    resp = await client.get("/healthz")
    assert resp.status_code == 200
    assert resp.text == "ok"

    resp = await client.get("/api/v1/health")
    assert resp.json()["db_connected"] is True


async def test_requests_without_token_are_rejected(client):
    resp = await client.get("/api/v1/reminders")
    assert resp.status_code == 401

    resp = await client.get("/api/v1/reminders", headers={"X-MedRemind-Token": "wrong"})
    assert resp.status_code == 401


async def test_api_unavailable_when_token_not_configured(client, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_AUTH_TOKEN", "")
    resp = await client.get("/api/v1/reminders", headers=AUTH)
    assert resp.status_code == 503


async def test_create_reminder(client, control):
    resp = await client.post("/api/v1/reminders", json=REMINDER_BODY, headers=AUTH)

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["ok"] is True
    assert payload["tip"] in HEALTH_TIPS["antibiotics"]
    reminder = payload["reminder"]
    for key, value in REMINDER_BODY.items():
        assert reminder[key] == value
    assert len(reminder["notifications"]) == 6
    control.sweeper.start.assert_called_once()

    stored = await reminder_storage.get_reminders()
    assert [r.id for r in stored] == [reminder["id"]]


async def test_end_before_start_is_rejected_without_saving(client, control):
    body = dict(REMINDER_BODY, startDate="2024-01-05", endDate="2024-01-01")
    resp = await client.post("/api/v1/reminders", json=body, headers=AUTH)

    assert resp.status_code == 400
    assert await reminder_storage.get_reminders() == []
    control.sweeper.start.assert_not_called()


async def test_malformed_date_is_rejected(client):
    body = dict(REMINDER_BODY, startDate="not-a-date")
    resp = await client.post("/api/v1/reminders", json=body, headers=AUTH)
    assert resp.status_code == 422
    assert await reminder_storage.get_reminders() == []


async def test_list_reminders_reports_active(client):
    resp = await client.get("/api/v1/reminders", headers=AUTH)
    assert resp.json() == {"items": [], "total": 0, "has_active": False}

    await client.post("/api/v1/reminders", json=REMINDER_BODY, headers=AUTH)
    resp = await client.get("/api/v1/reminders", headers=AUTH)
    payload = resp.json()
    assert payload["total"] == 1
    assert payload["has_active"] is True
    assert payload["items"][0]["medicationName"] == REMINDER_BODY["medicationName"]


async def test_tip_endpoint(client):
    resp = await client.get("/api/v1/tips", params={"medication_name": "Ibuprofen"}, headers=AUTH)
    assert resp.json()["tip"] in HEALTH_TIPS["default"]


async def test_metrics_include_sweeper_and_notifier(client):
    resp = await client.get("/api/v1/metrics", headers=AUTH)
    components = resp.json()["components"]
    assert components["reminder"]["interval_seconds"] == 60.0
    assert components["notifier"] == {"type": "FakeNotifier", "permission": "granted"}


async def test_shutdown_sets_event(client, control):
    resp = await client.post("/api/v1/admin/shutdown", json={"reason": "test"}, headers=AUTH)
    assert resp.status_code == 200
    assert control.shutdown_event.is_set()
