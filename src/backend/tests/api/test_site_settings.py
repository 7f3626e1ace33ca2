"""
Tests for public and admin site settings endpoints.
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from conftest import open_voting, set_settings


@pytest.mark.unit
class TestPublicSettings:
    """Test GET /api/settings."""

    async def test_defaults_when_unset(self, client: AsyncClient) -> None:
        response = await client.get("/api/settings")
        assert response.status_code == 200
        data = response.json()
        assert data["nominations_enabled"] is True
        assert data["nominations_open"] is True
        assert data["voting_open"] is False
        assert data["voting_start_date"] is None
        assert data["nominations_close_message"] == "Nominations are currently closed"

    async def test_voting_window_open(self, client: AsyncClient, session_maker) -> None:
        await open_voting(session_maker)

        data = (await client.get("/api/settings")).json()
        assert data["voting_open"] is True
        assert data["nominations_open"] is False

    async def test_future_voting_start(self, client: AsyncClient, session_maker) -> None:
        start = datetime.now(timezone.utc) + timedelta(days=3)
        await set_settings(session_maker, voting_start_date=start.isoformat())

        data = (await client.get("/api/settings")).json()
        assert data["voting_open"] is False
        assert data["nominations_open"] is True
        assert data["voting_start_date"] is not None


@pytest.mark.unit
class TestUpdateSettings:
    """Test PUT /api/admin/settings."""

    async def test_requires_admin(self, client: AsyncClient) -> None:
        response = await client.put("/api/admin/settings", json={"nominations_enabled": False})
        assert response.status_code == 401

    async def test_disable_nominations(self, admin_client: AsyncClient, session_maker) -> None:
        from conftest import ADMIN_EMAIL
        from models import AppSetting

        response = await admin_client.put(
            "/api/admin/settings",
            json={"nominations_enabled": False, "nominations_close_message": "Closed for judging"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["nominations_enabled"] is False
        assert data["nominations_open"] is False
        assert data["nominations_close_message"] == "Closed for judging"

        async with session_maker() as session:
            stored = await session.get(AppSetting, "nominations_enabled")
            assert stored.setting_value == "false"
            assert stored.updated_by == ADMIN_EMAIL

    async def test_set_and_clear_voting_dates(self, admin_client: AsyncClient) -> None:
        response = await admin_client.put(
            "/api/admin/settings",
            json={"voting_start_date": "2020-01-01T09:00:00Z", "voting_end_date": "2099-01-01T00:00:00Z"},
        )
        assert response.json()["voting_open"] is True

        response = await admin_client.put("/api/admin/settings", json={"voting_start_date": ""})
        data = response.json()
        assert data["voting_start_date"] is None
        assert data["voting_open"] is False

    async def test_invalid_date(self, admin_client: AsyncClient) -> None:
        response = await admin_client.put("/api/admin/settings", json={"voting_start_date": "next tuesday"})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "voting_start_date"

    async def test_set_nomination_deadline(self, admin_client: AsyncClient, session_maker) -> None:
        from models import AppSetting

        deadline = datetime.now(timezone.utc) + timedelta(days=10)
        response = await admin_client.put("/api/admin/settings", json={"nomination_deadline": deadline.isoformat()})
        assert response.status_code == 200
        data = response.json()
        assert data["nomination_deadline"] is not None
        assert data["nominations_open"] is True

        async with session_maker() as session:
            stored = await session.get(AppSetting, "nomination_deadline")
            assert stored.setting_value == deadline.isoformat()

    async def test_past_nomination_deadline_rejected(self, admin_client: AsyncClient) -> None:
        yesterday = datetime.now(timezone.utc) - timedelta(days=1)
        response = await admin_client.put("/api/admin/settings", json={"nomination_deadline": yesterday.isoformat()})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "nomination_deadline"

    async def test_public_settings_closed_after_deadline(self, client: AsyncClient, session_maker) -> None:
        await set_settings(session_maker, nomination_deadline="2020-01-01T00:00:00Z")

        data = (await client.get("/api/settings")).json()
        assert data["nominations_enabled"] is True
        assert data["nominations_open"] is False
