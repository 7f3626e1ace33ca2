"""
Tests for admin authentication endpoints.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD


@pytest.mark.unit
class TestAdminLogin:
    """Test POST /api/admin/login."""

    async def test_login_success_sets_cookie(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/admin/login",
            json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["authenticated"] is True
        assert data["email"] == ADMIN_EMAIL

        cookie = response.headers["set-cookie"]
        assert cookie.startswith("wsa_admin_session=")
        assert "HttpOnly" in cookie
        assert "samesite=lax" in cookie.lower()
        assert "Secure" in cookie

    async def test_login_wrong_password(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/admin/login",
            json={"email": ADMIN_EMAIL, "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"
        assert "set-cookie" not in response.headers

    async def test_login_unknown_email_same_error(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/admin/login",
            json={"email": "intruder@staffingco.com", "password": ADMIN_PASSWORD},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    async def test_login_validation_error(self, client: AsyncClient) -> None:
        response = await client.post("/api/admin/login", json={"email": "not-an-email"})
        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert {"email", "password"} <= fields


@pytest.mark.unit
class TestAdminSession:
    """Test session inspection and logout."""

    async def test_session_requires_cookie(self, client: AsyncClient) -> None:
        response = await client.get("/api/admin/session")
        assert response.status_code == 401
        assert response.json()["detail"] == "Admin authentication required"

    async def test_session_with_cookie(self, admin_client: AsyncClient) -> None:
        response = await admin_client.get("/api/admin/session")
        assert response.status_code == 200
        assert response.json()["email"] == ADMIN_EMAIL

    async def test_expired_session_rejected(self, client: AsyncClient) -> None:
        from core.security import create_admin_session_token

        token, _ = create_admin_session_token(ADMIN_EMAIL, expires_delta=timedelta(seconds=-5))
        client.cookies.set("wsa_admin_session", token)
        response = await client.get("/api/admin/session")
        assert response.status_code == 401

    async def test_session_for_removed_admin_rejected(self, client: AsyncClient) -> None:
        from core.security import create_admin_session_token

        token, _ = create_admin_session_token("former-admin@worldstaffingawards.com")
        client.cookies.set("wsa_admin_session", token)
        response = await client.get("/api/admin/session")
        assert response.status_code == 401

    async def test_logout_clears_cookie(self, admin_client: AsyncClient) -> None:
        response = await admin_client.post("/api/admin/logout")
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert "Max-Age=0" in response.headers["set-cookie"]

    async def test_logout_without_session(self, client: AsyncClient) -> None:
        response = await client.post("/api/admin/logout")
        assert response.status_code == 200
