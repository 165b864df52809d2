"""Tests for the authentication routes."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from structlog.testing import capture_logs
from httpx import ASGITransport, AsyncClient

from wrappedup.domain.entities import Username
from wrappedup.infrastructure.api.dependencies import get_registration_service
from wrappedup.infrastructure.auth import jwt_service
from wrappedup.infrastructure.persistence.repositories import (
    SQLAlchemyUserDirectory,
    UserProfileRepository,
)

AUTH = "/api/v1/auth"
PASSWORD = "correct-horse-battery"


async def register(client, username="reader", email="reader@example.com", password=PASSWORD):
    return await client.post(
        f"{AUTH}/register",
        json={"username": username, "email": email, "password": password},
    )


async def login(client, email="reader@example.com", password=PASSWORD):
    return await client.post(f"{AUTH}/login", json={"email": email, "password": password})


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_success(self, client, db_session):
        response = await register(client, email="Reader@Example.com")

        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["username"] == "reader"
        assert data["email"] == "reader@example.com"

        profile = await UserProfileRepository(db_session).get_by_user_id(data["id"])
        assert profile is not None

    @pytest.mark.asyncio
    async def test_short_password(self, client):
        response = await register(client, password="short")

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Validation error"
        assert data["details"][0]["field"] == "password"
        assert data["details"][0]["code"] == "password_too_short"

    @pytest.mark.asyncio
    async def test_invalid_username(self, client):
        response = await register(client, username="ab")

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "username"

    @pytest.mark.asyncio
    async def test_duplicate_username(self, client):
        await register(client)

        response = await register(client, email="other@example.com")

        assert response.status_code == 409
        assert response.json() == {
            "error": "Conflict",
            "message": "A user with this username already exists",
            "field": "username",
        }

    @pytest.mark.asyncio
    async def test_duplicate_email_any_case(self, client):
        await register(client)

        response = await register(client, username="other", email="READER@example.com")

        assert response.status_code == 409
        assert response.json()["field"] == "email"
        assert response.json()["message"] == "A user with this email already exists"

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_500(self, app):
        failing = AsyncMock()
        failing.register.side_effect = RuntimeError("storage offline")
        app.dependency_overrides[get_registration_service] = lambda: failing

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        with capture_logs() as logs:
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await register(client)

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"
        unhandled = [e for e in logs if e["event"] == "Unhandled exception"]
        assert len(unhandled) == 1
        assert unhandled[0]["exc_type"] == "RuntimeError"
        assert isinstance(unhandled[0]["exc_info"], RuntimeError)


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_success(self, client):
        registered = (await register(client)).json()

        response = await login(client, email="READER@example.com")

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "Bearer"
        assert data["expires_in"] == jwt_service.access_token_expires_in()
        assert data["user"]["id"] == registered["id"]
        assert data["user"]["role"] == "USER"
        assert jwt_service.validate_and_extract_user_id(data["token"]) == registered["id"]
        assert not jwt_service.is_expired(data["refresh_token"])

    @pytest.mark.asyncio
    async def test_login_twice_returns_distinct_tokens(self, client):
        await register(client)

        first = (await login(client)).json()
        second = (await login(client)).json()

        assert first["token"] != second["token"]
        assert first["refresh_token"] != second["refresh_token"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password",
        [("reader@example.com", "wrong-password"), ("ghost@example.com", PASSWORD)],
    )
    async def test_login_failure_is_generic(self, client, email, password):
        await register(client)

        response = await login(client, email=email, password=password)

        assert response.status_code == 401
        assert response.json() == {
            "error": "Authentication failed",
            "message": "Invalid email or password",
        }

    @pytest.mark.asyncio
    async def test_login_disabled_user(self, client, db_session):
        await register(client)
        directory = SQLAlchemyUserDirectory(db_session)
        user = await directory.find_by_username(Username("reader"))
        user.disable()
        await directory.save(user)

        response = await login(client)

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_rotates_tokens(self, client):
        await register(client)
        tokens = (await login(client)).json()

        response = await client.post(
            f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["refresh_token"] != tokens["refresh_token"]
        assert data["token"] != tokens["token"]
        assert data["user"]["username"] == "reader"

    @pytest.mark.asyncio
    async def test_refresh_with_access_token(self, client):
        await register(client)
        tokens = (await login(client)).json()

        response = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["token"]})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid refresh token"

    @pytest.mark.asyncio
    async def test_refresh_garbage(self, client):
        response = await client.post(f"{AUTH}/refresh", json={"refresh_token": "garbage"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid refresh token"

    @pytest.mark.asyncio
    async def test_refresh_expired(self, client, db_session):
        await register(client)
        user = await SQLAlchemyUserDirectory(db_session).find_by_username(Username("reader"))
        expired = jwt_service.issue_refresh_token(user, expires_delta=timedelta(seconds=-10))

        response = await client.post(f"{AUTH}/refresh", json={"refresh_token": expired})

        assert response.status_code == 401
        assert response.json()["message"] == "Refresh token is expired"

    @pytest.mark.asyncio
    async def test_refresh_disabled_user(self, client, db_session):
        await register(client)
        tokens = (await login(client)).json()
        directory = SQLAlchemyUserDirectory(db_session)
        user = await directory.find_by_username(Username("reader"))
        user.disable()
        await directory.save(user)

        response = await client.post(
            f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]}
        )

        assert response.status_code == 403
        assert response.json()["message"] == "User account is disabled"


class TestMe:
    @pytest.mark.asyncio
    async def test_me_with_access_token(self, client):
        registered = (await register(client)).json()
        tokens = (await login(client)).json()

        response = await client.get(
            f"{AUTH}/me", headers={"Authorization": f"Bearer {tokens['token']}"}
        )

        assert response.status_code == 200
        assert response.json()["id"] == registered["id"]
        assert response.json()["email"] == "reader@example.com"

    @pytest.mark.asyncio
    async def test_me_without_header(self, client):
        response = await client.get(f"{AUTH}/me")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_me_with_refresh_token(self, client):
        await register(client)
        tokens = (await login(client)).json()

        response = await client.get(
            f"{AUTH}/me", headers={"Authorization": f"Bearer {tokens['refresh_token']}"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me_malformed_header(self, client):
        response = await client.get(f"{AUTH}/me", headers={"Authorization": "Token abc"})

        assert response.status_code == 401
