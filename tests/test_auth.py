# ==============================================================================
# AUTH ENDPOINT TESTS
# ==============================================================================
# Registration, session login/logout and the current-user endpoint
# ==============================================================================

import pytest
from httpx import AsyncClient


class TestRegistration:
    """Tests for user registration."""

    @pytest.mark.asyncio
    async def test_register_success(self, client: AsyncClient, sample_user_data: dict):
        """Test successful user registration."""
        response = await client.post("/api/users/register", json=sample_user_data)

        assert response.status_code == 201
        data = response.json()

        assert data["success"] is True
        user = data["data"]["user"]
        assert user["email"] == sample_user_data["email"]
        assert user["username"] == sample_user_data["username"]
        assert user["is_admin"] is False
        assert user["subscribed_cats"] == []
        assert user["profile_picture"]
        assert "password" not in user

    @pytest.mark.asyncio
    async def test_register_logs_user_in(self, client: AsyncClient, sample_user_data: dict):
        await client.post("/api/users/register", json=sample_user_data)

        response = await client.get("/api/users/me")

        assert response.status_code == 200
        assert response.json()["data"]["email"] == sample_user_data["email"]

    @pytest.mark.asyncio
    async def test_register_normalizes_username(self, client: AsyncClient, sample_user_data: dict):
        sample_user_data["username"] = sample_user_data["username"].upper()

        response = await client.post("/api/users/register", json=sample_user_data)

        assert response.status_code == 201
        assert response.json()["data"]["user"]["username"] == sample_user_data["username"].lower()

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client: AsyncClient, sample_user_data: dict):
        """Test registration fails with duplicate email."""
        await client.post("/api/users/register", json=sample_user_data)

        duplicate = {**sample_user_data, "username": "someone_else"}
        response = await client.post("/api/users/register", json=duplicate)

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["error"]["details"]["field"] == "email"

    @pytest.mark.asyncio
    async def test_register_duplicate_username(self, client: AsyncClient, sample_user_data: dict):
        await client.post("/api/users/register", json=sample_user_data)

        duplicate = {**sample_user_data, "email": "someone.else@example.com"}
        response = await client.post("/api/users/register", json=duplicate)

        assert response.status_code == 409
        assert response.json()["error"]["details"]["field"] == "username"

    @pytest.mark.asyncio
    async def test_register_invalid_email(self, client: AsyncClient, sample_user_data: dict):
        """Test registration fails with invalid email."""
        sample_user_data["email"] = "not-an-email"

        response = await client.post("/api/users/register", json=sample_user_data)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_register_short_password(self, client: AsyncClient, sample_user_data: dict):
        """Test registration fails with a password below the minimum length."""
        sample_user_data["password"] = "kurz"

        response = await client.post("/api/users/register", json=sample_user_data)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_register_cannot_grant_admin(self, client: AsyncClient, sample_user_data: dict):
        response = await client.post(
            "/api/users/register",
            json={**sample_user_data, "is_admin": True},
        )

        assert response.status_code == 201
        assert response.json()["data"]["user"]["is_admin"] is False


class TestLogin:
    """Tests for session login and logout."""

    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, sample_user_data: dict):
        """Test successful login with valid credentials."""
        await client.post("/api/users/register", json=sample_user_data)
        client.cookies.clear()

        response = await client.post(
            "/api/users/login",
            json={
                "email": sample_user_data["email"],
                "password": sample_user_data["password"],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["data"]["user"]["email"] == sample_user_data["email"]
        assert "password" not in data["data"]["user"]

        me = await client.get("/api/users/me")
        assert me.status_code == 200

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, sample_user_data: dict):
        """Test login fails with wrong password."""
        await client.post("/api/users/register", json=sample_user_data)
        client.cookies.clear()

        response = await client.post(
            "/api/users/login",
            json={
                "email": sample_user_data["email"],
                "password": "falsches-passwort",
            },
        )

        assert response.status_code == 401
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, client: AsyncClient):
        response = await client.post(
            "/api/users/login",
            json={"email": "nobody@example.com", "password": "whatever"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_clears_session(self, auth_client):
        client, _, _ = auth_client

        response = await client.post("/api/users/logout")
        assert response.status_code == 200
        assert response.json()["success"] is True

        me = await client.get("/api/users/me")
        assert me.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_anonymous(self, client: AsyncClient):
        response = await client.post("/api/users/logout")

        assert response.status_code == 200


class TestCurrentUser:
    """Tests for /users/me."""

    @pytest.mark.asyncio
    async def test_me_requires_login(self, client: AsyncClient):
        response = await client.get("/api/users/me")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"

    @pytest.mark.asyncio
    async def test_me_returns_profile(self, auth_client):
        client, user_id, user_data = auth_client

        response = await client.get("/api/users/me")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == user_id
        assert data["name"] == user_data["name"]

    @pytest.mark.asyncio
    async def test_tampered_cookie_is_anonymous(self, client: AsyncClient):
        client.cookies.set("pawsitiv-session", "not-a-signed-value")

        response = await client.get("/api/users/me")

        assert response.status_code == 401
