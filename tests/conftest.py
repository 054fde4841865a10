# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# Shared fixtures for all tests
# ==============================================================================

from __future__ import annotations

import io
import os
from typing import AsyncGenerator
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from PIL import Image

# Set test environment before importing app
os.environ["ENVIRONMENT"] = "testing"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_TYPE"] = "sqlite"
os.environ["SQLITE_URL"] = "sqlite:///./test_pawsitiv.db"
os.environ["SESSION_SECRET"] = "test-session-secret-for-testing-only"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_DATABASE"] = "false"
os.environ["DB_CONNECTION_RETRIES"] = "1"
os.environ["DB_CONNECTION_DELAY_MS"] = "10"
os.environ["LOG_LEVEL"] = "WARNING"

TEST_DB_PATH = "./test_pawsitiv.db"


def _remove_test_db() -> None:
    if os.path.exists(TEST_DB_PATH):
        try:
            os.remove(TEST_DB_PATH)
        except OSError:
            pass


def make_user_data(prefix: str = "user") -> dict:
    suffix = uuid4().hex[:8]
    return {
        "name": f"Test {prefix.title()}",
        "username": f"{prefix}_{suffix}",
        "email": f"{prefix}_{suffix}@example.com",
        "password": "katzenminze",
    }


# ==============================================================================
# HTTP CLIENT FIXTURES
# ==============================================================================

@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against a fresh SQLite database."""
    from pawsitiv.database.factory import DatabaseFactory
    DatabaseFactory.reset()
    _remove_test_db()

    # Import app after environment is set
    from pawsitiv.main import app

    await DatabaseFactory.initialize()

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        timeout=30.0,
    ) as async_client:
        yield async_client

    await DatabaseFactory.shutdown()
    DatabaseFactory.reset()
    _remove_test_db()


@pytest_asyncio.fixture
async def auth_client(client: AsyncClient) -> AsyncGenerator[tuple[AsyncClient, str, dict], None]:
    """
    Client logged in as a freshly registered user.

    Returns:
        Tuple of (client, user_id, user_data)
    """
    user_data = make_user_data()

    # Registration also starts the session
    response = await client.post("/api/users/register", json=user_data)
    assert response.status_code == 201, f"Failed to register: {response.text}"
    user_id = response.json()["data"]["user"]["id"]

    yield client, user_id, user_data

    client.cookies.clear()


@pytest_asyncio.fixture
async def other_client(client: AsyncClient) -> AsyncGenerator[tuple[AsyncClient, str], None]:
    """
    Second client with its own cookie jar, logged in as another user.

    Returns:
        Tuple of (client, user_id)
    """
    from pawsitiv.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        timeout=30.0,
    ) as second:
        response = await second.post("/api/users/register", json=make_user_data("other"))
        assert response.status_code == 201, response.text
        yield second, response.json()["data"]["user"]["id"]


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient) -> AsyncGenerator[tuple[AsyncClient, str], None]:
    """
    Separate client logged in as an administrator.

    Admins cannot self-register, so the account is created through the
    service layer.

    Returns:
        Tuple of (client, admin_id)
    """
    from pawsitiv.database.factory import DatabaseFactory
    from pawsitiv.main import app
    from pawsitiv.schemas.user import UserCreate
    from pawsitiv.services.user_service import UserService

    data = make_user_data("admin")
    service = UserService(DatabaseFactory.get_adapter())
    admin = await service.create(UserCreate(**data, is_admin=True))

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        timeout=30.0,
    ) as admin_http:
        response = await admin_http.post(
            "/api/users/login",
            json={"email": data["email"], "password": data["password"]},
        )
        assert response.status_code == 200, response.text
        yield admin_http, admin.id


# ==============================================================================
# HELPER FIXTURES
# ==============================================================================

@pytest.fixture
def sample_user_data() -> dict:
    """Generate sample registration data."""
    return make_user_data("sample")


@pytest.fixture
def sample_cat_data() -> dict:
    """Generate sample cat profile data."""
    return {
        "name": f"Yuna {uuid4().hex[:4]}",
        "location": "Besaid Island",
        "personality_tags": ["verschmust", "neugierig"],
        "appearance": {
            "fur_color": "grau",
            "breed": "Europäisch Kurzhaar",
            "hair_length": "kurz",
            "chonkiness": "normal",
        },
    }


@pytest_asyncio.fixture
async def cat_id(auth_client, sample_cat_data) -> str:
    """Id of a cat created by the logged-in user."""
    client, _, _ = auth_client
    response = await client.post("/api/cats", json=sample_cat_data)
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]


def make_image_bytes(
    fmt: str = "PNG",
    size: tuple[int, int] = (64, 48),
    mode: str = "RGB",
) -> bytes:
    color = (200, 120, 40, 128) if mode == "RGBA" else (200, 120, 40)
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """Small opaque PNG image."""
    return make_image_bytes()
