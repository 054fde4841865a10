# ==============================================================================
# HEALTH ENDPOINT TESTS
# ==============================================================================
# Tests for root and health check endpoints
# ==============================================================================

import pytest
from httpx import AsyncClient

from pawsitiv.database.factory import DatabaseFactory


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    @pytest.mark.asyncio
    async def test_root_endpoint(self, client: AsyncClient):
        """Test root endpoint returns API info."""
        response = await client.get("/")

        assert response.status_code == 200
        data = response.json()

        assert "message" in data
        assert "version" in data
        assert data["health"] == "/health"

    @pytest.mark.asyncio
    async def test_health_endpoint(self, client: AsyncClient):
        """Test health endpoint returns status."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()

        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["environment"] == "testing"
        assert "version" in data

    @pytest.mark.asyncio
    async def test_database_health_reports_supervisor_state(self, client: AsyncClient):
        response = await client.get("/health/db")

        assert response.status_code == 200
        data = response.json()

        assert data["healthy"] is True
        assert data["status"] == "connected"
        assert data["database_type"] == "sqlite"
        assert data["is_connecting"] is False
        assert data["current_attempt"] == 0
        assert data["max_retries"] == 1
        assert data["retry_pending"] is False

    @pytest.mark.asyncio
    async def test_database_health_after_shutdown(self, client: AsyncClient):
        await DatabaseFactory.shutdown()

        response = await client.get("/health/db")
        assert response.status_code == 503
        assert response.json()["healthy"] is False

        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "degraded"

    @pytest.mark.asyncio
    async def test_api_returns_503_without_database(self, client: AsyncClient):
        await DatabaseFactory.shutdown()

        response = await client.get("/api/cats")

        assert response.status_code == 503
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_request_id_header(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
        assert "X-Process-Time" in response.headers
