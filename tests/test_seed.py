# ==============================================================================
# SEED TESTS
# ==============================================================================

import pytest
from httpx import AsyncClient

from pawsitiv.database.factory import DatabaseFactory
from pawsitiv.seed import seed_database


class TestSeed:
    """Tests for the demo data seeder."""

    @pytest.mark.asyncio
    async def test_seed_creates_demo_data(self, client: AsyncClient):
        created = await seed_database(DatabaseFactory.get_adapter())

        assert created == {"users": 10, "cats": 6, "notifications": 3}

        cats = (await client.get("/api/cats")).json()["data"]
        assert len(cats) == 6

    @pytest.mark.asyncio
    async def test_seed_skips_populated_database(self, client: AsyncClient):
        adapter = DatabaseFactory.get_adapter()
        await seed_database(adapter)

        assert await seed_database(adapter) == {}

    @pytest.mark.asyncio
    async def test_reset_reseeds(self, client: AsyncClient):
        adapter = DatabaseFactory.get_adapter()
        await seed_database(adapter)

        created = await seed_database(adapter, reset=True, admin_username="tifalockhart")

        assert created["users"] == 10
        login = await client.post(
            "/api/users/login",
            json={"email": "tifa.lockhart@example.com", "password": "tifalockhart"},
        )
        assert login.status_code == 200
        assert login.json()["data"]["user"]["is_admin"] is True
