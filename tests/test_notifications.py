# ==============================================================================
# NOTIFICATION ENDPOINT TESTS
# ==============================================================================
# Inbox listing, read tracking and ownership checks
# ==============================================================================

import pytest
from httpx import AsyncClient


async def notify(client: AsyncClient, user_id: str, cat_id: str, **extra) -> dict:
    payload = {"user_id": user_id, "cat_id": cat_id, "type": "neue_katze", **extra}
    response = await client.post("/api/notifications", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestNotificationCrud:
    """Tests for creating and reading notifications."""

    @pytest.mark.asyncio
    async def test_create_notification(self, auth_client, cat_id):
        client, user_id, _ = auth_client

        notification = await notify(client, user_id, cat_id)

        assert notification["user_id"] == user_id
        assert notification["cat_id"] == cat_id
        assert notification["type"] == "neue_katze"
        assert notification["seen"] is False
        assert notification["timestamp"]

    @pytest.mark.asyncio
    async def test_create_requires_login(self, client: AsyncClient, auth_client, cat_id):
        _, user_id, _ = auth_client
        client.cookies.clear()

        response = await client.post(
            "/api/notifications",
            json={"user_id": user_id, "cat_id": cat_id, "type": "match"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_for_unknown_cat(self, auth_client):
        client, user_id, _ = auth_client

        response = await client.post(
            "/api/notifications",
            json={"user_id": user_id, "cat_id": "no-such-cat", "type": "match"},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_create_rejects_unknown_type(self, auth_client, cat_id):
        client, user_id, _ = auth_client

        response = await client.post(
            "/api/notifications",
            json={"user_id": user_id, "cat_id": cat_id, "type": "spam"},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_and_update_own_notification(self, auth_client, cat_id):
        client, user_id, _ = auth_client
        notification = await notify(client, user_id, cat_id)

        fetched = await client.get(f"/api/notifications/{notification['id']}")
        assert fetched.status_code == 200

        updated = await client.put(
            f"/api/notifications/{notification['id']}",
            json={"type": "update_katze"},
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["type"] == "update_katze"

    @pytest.mark.asyncio
    async def test_delete_notification(self, auth_client, cat_id):
        client, user_id, _ = auth_client
        notification = await notify(client, user_id, cat_id)

        response = await client.delete(f"/api/notifications/{notification['id']}")

        assert response.status_code == 200
        assert (await client.get(f"/api/notifications/{notification['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_list_all_requires_admin(self, auth_client, admin_client, cat_id):
        client, user_id, _ = auth_client
        admin, _ = admin_client
        await notify(client, user_id, cat_id)

        assert (await client.get("/api/notifications")).status_code == 403

        response = await admin.get("/api/notifications")
        assert response.status_code == 200
        assert len(response.json()["data"]) == 1


class TestInbox:
    """Tests for the per-user inbox."""

    @pytest.mark.asyncio
    async def test_inbox_is_newest_first(self, auth_client, cat_id):
        client, user_id, _ = auth_client
        await notify(client, user_id, cat_id, timestamp="2025-01-01T08:00:00Z")
        await notify(client, user_id, cat_id, type="match", timestamp="2025-03-01T08:00:00Z")

        response = await client.get(f"/api/notifications/user/{user_id}")

        assert response.status_code == 200
        assert [n["type"] for n in response.json()["data"]] == ["match", "neue_katze"]

    @pytest.mark.asyncio
    async def test_mark_one_seen(self, auth_client, cat_id):
        client, user_id, _ = auth_client
        first = await notify(client, user_id, cat_id)
        await notify(client, user_id, cat_id, type="nachricht")

        response = await client.patch(f"/api/notifications/{first['id']}/seen")
        assert response.status_code == 200
        assert response.json()["data"]["seen"] is True

        unseen = await client.get(f"/api/notifications/user/{user_id}/unseen")
        assert [n["type"] for n in unseen.json()["data"]] == ["nachricht"]

    @pytest.mark.asyncio
    async def test_mark_all_seen(self, auth_client, cat_id):
        client, user_id, _ = auth_client
        await notify(client, user_id, cat_id)
        await notify(client, user_id, cat_id, type="match")
        await notify(client, user_id, cat_id, type="nachricht", seen=True)

        response = await client.patch(f"/api/notifications/user/{user_id}/seen")

        assert response.status_code == 200
        assert response.json()["data"]["updated"] == 2

        unseen = await client.get(f"/api/notifications/user/{user_id}/unseen")
        assert unseen.json()["data"] == []

    @pytest.mark.asyncio
    async def test_other_users_inbox_forbidden(self, auth_client, other_client):
        client, _, _ = auth_client
        _, other_id = other_client

        assert (await client.get(f"/api/notifications/user/{other_id}")).status_code == 403
        assert (await client.patch(f"/api/notifications/user/{other_id}/seen")).status_code == 403

    @pytest.mark.asyncio
    async def test_other_users_notification_forbidden(self, auth_client, other_client, cat_id):
        client, _, _ = auth_client
        other, other_id = other_client
        notification = await notify(client, other_id, cat_id)

        assert (await client.get(f"/api/notifications/{notification['id']}")).status_code == 403
        assert (await other.get(f"/api/notifications/{notification['id']}")).status_code == 200

    @pytest.mark.asyncio
    async def test_deleting_user_removes_notifications(self, admin_client, other_client, cat_id):
        admin, _ = admin_client
        _, other_id = other_client
        await notify(admin, other_id, cat_id)

        assert (await admin.delete(f"/api/users/{other_id}")).status_code == 200

        response = await admin.get("/api/notifications")
        assert response.json()["data"] == []
