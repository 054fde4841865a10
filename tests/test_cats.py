# ==============================================================================
# CAT ENDPOINT TESTS
# ==============================================================================
# Cat profile CRUD, filters, photo upload/download and delete cascades
# ==============================================================================

import asyncio
import io
import threading

import pytest
from httpx import AsyncClient
from PIL import Image

from pawsitiv.core.constants import DatabaseConstants
from pawsitiv.core.settings import get_settings
from pawsitiv.database.factory import DatabaseFactory
from pawsitiv.schemas.cat import CatCreate
from pawsitiv.schemas.user import UserRegister
from pawsitiv.services import cat_service
from pawsitiv.services.user_service import UserService
from pawsitiv.utils.images import compress_image


class TestCatCrud:
    """Tests for cat profile endpoints."""

    @pytest.mark.asyncio
    async def test_create_cat(self, auth_client, sample_cat_data):
        client, _, _ = auth_client

        response = await client.post("/api/cats", json=sample_cat_data)

        assert response.status_code == 201
        cat = response.json()["data"]
        assert cat["name"] == sample_cat_data["name"]
        assert cat["location"] == "Besaid Island"
        assert cat["personality_tags"] == ["verschmust", "neugierig"]
        assert cat["appearance"]["hair_length"] == "kurz"
        assert cat["images"] == []

    @pytest.mark.asyncio
    async def test_create_cat_requires_login(self, client: AsyncClient, sample_cat_data):
        response = await client.post("/api/cats", json=sample_cat_data)

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_cat_rejects_unknown_chonkiness(self, auth_client, sample_cat_data):
        client, _, _ = auth_client
        sample_cat_data["appearance"]["chonkiness"] = "riesig"

        response = await client.post("/api/cats", json=sample_cat_data)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_create_cat_cleans_tags(self, auth_client, sample_cat_data):
        client, _, _ = auth_client
        sample_cat_data["personality_tags"] = [" frech ", "frech", "", "faul"]

        response = await client.post("/api/cats", json=sample_cat_data)

        assert response.json()["data"]["personality_tags"] == ["frech", "faul"]

    @pytest.mark.asyncio
    async def test_get_cat_is_public(self, client: AsyncClient, cat_id):
        client.cookies.clear()

        response = await client.get(f"/api/cats/{cat_id}")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == cat_id

    @pytest.mark.asyncio
    async def test_get_unknown_cat(self, client: AsyncClient):
        response = await client.get("/api/cats/no-such-cat")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_cat(self, auth_client, cat_id):
        client, _, _ = auth_client

        response = await client.put(
            f"/api/cats/{cat_id}",
            json={"location": "Zanarkand", "appearance": {"chonkiness": "mollig"}},
        )

        assert response.status_code == 200
        cat = response.json()["data"]
        assert cat["location"] == "Zanarkand"
        assert cat["appearance"]["chonkiness"] == "mollig"

    @pytest.mark.asyncio
    async def test_update_cat_requires_login(self, client: AsyncClient, cat_id):
        client.cookies.clear()

        response = await client.put(f"/api/cats/{cat_id}", json={"name": "Anon"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_delete_cat(self, auth_client, cat_id):
        client, _, _ = auth_client

        response = await client.delete(f"/api/cats/{cat_id}")

        assert response.status_code == 200
        assert (await client.get(f"/api/cats/{cat_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_cat(self, auth_client):
        client, _, _ = auth_client

        response = await client.delete("/api/cats/no-such-cat")

        assert response.status_code == 404


class TestCatFilters:
    """Tests for location and tag filters."""

    @pytest.mark.asyncio
    async def test_filter_by_location_and_tag(self, auth_client):
        client, _, _ = auth_client
        cats = [
            {"name": "Minka", "location": "Kreuzberg", "personality_tags": ["Verschmust"]},
            {"name": "Felix", "location": "Kreuzberg", "personality_tags": ["frech"]},
            {"name": "Luna", "location": "Neukölln", "personality_tags": ["verschmust"]},
        ]
        for cat in cats:
            assert (await client.post("/api/cats", json=cat)).status_code == 201

        by_location = await client.get("/api/cats", params={"location": "Kreuzberg"})
        assert sorted(c["name"] for c in by_location.json()["data"]) == ["Felix", "Minka"]

        by_tag = await client.get("/api/cats", params={"tag": "verschmust"})
        assert sorted(c["name"] for c in by_tag.json()["data"]) == ["Luna", "Minka"]

        both = await client.get(
            "/api/cats",
            params={"location": "Kreuzberg", "tag": "verschmust"},
        )
        assert [c["name"] for c in both.json()["data"]] == ["Minka"]

    @pytest.mark.asyncio
    async def test_list_all_cats(self, auth_client, cat_id):
        client, _, _ = auth_client

        response = await client.get("/api/cats")

        assert response.status_code == 200
        assert [c["id"] for c in response.json()["data"]] == [cat_id]

    @pytest.mark.asyncio
    async def test_tag_filter_reads_past_one_batch(self, auth_client, monkeypatch):
        client, _, _ = auth_client
        monkeypatch.setattr(DatabaseConstants, "MAX_BATCH_SIZE", 2)
        for index in range(5):
            tags = ["scheu"] if index % 2 == 0 else ["frech"]
            cat = {"name": f"Katze {index}", "location": "Moabit", "personality_tags": tags}
            assert (await client.post("/api/cats", json=cat)).status_code == 201

        response = await client.get("/api/cats", params={"tag": "scheu"})
        assert [c["name"] for c in response.json()["data"]] == [
            "Katze 0", "Katze 2", "Katze 4",
        ]

        page = await client.get("/api/cats", params={"tag": "scheu", "skip": 2, "limit": 1})
        assert [c["name"] for c in page.json()["data"]] == ["Katze 4"]


class TestCatImages:
    """Tests for photo upload and download."""

    @pytest.mark.asyncio
    async def test_upload_and_download(self, auth_client, cat_id, png_bytes):
        client, _, _ = auth_client

        response = await client.post(
            f"/api/cats/{cat_id}/images",
            files={"file": ("yuna.png", png_bytes, "image/png")},
        )

        assert response.status_code == 201
        image = response.json()["data"]
        assert image["cat_id"] == cat_id
        assert image["content_type"] == "image/jpeg"
        assert image["url"] == f"/api/cats/{cat_id}/images/{image['id']}"

        cat = (await client.get(f"/api/cats/{cat_id}")).json()["data"]
        assert cat["images"] == [image["url"]]

        download = await client.get(image["url"])
        assert download.status_code == 200
        assert download.headers["content-type"] == "image/jpeg"
        assert "max-age" in download.headers["cache-control"]
        assert len(download.content) == image["size"]
        with Image.open(io.BytesIO(download.content)) as decoded:
            assert decoded.format == "JPEG"
            assert decoded.size == (64, 48)

    @pytest.mark.asyncio
    async def test_concurrent_uploads_keep_every_url(self, auth_client, cat_id, png_bytes):
        client, _, _ = auth_client

        responses = await asyncio.gather(*(
            client.post(
                f"/api/cats/{cat_id}/images",
                files={"file": (f"yuna_{index}.png", png_bytes, "image/png")},
            )
            for index in range(5)
        ))

        assert [r.status_code for r in responses] == [201] * 5
        urls = {r.json()["data"]["url"] for r in responses}
        cat = (await client.get(f"/api/cats/{cat_id}")).json()["data"]
        assert len(cat["images"]) == 5
        assert set(cat["images"]) == urls

    @pytest.mark.asyncio
    async def test_compression_runs_off_the_event_loop(
        self, auth_client, cat_id, png_bytes, monkeypatch
    ):
        client, _, _ = auth_client
        threads = []

        def recording_compress(raw, **kwargs):
            threads.append(threading.get_ident())
            return compress_image(raw, **kwargs)

        monkeypatch.setattr(cat_service, "compress_image", recording_compress)

        response = await client.post(
            f"/api/cats/{cat_id}/images",
            files={"file": ("yuna.png", png_bytes, "image/png")},
        )

        assert response.status_code == 201
        assert threads and threads[0] != threading.get_ident()

    @pytest.mark.asyncio
    async def test_upload_requires_login(self, client: AsyncClient, cat_id, png_bytes):
        client.cookies.clear()

        response = await client.post(
            f"/api/cats/{cat_id}/images",
            files={"file": ("yuna.png", png_bytes, "image/png")},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_upload_unsupported_type(self, auth_client, cat_id):
        client, _, _ = auth_client

        response = await client.post(
            f"/api/cats/{cat_id}/images",
            files={"file": ("notes.txt", b"meow", "text/plain")},
        )

        assert response.status_code == 415

    @pytest.mark.asyncio
    async def test_upload_too_large(self, auth_client, cat_id, monkeypatch):
        client, _, _ = auth_client
        monkeypatch.setattr(get_settings(), "MAX_UPLOAD_SIZE", 16)

        response = await client.post(
            f"/api/cats/{cat_id}/images",
            files={"file": ("big.jpg", b"x" * 17, "image/jpeg")},
        )

        assert response.status_code == 413

    @pytest.mark.asyncio
    async def test_oversized_upload_is_read_only_past_the_limit(
        self, auth_client, cat_id, monkeypatch
    ):
        client, _, _ = auth_client
        monkeypatch.setattr(get_settings(), "MAX_UPLOAD_SIZE", 16)
        received = []
        original = cat_service.CatService.add_image

        async def recording_add_image(self, cat_id, filename, raw):
            received.append(len(raw))
            return await original(self, cat_id, filename, raw)

        monkeypatch.setattr(cat_service.CatService, "add_image", recording_add_image)

        response = await client.post(
            f"/api/cats/{cat_id}/images",
            files={"file": ("big.jpg", b"x" * 10_000, "image/jpeg")},
        )

        assert response.status_code == 413
        assert received == [17]

    @pytest.mark.asyncio
    async def test_upload_image_with_too_many_pixels(
        self, auth_client, cat_id, png_bytes, monkeypatch
    ):
        client, _, _ = auth_client
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        response = await client.post(
            f"/api/cats/{cat_id}/images",
            files={"file": ("huge.png", png_bytes, "image/png")},
        )

        assert response.status_code == 400
        cat = (await client.get(f"/api/cats/{cat_id}")).json()["data"]
        assert cat["images"] == []

    @pytest.mark.asyncio
    async def test_upload_corrupt_image(self, auth_client, cat_id):
        client, _, _ = auth_client

        response = await client.post(
            f"/api/cats/{cat_id}/images",
            files={"file": ("broken.png", b"definitely not a png", "image/png")},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_upload_to_unknown_cat(self, auth_client, png_bytes):
        client, _, _ = auth_client

        response = await client.post(
            "/api/cats/no-such-cat/images",
            files={"file": ("yuna.png", png_bytes, "image/png")},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_image_of_other_cat_not_found(self, auth_client, cat_id, png_bytes, sample_cat_data):
        client, _, _ = auth_client
        upload = await client.post(
            f"/api/cats/{cat_id}/images",
            files={"file": ("yuna.png", png_bytes, "image/png")},
        )
        image_id = upload.json()["data"]["id"]
        other = await client.post("/api/cats", json={**sample_cat_data, "name": "Tidus"})
        other_id = other.json()["data"]["id"]

        response = await client.get(f"/api/cats/{other_id}/images/{image_id}")

        assert response.status_code == 404


class TestCatDeleteCascade:
    """Deleting a cat removes everything that points at it."""

    @pytest.mark.asyncio
    async def test_delete_cascades(self, auth_client, cat_id, png_bytes):
        client, user_id, _ = auth_client

        upload = await client.post(
            f"/api/cats/{cat_id}/images",
            files={"file": ("yuna.png", png_bytes, "image/png")},
        )
        image_url = upload.json()["data"]["url"]
        await client.post(f"/api/users/{user_id}/subscriptions/{cat_id}")
        await client.post(
            "/api/notifications",
            json={"user_id": user_id, "cat_id": cat_id, "type": "neue_katze"},
        )

        assert (await client.delete(f"/api/cats/{cat_id}")).status_code == 200

        assert (await client.get(image_url)).status_code == 404
        me = (await client.get("/api/users/me")).json()["data"]
        assert me["subscribed_cats"] == []
        inbox = await client.get(f"/api/notifications/user/{user_id}")
        assert inbox.json()["data"] == []

    @pytest.mark.asyncio
    async def test_delete_clears_every_subscriber(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(DatabaseConstants, "MAX_BATCH_SIZE", 1)
        adapter = DatabaseFactory.get_adapter()
        users = UserService(adapter)
        cats = cat_service.CatService(adapter)
        cat = await cats.create(CatCreate(name="Rikku", location="Luca"))
        user_ids = []
        for index in range(3):
            user = await users.create(UserRegister(
                name=f"Fan {index}",
                username=f"fan_{index}",
                email=f"fan_{index}@example.com",
                password="katzenminze",
            ))
            await users.subscribe(user.id, cat.id)
            user_ids.append(user.id)

        await cats.delete(cat.id)

        for user_id in user_ids:
            assert await users.get_subscribed_cat_ids(user_id) == []
