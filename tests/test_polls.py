# ==============================================================================
# POLL ENDPOINT TESTS
# ==============================================================================

import pytest
from httpx import AsyncClient

from pawsitiv.core.constants import DatabaseConstants


class TestPolls:
    """Tests for community polls and their answers."""

    @pytest.mark.asyncio
    async def test_create_and_list_polls(self, auth_client):
        client, _, _ = auth_client

        response = await client.post("/api/polls", json={"question": "Wer füttert am Wochenende?"})
        assert response.status_code == 201
        poll = response.json()["data"]

        client.cookies.clear()
        listing = await client.get("/api/polls")
        assert listing.status_code == 200
        assert [p["id"] for p in listing.json()["data"]] == [poll["id"]]

    @pytest.mark.asyncio
    async def test_create_poll_requires_login(self, client: AsyncClient):
        response = await client.post("/api/polls", json={"question": "Anonym?"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_empty_question_rejected(self, auth_client):
        client, _, _ = auth_client

        response = await client.post("/api/polls", json={"question": ""})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_answer_poll(self, auth_client):
        client, _, _ = auth_client
        poll = (await client.post("/api/polls", json={"question": "Lieblingsfutter?"})).json()["data"]

        first = await client.post(f"/api/polls/{poll['id']}/answers", json={"text": "Thunfisch"})
        second = await client.post(f"/api/polls/{poll['id']}/answers", json={"text": "Huhn"})
        assert first.status_code == 201
        assert second.json()["data"]["poll_id"] == poll["id"]

        answers = await client.get(f"/api/polls/{poll['id']}/answers")
        assert answers.status_code == 200
        assert sorted(a["text"] for a in answers.json()["data"]) == ["Huhn", "Thunfisch"]

    @pytest.mark.asyncio
    async def test_answer_unknown_poll(self, auth_client):
        client, _, _ = auth_client

        response = await client.post("/api/polls/no-such-poll/answers", json={"text": "Hallo"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_answers_of_unknown_poll(self, client: AsyncClient):
        response = await client.get("/api/polls/no-such-poll/answers")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_answers_read_past_one_batch(self, auth_client, monkeypatch):
        client, _, _ = auth_client
        monkeypatch.setattr(DatabaseConstants, "MAX_BATCH_SIZE", 2)
        poll = (await client.post("/api/polls", json={"question": "Bester Schlafplatz?"})).json()["data"]
        for text in ("Sofa", "Karton", "Heizung", "Fensterbank", "Wäschekorb"):
            await client.post(f"/api/polls/{poll['id']}/answers", json={"text": text})

        answers = await client.get(f"/api/polls/{poll['id']}/answers")

        assert len(answers.json()["data"]) == 5
