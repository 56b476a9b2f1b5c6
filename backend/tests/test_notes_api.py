"""
Memoboard Backend: Notes API Tests
====================================

End-to-end tests of the /api/notes endpoints against a real SQLite file,
through httpx.AsyncClient + ASGITransport.
"""

import logging
from datetime import datetime

import pytest

from memoboard.exceptions import DatastoreError


async def create_note(client, title="Groceries", content="milk, eggs"):
    response = await client.post("/api/notes", json={"title": title, "content": content})
    assert response.status_code == 201
    return response.json()["data"]


class TestCreateNote:

    @pytest.mark.asyncio
    async def test_create_returns_stored_row(self, test_client):
        response = await test_client.post(
            "/api/notes", json={"title": "  Groceries ", "content": " milk "}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert "error" not in body
        note = body["data"]
        assert note["title"] == "Groceries"
        assert note["content"] == "milk"
        assert isinstance(note["id"], int)
        assert note["created_at"] == note["updated_at"]

    @pytest.mark.asyncio
    async def test_create_without_content(self, test_client):
        response = await test_client.post("/api/notes", json={"title": "Only a title"})

        assert response.status_code == 201
        assert response.json()["data"]["content"] == ""

    @pytest.mark.asyncio
    async def test_long_title_is_stored_whole(self, test_client):
        title = "x" * 600

        created = await create_note(test_client, title=title)

        stored = (await test_client.get(f"/api/notes/{created['id']}")).json()["data"]
        assert stored["title"] == title

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"title": ""}, {"title": "   "}, {"title": None}])
    async def test_create_requires_title(self, test_client, body):
        response = await test_client.post("/api/notes", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Title is required"}
        assert (await test_client.get("/api/notes")).json()["data"] == []

    @pytest.mark.asyncio
    async def test_create_malformed_json(self, test_client):
        response = await test_client.post(
            "/api/notes", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid request body"}


class TestListAndGetNotes:

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/api/notes")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}

    @pytest.mark.asyncio
    async def test_list_newest_first(self, test_client):
        await create_note(test_client, title="A")
        await create_note(test_client, title="B")

        response = await test_client.get("/api/notes")

        assert [n["title"] for n in response.json()["data"]] == ["B", "A"]

    @pytest.mark.asyncio
    async def test_get_note(self, test_client):
        created = await create_note(test_client)

        response = await test_client.get(f"/api/notes/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"] == created

    @pytest.mark.asyncio
    async def test_get_missing_note(self, test_client):
        response = await test_client.get("/api/notes/999")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Note not found"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["abc", "x12", ".5"])
    async def test_get_invalid_id(self, test_client, raw_id):
        response = await test_client.get(f"/api/notes/{raw_id}")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid note ID format"}

    @pytest.mark.asyncio
    async def test_id_with_trailing_characters_reads_leading_digits(self, test_client):
        created = await create_note(test_client)

        response = await test_client.get(f"/api/notes/{created['id']}abc")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == created["id"]


class TestOutOfRangeNoteId:
    """Ids beyond the 64-bit id column cannot match a row."""

    HUGE_ID = "99999999999999999999"

    @pytest.mark.asyncio
    async def test_get(self, test_client):
        response = await test_client.get(f"/api/notes/{self.HUGE_ID}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Note not found"}

    @pytest.mark.asyncio
    async def test_put(self, test_client):
        response = await test_client.put(f"/api/notes/{self.HUGE_ID}", json={"title": "x"})

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Note not found"}
        assert (await test_client.get("/api/notes")).json()["data"] == []

    @pytest.mark.asyncio
    async def test_delete(self, test_client):
        response = await test_client.delete(f"/api/notes/-{self.HUGE_ID}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Note not found"}


class TestUpdateNote:

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, test_client):
        created = await create_note(test_client, title="Old", content="Body")

        response = await test_client.put(f"/api/notes/{created['id']}", json={"title": "New"})

        assert response.status_code == 200
        note = response.json()["data"]
        assert note["title"] == "New"
        assert note["content"] == "Body"
        assert note["created_at"] == created["created_at"]
        assert datetime.fromisoformat(note["updated_at"]) >= datetime.fromisoformat(
            created["updated_at"]
        )

    @pytest.mark.asyncio
    async def test_update_content_to_empty(self, test_client):
        created = await create_note(test_client)

        response = await test_client.put(f"/api/notes/{created['id']}", json={"content": ""})

        assert response.status_code == 200
        assert response.json()["data"]["content"] == ""
        assert response.json()["data"]["title"] == created["title"]

    @pytest.mark.asyncio
    async def test_update_blank_title(self, test_client):
        created = await create_note(test_client)

        response = await test_client.put(f"/api/notes/{created['id']}", json={"title": "  "})

        assert response.status_code == 400
        assert response.json()["error"] == "Title cannot be empty"

    @pytest.mark.asyncio
    async def test_update_empty_body(self, test_client):
        created = await create_note(test_client)

        response = await test_client.put(f"/api/notes/{created['id']}", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "No fields to update"
        unchanged = await test_client.get(f"/api/notes/{created['id']}")
        assert unchanged.json()["data"] == created

    @pytest.mark.asyncio
    async def test_update_missing_note(self, test_client):
        response = await test_client.put("/api/notes/999", json={"title": "x"})

        assert response.status_code == 404
        assert response.json()["error"] == "Note not found"
        assert (await test_client.get("/api/notes")).json()["data"] == []


class TestDeleteNote:

    @pytest.mark.asyncio
    async def test_delete_then_get(self, test_client):
        created = await create_note(test_client)

        response = await test_client.delete(f"/api/notes/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": None}

        response = await test_client.get(f"/api/notes/{created['id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client):
        created = await create_note(test_client)
        await test_client.delete(f"/api/notes/{created['id']}")

        response = await test_client.delete(f"/api/notes/{created['id']}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Note not found"}


class TestErrorEnvelope:

    @pytest.mark.asyncio
    async def test_unsupported_method(self, test_client):
        response = await test_client.patch("/api/notes/1", json={"title": "x"})

        assert response.status_code == 405
        assert response.json() == {"success": False, "error": "Method not allowed"}
        assert "allow" in response.headers

    @pytest.mark.asyncio
    async def test_datastore_failure_is_generic_500(self, app, test_client, monkeypatch):
        async def broken_query(*args, **kwargs):
            raise DatastoreError(message="Failed to execute database query")

        monkeypatch.setattr(app.state.datastore, "query", broken_query)

        response = await test_client.get("/api/notes")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Internal server error"}

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/api/notes", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_access_log_line(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="memoboard.access"):
            await test_client.get("/api/notes/999", headers={"X-Request-ID": "rid42"})

        lines = [r for r in caplog.records if r.name == "memoboard.access"]
        assert [r.getMessage().split(" (")[0] for r in lines] == ["GET /api/notes/999 -> 404"]
        assert lines[0].levelno == logging.WARNING
        assert lines[0].request_id == "rid42"
