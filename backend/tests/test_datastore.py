"""
Memoboard Backend: Datastore Tests
====================================

Runs the Datastore against a real SQLite file: reads return dicts,
writes report affected rows and the inserted id, and driver failures
come out as DatastoreError.
"""

import pytest
from sqlalchemy import bindparam, delete, insert, select, text

from memoboard.database import Datastore, WriteResult
from memoboard.exceptions import DatastoreError
from memoboard.models import Note
from memoboard.models.note import utcnow

notes = Note.__table__


class TestDatastore:

    @pytest.mark.asyncio
    async def test_query_no_rows(self, datastore: Datastore):
        assert await datastore.query(select(notes)) == []

    @pytest.mark.asyncio
    async def test_insert_reports_id_and_row_is_readable(self, datastore: Datastore):
        now = utcnow()
        result = await datastore.execute(
            insert(notes).values(title="T", content="", created_at=now, updated_at=now)
        )

        assert result.ok is True
        assert isinstance(result.last_insert_id, int)

        rows = await datastore.query(
            select(notes).where(notes.c.id == bindparam("note_id")),
            {"note_id": result.last_insert_id},
        )
        assert rows[0]["title"] == "T"
        assert set(rows[0]) == {"id", "title", "content", "created_at", "updated_at"}

    @pytest.mark.asyncio
    async def test_write_affecting_no_rows(self, datastore: Datastore):
        result = await datastore.execute(
            delete(notes).where(notes.c.id == bindparam("note_id")), {"note_id": 12345}
        )

        assert result == WriteResult(ok=False)

    @pytest.mark.asyncio
    async def test_bad_statement_raises_datastore_error(self, datastore: Datastore):
        with pytest.raises(DatastoreError):
            await datastore.query(text("SELECT * FROM no_such_table"))

    @pytest.mark.asyncio
    async def test_failed_write_raises_datastore_error(self, datastore: Datastore):
        with pytest.raises(DatastoreError):
            await datastore.execute(text("INSERT INTO no_such_table VALUES (1)"))

    @pytest.mark.asyncio
    async def test_unbindable_integer_raises_datastore_error(self, datastore: Datastore):
        """SQLite cannot bind integers wider than 64 bits."""
        with pytest.raises(DatastoreError):
            await datastore.query(
                select(notes).where(notes.c.id == bindparam("note_id")), {"note_id": 10**20}
            )

        with pytest.raises(DatastoreError):
            await datastore.execute(
                delete(notes).where(notes.c.id == bindparam("note_id")), {"note_id": 10**20}
            )

    @pytest.mark.asyncio
    async def test_create_schema_is_idempotent(self, datastore: Datastore):
        await datastore.create_schema()
        assert await datastore.ping() is True
