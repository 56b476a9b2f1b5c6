"""
Memoboard Backend: Note Service (Business Logic)
==================================================

What:  Validation, existence checks and statement building for notes.
Why:   Keeps every rule about notes in one place, independent of HTTP.
How:   Builds SQLAlchemy Core statements against `Note.__table__` and runs them
       through the Datastore passed in by the caller.
Who:   Called by the /notes route handlers and by the unit tests with a
       mocked Datastore.

Update Flow (PUT /notes/{id}):
    ┌────────────┐    ┌──────────────┐    ┌─────────────┐    ┌──────────┐
    │ Validate   │───▶│ Row exists?  │───▶│ Build SET   │───▶│ Re-read  │
    │ text fields│    │ (404 if not) │    │ from fields │    │ full row │
    └────────────┘    └──────────────┘    └─────────────┘    └──────────┘

    The SET clause contains only the keys the client sent, plus updated_at.
    An empty body is rejected instead of silently succeeding.

Design Decision:
    NoteService is stateless: it receives the datastore on every call, so
    tests can hand it an AsyncMock and the app can hand it the real one.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import bindparam, delete, desc, insert, select, update

from memoboard.database import Datastore
from memoboard.exceptions import DatastoreError, NotFoundError, ValidationError
from memoboard.models.note import Note, utcnow
from memoboard.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from memoboard.validation import optional_text, require_text, storable_id

logger = logging.getLogger(__name__)

notes = Note.__table__

# ── Statements ────────────────────────────────────────────────────────────
# Newest first; id breaks ties between rows created within the same tick
LIST_NOTES = select(notes).order_by(desc(notes.c.created_at), desc(notes.c.id))
SELECT_NOTE = select(notes).where(notes.c.id == bindparam("note_id"))
NOTE_EXISTS = select(notes.c.id).where(notes.c.id == bindparam("note_id"))
DELETE_NOTE = delete(notes).where(notes.c.id == bindparam("note_id"))


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes():  all notes, newest first
        - create_note(): validate, insert, echo the stored row
        - get_note():    single note with not-found handling
        - update_note(): partial update of title/content
        - delete_note(): remove an existing note
    """

    async def list_notes(self, db: Datastore) -> List[NoteResponse]:
        rows = await db.query(LIST_NOTES)
        return [NoteResponse.model_validate(row) for row in rows]

    async def create_note(self, db: Datastore, payload: NoteCreate) -> NoteResponse:
        """
        Insert a note and return the freshly read row.

        The echoed object comes from a SELECT rather than the request body,
        so the client always receives the server-assigned id and timestamps.

        Raises:
            ValidationError: title missing or blank after trimming
            DatastoreError:  the insert did not apply
        """
        title = require_text(payload.title, "Title is required", field="title")
        content = optional_text(payload.content)

        now = utcnow()
        result = await db.execute(
            insert(notes).values(title=title, content=content, created_at=now, updated_at=now)
        )
        if not result.ok or result.last_insert_id is None:
            raise DatastoreError(
                message="Failed to create note",
                context={"operation": "insert", "table": "notes"},
            )

        logger.info("Note %s created", result.last_insert_id)
        return await self.get_note(db, result.last_insert_id)

    async def get_note(self, db: Datastore, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by id.

        Raises:
            NotFoundError: no row with this id (→ 404)
        """
        if not storable_id(note_id):
            raise NotFoundError(resource="note", resource_id=note_id)
        rows = await db.query(SELECT_NOTE, {"note_id": note_id})
        if not rows:
            raise NotFoundError(resource="note", resource_id=note_id)
        return NoteResponse.model_validate(rows[0])

    async def update_note(
        self, db: Datastore, note_id: int, payload: NoteUpdate
    ) -> NoteResponse:
        """
        Apply a partial update and return the updated row.

        Check order:
            1. A supplied title must not be blank (content may be blank → '')
            2. The note must exist
            3. At least one field must be supplied

        Raises:
            ValidationError: blank title, or nothing to update
            NotFoundError:   no row with this id
        """
        supplied = payload.model_dump(exclude_unset=True)
        changes: Dict[str, Any] = {}

        if "title" in supplied:
            changes["title"] = require_text(
                supplied["title"], "Title cannot be empty", field="title"
            )
        if "content" in supplied:
            changes["content"] = optional_text(supplied["content"])

        await self._ensure_exists(db, note_id)

        if not changes:
            raise ValidationError(message="No fields to update")

        changes["updated_at"] = utcnow()
        result = await db.execute(
            update(notes).where(notes.c.id == bindparam("note_id")).values(**changes),
            {"note_id": note_id},
        )
        if not result.ok:
            # Deleted between the existence check and the write
            raise NotFoundError(resource="note", resource_id=note_id)

        logger.info("Note %s updated (%s)", note_id, ", ".join(sorted(changes)))
        return await self.get_note(db, note_id)

    async def delete_note(self, db: Datastore, note_id: int) -> None:
        """
        Delete an existing note.

        Raises:
            NotFoundError: no row with this id
        """
        await self._ensure_exists(db, note_id)
        result = await db.execute(DELETE_NOTE, {"note_id": note_id})
        if not result.ok:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.info("Note %s deleted", note_id)

    async def _ensure_exists(self, db: Datastore, note_id: int) -> None:
        if not storable_id(note_id):
            raise NotFoundError(resource="note", resource_id=note_id)
        rows = await db.query(NOTE_EXISTS, {"note_id": note_id})
        if not rows:
            raise NotFoundError(resource="note", resource_id=note_id)


note_service = NoteService()
