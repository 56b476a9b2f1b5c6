"""
Memoboard Backend: Notes Route Handlers
=========================================

What:  Collection endpoint (GET/POST /notes) and item endpoint
       (GET/PUT/DELETE /notes/{id}).
How:   Parses the path id, delegates to NoteService, wraps the result in the
       success envelope. Every failure is raised as an exception and turned
       into the error envelope by the handlers registered in main.py.

The id is taken as a raw string so that "abc" produces the 400
`Invalid note ID format` envelope instead of FastAPI's default 422.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from memoboard.database import Datastore, get_datastore
from memoboard.schemas.common import ApiResponse, ok
from memoboard.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from memoboard.services.note_service import note_service
from memoboard.validation import parse_identifier

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

ERROR_RESPONSES = {
    400: {"description": "Invalid input or id", "model": ApiResponse[None]},
    404: {"description": "Note not found", "model": ApiResponse[None]},
    500: {"description": "Server error", "model": ApiResponse[None]},
}


@router.get(
    "/notes",
    response_model=ApiResponse[List[NoteResponse]],
    response_model_exclude_unset=True,
    responses={500: ERROR_RESPONSES[500]},
    summary="List all notes, newest first",
)
async def list_notes(db: Datastore = Depends(get_datastore)):
    return ok(await note_service.list_notes(db))


@router.post(
    "/notes",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[NoteResponse],
    response_model_exclude_unset=True,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
    summary="Create a note",
)
async def create_note(payload: NoteCreate, db: Datastore = Depends(get_datastore)):
    """Returns the stored row, including the server-assigned id and timestamps."""
    return ok(await note_service.create_note(db, payload))


@router.get(
    "/notes/{note_id}",
    response_model=ApiResponse[NoteResponse],
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="Get a single note by ID",
)
async def get_note(note_id: str, db: Datastore = Depends(get_datastore)):
    return ok(await note_service.get_note(db, parse_identifier(note_id, "note")))


@router.put(
    "/notes/{note_id}",
    response_model=ApiResponse[NoteResponse],
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="Update title and/or content of a note",
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    db: Datastore = Depends(get_datastore),
):
    """Only the fields present in the body change; updated_at is always refreshed."""
    return ok(
        await note_service.update_note(db, parse_identifier(note_id, "note"), payload)
    )


@router.delete(
    "/notes/{note_id}",
    response_model=ApiResponse[None],
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="Delete a note",
)
async def delete_note(note_id: str, db: Datastore = Depends(get_datastore)):
    await note_service.delete_note(db, parse_identifier(note_id, "note"))
    return ok(None)
