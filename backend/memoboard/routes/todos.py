"""
Memoboard Backend: Todos Route Handlers
=========================================

Mirror of routes/notes.py for the todos resource.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from memoboard.database import Datastore, get_datastore
from memoboard.routes.notes import ERROR_RESPONSES
from memoboard.schemas.common import ApiResponse, ok
from memoboard.schemas.todo import TodoCreate, TodoResponse, TodoUpdate
from memoboard.services.todo_service import todo_service
from memoboard.validation import parse_identifier

router = APIRouter(tags=["Todos"])


@router.get(
    "/todos",
    response_model=ApiResponse[List[TodoResponse]],
    response_model_exclude_unset=True,
    responses={500: ERROR_RESPONSES[500]},
    summary="List todos, pending first then newest first",
)
async def list_todos(db: Datastore = Depends(get_datastore)):
    return ok(await todo_service.list_todos(db))


@router.post(
    "/todos",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[TodoResponse],
    response_model_exclude_unset=True,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
    summary="Create a todo",
)
async def create_todo(payload: TodoCreate, db: Datastore = Depends(get_datastore)):
    return ok(await todo_service.create_todo(db, payload))


@router.get(
    "/todos/{todo_id}",
    response_model=ApiResponse[TodoResponse],
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="Get a single todo by ID",
)
async def get_todo(todo_id: str, db: Datastore = Depends(get_datastore)):
    return ok(await todo_service.get_todo(db, parse_identifier(todo_id, "todo")))


@router.put(
    "/todos/{todo_id}",
    response_model=ApiResponse[TodoResponse],
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="Edit the task text and/or toggle completion",
)
async def update_todo(
    todo_id: str,
    payload: TodoUpdate,
    db: Datastore = Depends(get_datastore),
):
    return ok(
        await todo_service.update_todo(db, parse_identifier(todo_id, "todo"), payload)
    )


@router.delete(
    "/todos/{todo_id}",
    response_model=ApiResponse[None],
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
    summary="Delete a todo",
)
async def delete_todo(todo_id: str, db: Datastore = Depends(get_datastore)):
    await todo_service.delete_todo(db, parse_identifier(todo_id, "todo"))
    return ok(None)
