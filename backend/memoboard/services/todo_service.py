"""
Memoboard Backend: Todo Service (Business Logic)
==================================================

Same shape as NoteService, different fields:
    - `task` is required and trimmed (like a note title)
    - `completed` is toggled independently and stored as exactly 0 or 1

List order: pending before completed, then newest-created first.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import asc, bindparam, delete, desc, insert, select, update

from memoboard.database import Datastore
from memoboard.exceptions import DatastoreError, NotFoundError, ValidationError
from memoboard.models.note import utcnow
from memoboard.models.todo import Todo
from memoboard.schemas.todo import TodoCreate, TodoResponse, TodoUpdate
from memoboard.validation import require_text, storable_id

logger = logging.getLogger(__name__)

todos = Todo.__table__

LIST_TODOS = select(todos).order_by(
    asc(todos.c.completed), desc(todos.c.created_at), desc(todos.c.id)
)
SELECT_TODO = select(todos).where(todos.c.id == bindparam("todo_id"))
TODO_EXISTS = select(todos.c.id).where(todos.c.id == bindparam("todo_id"))
DELETE_TODO = delete(todos).where(todos.c.id == bindparam("todo_id"))


class TodoService:
    """Business logic layer for todo operations."""

    async def list_todos(self, db: Datastore) -> List[TodoResponse]:
        rows = await db.query(LIST_TODOS)
        return [TodoResponse.model_validate(row) for row in rows]

    async def create_todo(self, db: Datastore, payload: TodoCreate) -> TodoResponse:
        """
        Insert a pending todo and return the stored row.

        Raises:
            ValidationError: task missing or blank after trimming
            DatastoreError:  the insert did not apply
        """
        task = require_text(payload.task, "Task is required", field="task")

        now = utcnow()
        result = await db.execute(
            insert(todos).values(task=task, completed=0, created_at=now, updated_at=now)
        )
        if not result.ok or result.last_insert_id is None:
            raise DatastoreError(
                message="Failed to create todo",
                context={"operation": "insert", "table": "todos"},
            )

        logger.info("Todo %s created", result.last_insert_id)
        return await self.get_todo(db, result.last_insert_id)

    async def get_todo(self, db: Datastore, todo_id: int) -> TodoResponse:
        if not storable_id(todo_id):
            raise NotFoundError(resource="todo", resource_id=todo_id)
        rows = await db.query(SELECT_TODO, {"todo_id": todo_id})
        if not rows:
            raise NotFoundError(resource="todo", resource_id=todo_id)
        return TodoResponse.model_validate(rows[0])

    async def update_todo(
        self, db: Datastore, todo_id: int, payload: TodoUpdate
    ) -> TodoResponse:
        """
        Apply a partial update (task and/or completed).

        Raises:
            ValidationError: blank task, null completed, or nothing to update
            NotFoundError:   no row with this id
        """
        supplied = payload.model_dump(exclude_unset=True)
        changes: Dict[str, Any] = {}

        if "task" in supplied:
            changes["task"] = require_text(
                supplied["task"], "Task cannot be empty", field="task"
            )
        if "completed" in supplied:
            if supplied["completed"] is None:
                raise ValidationError(
                    message="Completed must be true or false", field="completed"
                )
            changes["completed"] = 1 if supplied["completed"] else 0

        await self._ensure_exists(db, todo_id)

        if not changes:
            raise ValidationError(message="No fields to update")

        changes["updated_at"] = utcnow()
        result = await db.execute(
            update(todos).where(todos.c.id == bindparam("todo_id")).values(**changes),
            {"todo_id": todo_id},
        )
        if not result.ok:
            raise NotFoundError(resource="todo", resource_id=todo_id)

        logger.info("Todo %s updated (%s)", todo_id, ", ".join(sorted(changes)))
        return await self.get_todo(db, todo_id)

    async def delete_todo(self, db: Datastore, todo_id: int) -> None:
        await self._ensure_exists(db, todo_id)
        result = await db.execute(DELETE_TODO, {"todo_id": todo_id})
        if not result.ok:
            raise NotFoundError(resource="todo", resource_id=todo_id)
        logger.info("Todo %s deleted", todo_id)

    async def _ensure_exists(self, db: Datastore, todo_id: int) -> None:
        if not storable_id(todo_id):
            raise NotFoundError(resource="todo", resource_id=todo_id)
        rows = await db.query(TODO_EXISTS, {"todo_id": todo_id})
        if not rows:
            raise NotFoundError(resource="todo", resource_id=todo_id)


todo_service = TodoService()
