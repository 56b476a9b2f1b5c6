"""
Memoboard UI: View Models
===========================

What:  State and actions behind the three screens (overview, todo list,
       note editor).
Why:   The screens hold local view state, call the client facade, and
       re-render; keeping that logic here makes it testable without a browser.
How:   Each view owns a `loading` flag, its in-memory records and pending form
       state, plus a Notifier that collects user-visible messages.

Action Rules:
    - Local state changes only after the API call succeeded
      (prepend on create, replace on update/toggle, remove on delete)
    - Every action reports success or failure through the notifier
    - On ApiError the previous state is left exactly as it was
    - Destructive actions ask the supplied `confirm` callable first
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from memoboard.client.api import ApiClient, ApiError
from memoboard.validation import leading_integer

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Confirm = Callable[[str], bool]


@dataclass(frozen=True)
class Notification:
    level: str  # "success" | "error"
    message: str


class Notifier:
    """Collects notifications until the page renders them."""

    def __init__(self) -> None:
        self.messages: List[Notification] = []

    def success(self, message: str) -> None:
        self.messages.append(Notification("success", message))

    def error(self, message: str) -> None:
        logger.warning("UI error: %s", message)
        self.messages.append(Notification("error", message))

    def drain(self) -> List[Notification]:
        messages, self.messages = self.messages, []
        return messages


def _replace(records: List[Record], updated: Record) -> List[Record]:
    return [updated if r["id"] == updated["id"] else r for r in records]


def _without(records: List[Record], record_id: int) -> List[Record]:
    return [r for r in records if r["id"] != record_id]


class TodoActions:
    """Todo create/toggle/delete shared by the overview and the todo list."""

    api: ApiClient
    notifier: Notifier
    todos: List[Record]

    def _init_todo_form(self) -> None:
        self.new_todo = {"task": ""}
        self.creating_todo = False

    async def create_todo(self, task: Optional[str] = None) -> bool:
        if task is not None:
            self.new_todo = {"task": task}
        if not self.new_todo["task"].strip():
            self.notifier.error("Task is required")
            return False

        self.creating_todo = True
        try:
            created = await self.api.todos.create(self.new_todo["task"])
        except ApiError as e:
            self.notifier.error(e.message or "Failed to create todo")
            return False
        finally:
            self.creating_todo = False

        self.todos = [created] + self.todos
        self.new_todo = {"task": ""}
        self.notifier.success("Todo created successfully")
        return True

    async def toggle_todo(self, todo_id: int, completed: bool) -> bool:
        try:
            updated = await self.api.todos.update(todo_id, completed=completed)
        except ApiError:
            self.notifier.error("Failed to update todo")
            return False

        self.todos = _replace(self.todos, updated)
        self.notifier.success(f"Todo {'completed' if completed else 'reopened'}")
        return True

    async def delete_todo(self, todo_id: int, confirm: Confirm) -> bool:
        if not confirm("Are you sure you want to delete this todo?"):
            return False
        try:
            await self.api.todos.delete(todo_id)
        except ApiError:
            self.notifier.error("Failed to delete todo")
            return False

        self.todos = _without(self.todos, todo_id)
        self.notifier.success("Todo deleted successfully")
        return True


class HomeView(TodoActions):
    """Overview screen: recent notes, todo progress, note and todo creation."""

    RECENT_LIMIT = 3

    def __init__(self, api: ApiClient, notifier: Optional[Notifier] = None):
        self.api = api
        self.notifier = notifier or Notifier()
        self.loading = False
        self.notes: List[Record] = []
        self.todos: List[Record] = []
        self.new_note = {"title": "", "content": ""}
        self.creating_note = False
        self._init_todo_form()

    @property
    def recent_notes(self) -> List[Record]:
        return self.notes[: self.RECENT_LIMIT]

    @property
    def recent_todos(self) -> List[Record]:
        return self.todos[: self.RECENT_LIMIT]

    async def load(self) -> None:
        self.loading = True
        try:
            notes, todos = await asyncio.gather(self.api.notes.list(), self.api.todos.list())
        except ApiError:
            self.notifier.error("Failed to load data. Please try again.")
        else:
            self.notes, self.todos = notes, todos
        finally:
            self.loading = False

    async def create_note(self, title: Optional[str] = None, content: Optional[str] = None) -> bool:
        if title is not None:
            self.new_note = {"title": title, "content": content or ""}
        if not self.new_note["title"].strip():
            self.notifier.error("Title is required")
            return False

        self.creating_note = True
        try:
            created = await self.api.notes.create(
                self.new_note["title"], self.new_note["content"]
            )
        except ApiError as e:
            self.notifier.error(e.message or "Failed to create note")
            return False
        finally:
            self.creating_note = False

        self.notes = [created] + self.notes
        self.new_note = {"title": "", "content": ""}
        self.notifier.success("Note created successfully")
        return True

    async def delete_note(self, note_id: int, confirm: Confirm) -> bool:
        if not confirm("Are you sure you want to delete this note?"):
            return False
        try:
            await self.api.notes.delete(note_id)
        except ApiError:
            self.notifier.error("Failed to delete note")
            return False

        self.notes = _without(self.notes, note_id)
        self.notifier.success("Note deleted successfully")
        return True


class TodoListView(TodoActions):
    """Todo screen: pending/completed sections, quick add, inline editing."""

    def __init__(self, api: ApiClient, notifier: Optional[Notifier] = None):
        self.api = api
        self.notifier = notifier or Notifier()
        self.loading = False
        self.todos: List[Record] = []
        self.editing_id: Optional[int] = None
        self.edit_task = ""
        self._init_todo_form()

    @property
    def pending(self) -> List[Record]:
        return [t for t in self.todos if t["completed"] == 0]

    @property
    def completed(self) -> List[Record]:
        return [t for t in self.todos if t["completed"] == 1]

    async def load(self) -> None:
        self.loading = True
        try:
            self.todos = await self.api.todos.list()
        except ApiError:
            self.notifier.error("Failed to load todos. Please try again.")
        finally:
            self.loading = False

    def start_editing(self, todo: Record) -> None:
        self.editing_id = todo["id"]
        self.edit_task = todo["task"]

    def cancel_editing(self) -> None:
        self.editing_id = None
        self.edit_task = ""

    async def save_edit(self, todo_id: int, task: Optional[str] = None) -> bool:
        if task is not None:
            self.edit_task = task
        if not self.edit_task.strip():
            self.notifier.error("Task cannot be empty")
            return False

        try:
            updated = await self.api.todos.update(todo_id, task=self.edit_task)
        except ApiError:
            self.notifier.error("Failed to update todo")
            return False

        self.todos = _replace(self.todos, updated)
        self.cancel_editing()
        self.notifier.success("Todo updated successfully")
        return True

    async def handle_edit_key(self, key: str) -> bool:
        """Enter saves the inline edit, Escape abandons it."""
        if self.editing_id is None:
            return False
        if key == "Enter":
            return await self.save_edit(self.editing_id)
        if key == "Escape":
            self.cancel_editing()
        return False


class NoteEditorView:
    """Single-note editor with unsaved-changes tracking and Ctrl+S."""

    def __init__(self, api: ApiClient, notifier: Optional[Notifier] = None):
        self.api = api
        self.notifier = notifier or Notifier()
        self.loading = False
        self.saving = False
        self.note: Optional[Record] = None
        self.form = {"title": "", "content": ""}
        self.has_changes = False
        # Set when the screen should navigate away (e.g. "/")
        self.redirect_to: Optional[str] = None

    async def load(self, note_id: Any) -> None:
        if not isinstance(note_id, int):
            note_id = leading_integer(note_id if isinstance(note_id, str) else None)
        if note_id is None:
            self.notifier.error("Invalid note ID")
            self.redirect_to = "/"
            return

        self.loading = True
        try:
            note = await self.api.notes.get(note_id)
        except ApiError as e:
            self.notifier.error("Note not found" if e.status == 404 else "Failed to load note")
            self.redirect_to = "/"
            return
        finally:
            self.loading = False

        self.note = note
        self.form = {"title": note["title"], "content": note["content"]}
        self.has_changes = False

    def edit(self, field: str, value: str) -> None:
        if field not in self.form:
            raise ValueError(f"Unknown note field '{field}'")
        self.form[field] = value
        self.has_changes = True

    async def save(self) -> bool:
        if self.note is None:
            return False
        if not self.form["title"].strip():
            self.notifier.error("Title is required")
            return False

        self.saving = True
        try:
            updated = await self.api.notes.update(
                self.note["id"], title=self.form["title"], content=self.form["content"]
            )
        except ApiError as e:
            self.notifier.error(e.message or "Failed to save note")
            return False
        finally:
            self.saving = False

        self.note = updated
        self.form = {"title": updated["title"], "content": updated["content"]}
        self.has_changes = False
        self.notifier.success("Note saved successfully")
        return True

    async def handle_key(self, key: str, ctrl: bool = False) -> bool:
        """Ctrl+S saves when there is something to save."""
        if ctrl and key.lower() == "s" and self.has_changes:
            return await self.save()
        return False

    async def delete(self, confirm: Confirm) -> bool:
        if self.note is None:
            return False
        if not confirm("Are you sure you want to delete this note? This action cannot be undone."):
            return False
        try:
            await self.api.notes.delete(self.note["id"])
        except ApiError:
            self.notifier.error("Failed to delete note")
            return False

        self.notifier.success("Note deleted successfully")
        self.redirect_to = "/"
        return True

    def leave(self, confirm: Confirm) -> bool:
        """Navigate home, asking first when edits would be lost."""
        if self.has_changes and not confirm("You have unsaved changes. Leave without saving?"):
            return False
        self.redirect_to = "/"
        return True
