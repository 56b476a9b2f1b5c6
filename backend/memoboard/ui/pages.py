"""
Memoboard UI: Browser Pages
=============================

What:  Server-rendered screens (overview, todo list, note editor) and the
       form-post actions behind their buttons.
Why:   The screens talk to the JSON API exactly like any other client, so
       they go through the ApiClient facade instead of calling services.
How:   Each request opens an ApiClient over httpx.ASGITransport bound to this
       same app, drives a view model, and renders the resulting state.

Routes:
    GET  /                        → overview
    GET  /todos[?edit=<id>]       → todo list (optionally with inline editor open)
    GET  /notes/{note_id}         → note editor
    POST /ui/notes                → create note              (re-renders overview)
    POST /ui/notes/{id}/save      → save note                (re-renders editor)
    POST /ui/notes/{id}/delete    → delete note              (overview or redirect)
    POST /ui/todos                → create todo              (re-renders `view`)
    POST /ui/todos/{id}/toggle    → mark done / reopen       (re-renders `view`)
    POST /ui/todos/{id}/edit      → save inline task edit    (re-renders todo list)
    POST /ui/todos/{id}/delete    → delete todo              (re-renders `view`)

Screens are Jinja2 templates under memoboard/templates (autoescaped).

Delete confirmations happen in the browser (`onsubmit="return confirm(...)"`);
a delete that reaches the server has already been confirmed.
"""

from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlencode

import httpx
from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from memoboard.client.api import ApiClient
from memoboard.ui.views import HomeView, NoteEditorView, Notifier, TodoListView
from memoboard.validation import leading_integer

router = APIRouter(include_in_schema=False)

TodoScreen = Union[HomeView, TodoListView]

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def confirmed_by_browser(message: str) -> bool:
    return True


def _page(request: Request, template: str, view, notifier: Notifier) -> HTMLResponse:
    return templates.TemplateResponse(
        request, template, {"view": view, "notifications": notifier.drain()}
    )


def _api(request: Request) -> ApiClient:
    return ApiClient(
        str(request.base_url),
        transport=httpx.ASGITransport(app=request.app),
        api_prefix=request.app.state.settings.api_prefix,
    )


def _redirect(path: str, **params: str) -> RedirectResponse:
    url = f"{path}?{urlencode(params)}" if params else path
    return RedirectResponse(url, status_code=303)


def _editor_redirect(view: NoteEditorView, notifier: Notifier) -> RedirectResponse:
    last = notifier.drain()[-1]
    key = "notice" if last.level == "success" else "error"
    return _redirect(view.redirect_to, **{key: last.message})


def _render_todo_screen(request: Request, screen: TodoScreen, notifier: Notifier) -> HTMLResponse:
    if isinstance(screen, TodoListView):
        return _page(request, "todos.html", screen, notifier)
    return _page(request, "home.html", screen, notifier)


# ── Screens ───────────────────────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse)
async def home_page(request: Request, notice: Optional[str] = None, error: Optional[str] = None):
    notifier = Notifier()
    if notice:
        notifier.success(notice)
    if error:
        notifier.error(error)

    async with _api(request) as api:
        view = HomeView(api, notifier)
        await view.load()
    return _page(request, "home.html", view, notifier)


@router.get("/todos", response_class=HTMLResponse)
async def todos_page(request: Request, edit: Optional[str] = None):
    notifier = Notifier()
    async with _api(request) as api:
        view = TodoListView(api, notifier)
        await view.load()

    editing_id = leading_integer(edit)
    for todo in view.pending:
        if todo["id"] == editing_id:
            view.start_editing(todo)
            break
    return _page(request, "todos.html", view, notifier)


@router.get("/notes/{note_id}", response_class=HTMLResponse)
async def note_page(request: Request, note_id: str):
    notifier = Notifier()
    async with _api(request) as api:
        view = NoteEditorView(api, notifier)
        await view.load(note_id)

    if view.redirect_to:
        return _editor_redirect(view, notifier)
    return _page(request, "note.html", view, notifier)


# ── Note actions ──────────────────────────────────────────────────────────

@router.post("/ui/notes", response_class=HTMLResponse)
async def create_note_action(request: Request, title: str = Form(""), content: str = Form("")):
    notifier = Notifier()
    async with _api(request) as api:
        view = HomeView(api, notifier)
        await view.load()
        await view.create_note(title, content)
    return _page(request, "home.html", view, notifier)


@router.post("/ui/notes/{note_id}/save", response_class=HTMLResponse)
async def save_note_action(
    request: Request,
    note_id: str,
    title: str = Form(""),
    content: str = Form(""),
):
    notifier = Notifier()
    async with _api(request) as api:
        view = NoteEditorView(api, notifier)
        await view.load(note_id)
        if view.note is not None:
            view.edit("title", title)
            view.edit("content", content)
            await view.save()

    if view.redirect_to:
        return _editor_redirect(view, notifier)
    return _page(request, "note.html", view, notifier)


@router.post("/ui/notes/{note_id}/delete")
async def delete_note_action(request: Request, note_id: str, view: str = Form("home")):
    notifier = Notifier()

    if view == "editor":
        async with _api(request) as api:
            editor = NoteEditorView(api, notifier)
            await editor.load(note_id)
            if editor.note is not None:
                await editor.delete(confirmed_by_browser)
        if editor.redirect_to:
            return _editor_redirect(editor, notifier)
        return _page(request, "note.html", editor, notifier)

    async with _api(request) as api:
        home = HomeView(api, notifier)
        await home.load()
        parsed = leading_integer(note_id)
        if parsed is None:
            notifier.error("Invalid note ID")
        else:
            await home.delete_note(parsed, confirmed_by_browser)
    return _page(request, "home.html", home, notifier)


# ── Todo actions ──────────────────────────────────────────────────────────

def _todo_screen(api: ApiClient, view: str, notifier: Notifier) -> TodoScreen:
    if view == "todos":
        return TodoListView(api, notifier)
    return HomeView(api, notifier)


@router.post("/ui/todos", response_class=HTMLResponse)
async def create_todo_action(request: Request, task: str = Form(""), view: str = Form("home")):
    notifier = Notifier()
    async with _api(request) as api:
        screen = _todo_screen(api, view, notifier)
        await screen.load()
        await screen.create_todo(task)
    return _render_todo_screen(request, screen, notifier)


@router.post("/ui/todos/{todo_id}/toggle", response_class=HTMLResponse)
async def toggle_todo_action(
    request: Request,
    todo_id: str,
    completed: str = Form("1"),
    view: str = Form("home"),
):
    notifier = Notifier()
    async with _api(request) as api:
        screen = _todo_screen(api, view, notifier)
        await screen.load()
        parsed = leading_integer(todo_id)
        if parsed is None:
            notifier.error("Failed to update todo")
        else:
            await screen.toggle_todo(parsed, completed == "1")
    return _render_todo_screen(request, screen, notifier)


@router.post("/ui/todos/{todo_id}/edit", response_class=HTMLResponse)
async def edit_todo_action(request: Request, todo_id: str, task: str = Form("")):
    notifier = Notifier()
    async with _api(request) as api:
        screen = TodoListView(api, notifier)
        await screen.load()
        parsed = leading_integer(todo_id)
        if parsed is None:
            notifier.error("Failed to update todo")
        else:
            screen.editing_id = parsed
            await screen.save_edit(parsed, task)
    return _page(request, "todos.html", screen, notifier)


@router.post("/ui/todos/{todo_id}/delete", response_class=HTMLResponse)
async def delete_todo_action(request: Request, todo_id: str, view: str = Form("home")):
    notifier = Notifier()
    async with _api(request) as api:
        screen = _todo_screen(api, view, notifier)
        await screen.load()
        parsed = leading_integer(todo_id)
        if parsed is None:
            notifier.error("Failed to delete todo")
        else:
            await screen.delete_todo(parsed, confirmed_by_browser)
    return _render_todo_screen(request, screen, notifier)
