"""
Memoboard Backend: Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (mocked datastore, real SQLite
       app, HTTP client, sample rows).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_datastore:  AsyncMock Datastore (no real DB needed)
    ├── app_settings:    Settings pointing at a per-test SQLite file
    ├── app:             FastAPI app with the schema created
    ├── datastore:       the app's real Datastore
    ├── test_client:     HTTPX AsyncClient talking to the app in-process
    ├── api:             ApiClient facade bound to the same app
    ├── sample_note_row / sample_todo_row: dict rows as the datastore returns them
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any app imports, so the module-level
# `memoboard.main.app` never touches a real database file
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="memoboard_test_"), "default.db"
)
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from memoboard.client.api import ApiClient  # noqa: E402
from memoboard.config import Settings  # noqa: E402
from memoboard.database import Datastore, WriteResult  # noqa: E402
from memoboard.main import create_app  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Mocked Datastore (service unit tests)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_datastore():
    """
    Provides a mock Datastore.

    Usage:
        async def test_get_note(mock_datastore, sample_note_row):
            mock_datastore.query.return_value = [sample_note_row]
            note = await note_service.get_note(mock_datastore, 1)
    """
    db = AsyncMock(spec=Datastore)
    db.query = AsyncMock(return_value=[])
    db.execute = AsyncMock(return_value=WriteResult(ok=True))
    return db


@pytest.fixture
def sample_note_row():
    now = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)
    return {
        "id": 1,
        "title": "Groceries",
        "content": "milk, eggs",
        "created_at": now,
        "updated_at": now,
    }


@pytest.fixture
def sample_todo_row():
    now = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)
    return {
        "id": 1,
        "task": "Water the plants",
        "completed": 0,
        "created_at": now,
        "updated_at": now,
    }


# ══════════════════════════════════════════════════════════════════════════
# Real Application (SQLite file per test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(app_settings):
    """
    FastAPI app backed by a fresh SQLite database.

    ASGITransport does not run the lifespan, so the schema is created here.
    """
    application = create_app(app_settings)
    await application.state.datastore.create_schema()
    yield application
    await application.state.datastore.dispose()


@pytest.fixture
def datastore(app) -> Datastore:
    return app.state.datastore


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def api(app):
    """ApiClient facade talking to the test app in-process."""
    async with ApiClient("http://test", transport=ASGITransport(app=app)) as client:
        yield client
