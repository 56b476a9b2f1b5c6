"""
Memoboard Backend: Datastore Access Layer
===========================================

What:  Async SQLAlchemy engine wrapper exposing `query` and `execute`.
Why:   Every handler talks to the database through exactly two calls, and
       every driver failure comes out as one exception type (DatastoreError).
How:   Each call borrows a pooled connection, runs one parameterized statement
       and returns plain dicts (reads) or a WriteResult (writes).
Who:   Created by the application factory, stored on `app.state.datastore`
       and injected into route handlers via `get_datastore`.
When:  Engine is created with the app; connections are opened per statement.

Transaction Model:
    query():   runs on a plain connection (no write, nothing to commit)
    execute(): runs inside `engine.begin()` so the single statement is
               committed before the call returns, or rolled back on error.
    No transaction ever spans two calls.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql import Executable

from memoboard.config import Settings
from memoboard.exceptions import DatastoreError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with a single metadata
    object, which `Datastore.create_schema()` uses to create the tables.
    """
    pass


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a write: whether any row was affected, and the new row id for inserts."""

    ok: bool
    last_insert_id: Optional[int] = None


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Build the async engine for the configured database.

    Pool sizing only applies to server databases: SQLite URLs (including
    in-memory ones, which use a static pool) reject pool_size/max_overflow.
    """
    kwargs: Dict[str, Any] = {
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(settings.database_url, **kwargs)


class Datastore:
    """
    Thin async facade over a SQLAlchemy engine.

    Contract:
        query(statement, params)   → list of complete rows (dicts); [] if none match
        execute(statement, params) → WriteResult(ok, last_insert_id)

    Any SQLAlchemyError raised by the driver, and OverflowError from binding
    an integer the driver cannot store, is logged with the statement text and
    re-raised as DatastoreError; callers above this layer never see raw
    driver exceptions.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "Datastore":
        return cls(create_engine_from_settings(settings))

    async def query(
        self,
        statement: Executable,
        params: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Run a parameterized read and return every row as a dict.

        Raises:
            DatastoreError: the statement could not be executed
        """
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(statement, dict(params or {}))
                return [dict(row) for row in result.mappings().all()]
        except (SQLAlchemyError, OverflowError) as e:
            logger.error("Datastore query failed: %s | %s", e, statement)
            raise DatastoreError(
                message="Failed to execute database query",
                context={"error_type": type(e).__name__},
            ) from e

    async def execute(
        self,
        statement: Executable,
        params: Optional[Mapping[str, Any]] = None,
    ) -> WriteResult:
        """
        Run a parameterized write in its own transaction.

        Returns:
            WriteResult with ok=False when the statement affected no rows,
            and last_insert_id populated for single-row INSERTs.

        Raises:
            DatastoreError: the statement could not be executed or committed
        """
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(statement, dict(params or {}))
                last_insert_id = None
                if result.is_insert and result.inserted_primary_key:
                    last_insert_id = result.inserted_primary_key[0]
                return WriteResult(ok=result.rowcount != 0, last_insert_id=last_insert_id)
        except (SQLAlchemyError, OverflowError) as e:
            logger.error("Datastore write failed: %s | %s", e, statement)
            raise DatastoreError(
                message="Failed to execute database update",
                context={"error_type": type(e).__name__},
            ) from e

    async def ping(self) -> bool:
        """Lightweight connectivity check (SELECT 1) used by the health check."""
        try:
            await self.query(text("SELECT 1"))
        except DatastoreError:
            return False
        return True

    async def create_schema(self) -> None:
        """Create the notes and todos tables if they do not exist yet."""
        from memoboard import models  # noqa: F401  registers tables on Base.metadata

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error("Schema creation failed: %s", e)
            raise DatastoreError(
                message="Failed to create database schema",
                context={"error_type": type(e).__name__},
            ) from e

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()


# ── Datastore Dependency ──────────────────────────────────────────────────
def get_datastore(request: Request) -> Datastore:
    """
    FastAPI dependency returning the datastore owned by the running app.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: Datastore = Depends(get_datastore)):
            return await note_service.list_notes(db)
    """
    return request.app.state.datastore
