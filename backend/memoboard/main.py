"""
Memoboard Backend: FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware, route mounting, error mapping
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn memoboard.main:app) and by the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌────────┐   │
    │  │  Req ID  │→│   Logging   │→│ GZip │→│  CORS  │   │
    │  └──────────┘ └─────────────┘ └──────┘ └────────┘   │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────┐ ┌───────────────┐ ┌──────────┐   │
    │  │ /api/notes... │ │ /api/todos... │ │ /health  │   │
    │  └───────────────┘ └───────────────┘ └──────────┘   │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Browser pages: /  /todos  /notes/{id}  /ui/*  │  │
    │  └───────────────────────────────────────────────┘  │
    │                                                     │
    │  Exception Handlers (→ {"success": false, ...}):    │
    │  Validation/InvalidId→400 │ NotFound→404 │ 405 │ 500│
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create tables if missing
    Shutdown: dispose the datastore's connection pool
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from memoboard import __version__
from memoboard.config import Settings, settings as default_settings
from memoboard.database import Datastore
from memoboard.exceptions import (
    DatastoreError,
    InvalidIdentifierError,
    MemoboardError,
    MethodNotAllowedError,
    NotFoundError,
    ValidationError,
)
from memoboard.middleware.logging import RequestLoggingMiddleware
from memoboard.middleware.request_id import RequestIDMiddleware, request_id_var
from memoboard.routes import health, notes, todos
from memoboard.schemas.common import failure
from memoboard.ui import pages

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Internal server error"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure application-wide logging.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These libraries log every statement / connection at INFO or DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  logging, then schema creation (tables are created if missing).
    Shutdown: dispose the engine so every pooled connection is closed.
    """
    app_settings: Settings = app.state.settings
    datastore: Datastore = app.state.datastore

    setup_logging(app_settings.log_level)
    logger.info("Memoboard %s starting up...", __version__)

    await datastore.create_schema()
    logger.info("Database ready: %s", datastore.engine.url.render_as_string(hide_password=True))
    logger.info(
        "Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port
    )

    yield

    logger.info("Memoboard shutting down...")
    await datastore.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _envelope_error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=failure(message), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map every exception type to an HTTP status and the error envelope.

    Handler hierarchy:
        ValidationError          → 400
        InvalidIdentifierError   → 400
        RequestValidationError   → 400 (malformed JSON / wrong body types)
        NotFoundError            → 404
        405 from the router      → MethodNotAllowedError → 405
        DatastoreError           → 500 (generic message)
        MemoboardError (base)    → 500 (generic message)
        Exception (fallback)     → 500 (generic message, stack trace logged)

    Internal details (SQL, driver errors, stack traces) are logged only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _envelope_error(400, exc.message)

    @app.exception_handler(InvalidIdentifierError)
    async def handle_invalid_identifier(request: Request, exc: InvalidIdentifierError):
        logger.warning("[%s] %s | %s", request_id_var.get(""), exc.message, exc.context)
        return _envelope_error(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        logger.warning("[%s] Invalid request body: %s", request_id_var.get(""), exc.errors())
        return _envelope_error(400, "Invalid request body")

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _envelope_error(404, exc.message)

    @app.exception_handler(MethodNotAllowedError)
    async def handle_method_not_allowed(request: Request, exc: MethodNotAllowedError):
        return _envelope_error(405, exc.message, headers=exc.context.get("headers"))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Router-level errors (unknown path, unsupported verb) in envelope form."""
        if exc.status_code == 405:
            return await handle_method_not_allowed(
                request,
                MethodNotAllowedError(request.method, context={"headers": exc.headers}),
            )
        return _envelope_error(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(DatastoreError)
    async def handle_datastore_error(request: Request, exc: DatastoreError):
        logger.error(
            "[%s] Datastore error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _envelope_error(500, GENERIC_SERVER_ERROR)

    @app.exception_handler(MemoboardError)
    async def handle_app_error(request: Request, exc: MemoboardError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return _envelope_error(500, GENERIC_SERVER_ERROR)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _envelope_error(500, GENERIC_SERVER_ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: explicit configuration; defaults to the environment-loaded
                      `memoboard.config.settings`.

    The datastore is created here (the engine connects lazily) and stored on
    app.state, so handlers receive it through the get_datastore dependency
    rather than a process-wide global.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Memoboard API",
        description="Personal notes and todos: JSON CRUD API plus browser pages.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.datastore = Datastore.from_settings(app_settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router, prefix=app_settings.api_prefix)
    app.include_router(todos.router, prefix=app_settings.api_prefix)
    app.include_router(health.router)
    app.include_router(pages.router)

    return app


app = create_app()
