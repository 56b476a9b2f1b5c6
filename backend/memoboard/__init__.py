"""
Memoboard Backend: Application Package Initializer
====================================================

What: Marks the `memoboard` directory as a Python package.
Why:  Enables module imports like `from memoboard.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │      UI Pages & View Models         │  ← Browser screens, local view state
    ├─────────────────────────────────────┤
    │       Client API Facade (httpx)     │  ← Envelope unwrapping, ApiError
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, existence checks
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy tables + Pydantic
    ├─────────────────────────────────────┤
    │        Datastore (Persistence)      │  ← query / execute over async engine
    └─────────────────────────────────────┘

    Routes handle status codes and the response envelope, services own the
    rules, and the datastore is the only component that talks to SQLAlchemy.
"""

__version__ = "1.0.0"
