"""
Memoboard Backend: Shared Response Schemas
============================================

What:  The response envelope wrapping every API body, plus the health model.
Why:   Clients parse one shape for every endpoint:
           {"success": true,  "data": ...}
           {"success": false, "error": "Note not found"}
How:   Success responses are returned as ApiResponse[T] from route handlers
       with `response_model_exclude_unset=True`, so `error` is omitted and an
       explicit `data=None` (DELETE) is still serialized as `"data": null`.
       Error responses are built by the exception handlers in main.py.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform `{success, data?, error?}` envelope."""

    success: bool = Field(description="True when the request was applied")
    data: Optional[T] = Field(default=None, description="Payload on success")
    error: Optional[str] = Field(default=None, description="Human-readable error on failure")


def ok(data=None) -> dict:
    """Success envelope body; `data` is always present, even when None."""
    return {"success": True, "data": data}


def failure(message: str) -> dict:
    """Error envelope body."""
    return {"success": False, "error": message}


class HealthResponse(BaseModel):
    """
    Health check response showing service and dependency status.

    Why check the database: a backend that cannot reach its database is
    effectively down, so the check covers the whole chain.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
