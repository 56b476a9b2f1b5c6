"""
Memoboard Backend: Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for every failure the API reports.
Why:   Each exception maps to exactly one HTTP status and one envelope message,
       so handlers never build error responses by hand.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"success": false, "error": message}` with the right status.
Who:   Raised by the datastore, validation helpers and services.

Exception Hierarchy:
    MemoboardError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── InvalidIdentifierError   → 400 Bad Request (malformed path id)
    ├── NotFoundError            → 404 Not Found
    ├── MethodNotAllowedError    → 405 Method Not Allowed
    └── DatastoreError           → 500 Internal Server Error (generic message)
"""

from typing import Any, Dict, Optional


class MemoboardError(Exception):
    """
    Base exception for all Memoboard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MemoboardError):
    """
    Raised when client input fails validation.

    When:    Required text field blank after trimming, empty update body,
             malformed JSON body.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidIdentifierError(MemoboardError):
    """
    Raised when a path id cannot be parsed as an integer.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        resource: str = "resource",
        raw_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if raw_id is not None:
            ctx["raw_id"] = raw_id
        super().__init__(message=f"Invalid {resource} ID format", context=ctx)


class NotFoundError(MemoboardError):
    """
    Raised when a requested row does not exist.

    The datastore returns an empty row set for missing ids (not an exception);
    services convert that into NotFoundError so routes stay free of checks.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource.capitalize()} not found", context=ctx)


class MethodNotAllowedError(MemoboardError):
    """Raised for an HTTP verb the endpoint does not support (405)."""

    def __init__(
        self,
        method: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if method:
            ctx["method"] = method
        super().__init__(message="Method not allowed", context=ctx)


class DatastoreError(MemoboardError):
    """
    Raised when a database operation fails.

    What:    Connectivity loss, binding failure, constraint violation.
    HTTP:    500 Internal Server Error

    Security Note:
        The client always gets a generic message. The statement and the
        driver error are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
