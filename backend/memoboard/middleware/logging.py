"""
Memoboard Backend: Request Logging Middleware
===============================================

What:  One access log line per HTTP request, correlated by request id.

Line format:
    "PUT /api/notes/3 -> 404 (2.4ms) [a1b2c3d4]"

Level follows the outcome:
    handler raised       → ERROR (line logged with status 500, then re-raised)
    5xx                  → ERROR
    4xx                  → WARNING (client mistakes: blank title, unknown id)
    anything else        → INFO

Request bodies are never logged: note contents are personal data.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from memoboard.middleware.request_id import request_id_var

logger = logging.getLogger("memoboard.access")

# Probes run every few seconds
QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access line once the response (or the failure) is known."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log_line(request, 500, started)
            raise

        self._log_line(request, response.status_code, started)
        return response

    @staticmethod
    def _log_line(request: Request, status: int, started: float) -> None:
        elapsed_ms = (time.perf_counter() - started) * 1000
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.log(
            level_for_status(status),
            "%s %s -> %d (%.1fms) [%s]",
            request.method,
            request.url.path,
            status,
            elapsed_ms,
            rid,
            extra={
                "request_id": rid,
                "status": status,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": request.client.host if request.client else None,
            },
        )
