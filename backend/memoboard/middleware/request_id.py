"""
Memoboard Backend: Request ID Middleware
==========================================

What:  Assigns a short correlation id to every request and echoes it back
       in the X-Request-ID response header.
Why:   Every log line for one request (access log, datastore errors,
       unexpected exceptions) carries the same id.
How:   Reuses a client-supplied X-Request-ID when present, otherwise
       generates one, and stores it in a ContextVar for the loggers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
