"""
Memoboard Client: Typed API Facade
====================================

What:  Async wrapper turning UI actions into HTTP calls against the JSON API.
Why:   Callers never look at status codes or envelopes: they get the `data`
       payload back, or an ApiError carrying the server's message and status.
How:   One httpx.AsyncClient per ApiClient; `notes` and `todos` expose one
       coroutine per endpoint.

Failure Paths (all raise ApiError):
    - Envelope with success=false    → ApiError(server error message, status)
    - Body is not a JSON envelope    → ApiError("Unexpected response from server", status)
    - No response at all (network)   → ApiError("Network request failed", status=None)

No request is retried automatically; timeouts are the transport's.

Example:
    async with ApiClient("http://127.0.0.1:8000") as api:
        note = await api.notes.create("Groceries", "milk, eggs")
        await api.notes.update(note["id"], title="Shopping")
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from memoboard.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """
    Single error type raised by the facade.

    Attributes:
        message: server-supplied (or facade-generated) description
        status:  HTTP status code, or None when no response was received
    """

    def __init__(self, message: str, status: Optional[int] = None):
        self.message = message
        self.status = status
        super().__init__(message)

    def __repr__(self) -> str:
        return f"ApiError(message={self.message!r}, status={self.status!r})"


class ApiClient:
    """
    Entry point of the facade.

    Args:
        base_url:   server root, e.g. "http://127.0.0.1:8000"
                    (defaults to settings.backend_host/backend_port)
        transport:  optional httpx transport (httpx.ASGITransport for in-process use)
        timeout:    seconds per request (defaults to settings.client_timeout)
        api_prefix: path prefix of the JSON API (defaults to settings.api_prefix)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
        api_prefix: Optional[str] = None,
    ):
        root = base_url or f"http://{settings.backend_host}:{settings.backend_port}"
        prefix = settings.api_prefix if api_prefix is None else api_prefix
        self._http = httpx.AsyncClient(
            base_url=root.rstrip("/") + prefix,
            transport=transport,
            timeout=timeout or settings.client_timeout,
            headers={"Content-Type": "application/json"},
        )
        self.notes = NotesApi(self)
        self.todos = TodosApi(self)

    async def request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Perform one call and unwrap the envelope."""
        try:
            response = await self._http.request(method, endpoint, json=payload)
        except httpx.RequestError as e:
            logger.error("API request failed: %s %s: %s", method, endpoint, e)
            raise ApiError("Network request failed") from e

        try:
            body = response.json()
        except ValueError as e:
            raise ApiError("Unexpected response from server", status=response.status_code) from e

        if not isinstance(body, dict) or "success" not in body:
            raise ApiError("Unexpected response from server", status=response.status_code)

        if not body["success"]:
            raise ApiError(body.get("error") or "API request failed", status=response.status_code)

        return body.get("data")

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class _ResourceApi:
    """Calls shared by both resources: list, get, delete."""

    collection = ""

    def __init__(self, client: ApiClient):
        self._client = client

    async def list(self) -> List[Dict[str, Any]]:
        return await self._client.request("GET", f"/{self.collection}")

    async def get(self, item_id: int) -> Dict[str, Any]:
        return await self._client.request("GET", f"/{self.collection}/{item_id}")

    async def delete(self, item_id: int) -> None:
        await self._client.request("DELETE", f"/{self.collection}/{item_id}")

    async def _create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._client.request("POST", f"/{self.collection}", payload)

    async def _update(self, item_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._client.request("PUT", f"/{self.collection}/{item_id}", payload)


class NotesApi(_ResourceApi):
    collection = "notes"

    async def create(self, title: str, content: str = "") -> Dict[str, Any]:
        return await self._create({"title": title, "content": content})

    async def update(
        self,
        note_id: int,
        *,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Send only the fields that were given."""
        payload = {"title": title, "content": content}
        return await self._update(note_id, {k: v for k, v in payload.items() if v is not None})


class TodosApi(_ResourceApi):
    collection = "todos"

    async def create(self, task: str) -> Dict[str, Any]:
        return await self._create({"task": task})

    async def update(
        self,
        todo_id: int,
        *,
        task: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Dict[str, Any]:
        payload = {"task": task, "completed": completed}
        return await self._update(todo_id, {k: v for k, v in payload.items() if v is not None})
