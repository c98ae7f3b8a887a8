"""Async client for the watchlist REST backend.

Whole-collection save/load only. No retries, no cancellation, and no timeout
beyond the transport default unless one is configured.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any

import httpx

from watchlist_tracker.exceptions import RemoteStoreError
from watchlist_tracker.models.row import Row

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000/api"

SAVE_FALLBACK_MESSAGE = "Failed to save to database"
LOAD_FALLBACK_MESSAGE = "Failed to load from database"
INFO_FALLBACK_MESSAGE = "Failed to get database info"


@dataclass
class SaveResult:
    """Server acknowledgement of a snapshot save."""

    success: bool
    message: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class DatabaseInfo:
    """Backend database location and per-table row counts."""

    db_path: str
    tables: dict[str, int] = field(default_factory=dict)


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_message(body: dict[str, Any], fallback: str) -> str:
    """Server ``error`` or string ``detail``; FastAPI 422 detail lists use the fallback."""
    for key in ("error", "detail"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return fallback


class RemoteWatchlistClient:
    """REST client for /save-watchlist, /load-watchlist and /db-info.

    Usage:
        async with RemoteWatchlistClient("http://localhost:3000/api") as client:
            result = await client.save(rows)
            rows = await client.load()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL (e.g. ``http://localhost:3000/api``).
            timeout: Request timeout in seconds; None keeps the httpx default.
            transport: Optional httpx transport (tests use ``httpx.MockTransport``).
        """
        self.base_url = base_url.rstrip("/")
        client_kwargs: dict[str, Any] = {"base_url": self.base_url, "transport": transport}
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> RemoteWatchlistClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, fallback: str, **kwargs: Any) -> dict[str, Any]:
        """Send a request and return the JSON body of a 2xx response.

        Raises:
            RemoteStoreError: On transport failure or non-2xx status.
        """
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise RemoteStoreError(f"{fallback}: {e}") from e

        body = _json_body(response)
        if not response.is_success:
            message = _error_message(body, fallback)
            logger.error("%s %s returned %d: %s", method, path, response.status_code, message)
            raise RemoteStoreError(message, status_code=response.status_code)
        return body

    async def save(self, rows: list[Row]) -> SaveResult:
        """Save the full row collection as a new snapshot."""
        body = await self._request("POST", "/save-watchlist", SAVE_FALLBACK_MESSAGE, json={"data": rows})
        return SaveResult(
            success=bool(body.get("success", False)),
            message=str(body.get("message", "")),
            metadata=dict(body.get("metadata") or {}),
        )

    async def load(self) -> list[Row]:
        """Load the rows of the latest snapshot ([] when none exists)."""
        body = await self._request("GET", "/load-watchlist", LOAD_FALLBACK_MESSAGE)
        data = body.get("data") or []
        if not isinstance(data, list):
            raise RemoteStoreError(LOAD_FALLBACK_MESSAGE)
        return data

    async def db_info(self) -> DatabaseInfo:
        """Fetch database path and table counts."""
        body = await self._request("GET", "/db-info", INFO_FALLBACK_MESSAGE)
        return DatabaseInfo(
            db_path=str(body.get("dbPath", "")),
            tables={str(k): int(v) for k, v in (body.get("tables") or {}).items()},
        )
