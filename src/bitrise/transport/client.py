"""httpx-backed transport."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from bitrise.errors import DecodingError
from bitrise.result import Failure, Result, Success
from bitrise.retry import (
    RetryPolicy,
    retry_async,
    should_retry_read,
    should_retry_side_effect,
)
from bitrise.transport._errors import wrap_transport_error

if TYPE_CHECKING:
    from bitrise.descriptors import APIRequest

logger = logging.getLogger(__name__)

_USER_AGENT = "bitrise-client-python"


class HttpxTransport:
    """Send descriptors over an ``httpx.AsyncClient``.

    Injects the ``Authorization`` header, retries per ``RetryPolicy`` and
    reports every outcome as a ``Result``. Reads retry on retryable statuses
    and network errors; side-effecting methods retry only on explicit server
    signals.
    """

    def __init__(
        self,
        token: str,
        *,
        timeout_s: float = 30.0,
        retry: RetryPolicy | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize with an API token; ``client`` is borrowed, not owned."""
        self._token = token
        self._timeout_s = timeout_s
        self._retry = retry or RetryPolicy()
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Lazily create the owned client on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout_s)
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": self._token,
            "Accept": "application/json",
            "User-Agent": _USER_AGENT,
        }

    async def send(self, request: APIRequest[Any]) -> Result[Any]:
        """Send ``request`` and return its decoded JSON payload."""
        should_retry = (
            should_retry_read if request.method == "GET" else should_retry_side_effect
        )
        try:
            payload = await retry_async(
                lambda: self._send_once(request),
                policy=self._retry,
                should_retry=should_retry,
            )
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            return Failure(exc)
        return Success(payload)

    async def _send_once(self, request: APIRequest[Any]) -> Any:
        client = self._get_client()
        params = request.query_params()
        try:
            response = await client.request(
                request.method,
                request.url,
                params=params or None,
                json=request.body,
                headers=self._headers(),
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise wrap_transport_error(exc, request=request) from exc

        logger.debug(
            "%s %s -> %d", request.method, request.path, response.status_code
        )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise DecodingError(
                f"{request.method} {request.path} returned non-JSON content",
                hint=f"Content-Type was {response.headers.get('content-type')!r}.",
            ) from exc

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
