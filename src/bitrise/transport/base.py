"""Transport protocol: the single outward seam of the request pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bitrise.descriptors import APIRequest
    from bitrise.result import Result


@runtime_checkable
class Transport(Protocol):
    """Minimal transport protocol: send one described request.

    Implementations own authentication, connection handling and retries, and
    report every outcome through the returned ``Result`` (the decoded JSON
    payload on success). Cancellation may propagate as ``CancelledError``.
    """

    async def send(self, request: APIRequest[Any]) -> Result[Any]:
        """Send ``request`` and return its decoded JSON payload."""
        ...
