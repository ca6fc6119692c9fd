"""Request execution: descriptor in, one typed ``Result`` out.

Both paths share a single dispatch routine and differ only in how the decoded
envelope is mapped:

- ``perform``: envelope ``data`` is delivered as-is.
- ``perform_paged``: ``data`` is repackaged with the *response* cursor into
  ``PagedData``; the caller's cursor is only used to shape the outgoing call.

Nothing here retries, logs failures, or translates errors. The only suspension
point is the transport; everything after it is synchronous mapping.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import TYPE_CHECKING, Any

from bitrise.envelope import decode_envelope, decode_payload
from bitrise.models import PagedData, Pagination
from bitrise.result import Failure, Result, map_result

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from bitrise.descriptors import APIRequest, PagedAPIRequest
    from bitrise.models import DataContainer
    from bitrise.transport.base import Transport

logger = logging.getLogger(__name__)


async def _dispatch(transport: Transport, request: APIRequest[Any]) -> Result[Any]:
    logger.debug("Dispatching %s %s", request.method, request.path)
    try:
        return await transport.send(request)
    except asyncio.CancelledError:
        raise
    except Exception as exc:
        # A transport that raises still yields exactly one delivery.
        return Failure(exc)


def _decode(request: APIRequest[Any]) -> Callable[[Any], DataContainer[Any]]:
    def decode(payload: Any) -> DataContainer[Any]:
        return decode_envelope(payload, request.response_type)

    return decode


async def perform[T](transport: Transport, request: APIRequest[T]) -> Result[T]:
    """Send ``request`` and deliver the envelope's value.

    Un-enveloped endpoints (``request.enveloped is False``) decode the whole
    payload as ``request.response_type`` instead.
    """
    raw = await _dispatch(transport, request)
    if not request.enveloped:
        return map_result(
            raw, lambda payload: decode_payload(payload, request.response_type)
        )
    container = map_result(raw, _decode(request))
    return map_result(container, lambda c: c.value)


def with_pagination[R: PagedAPIRequest[Any]](
    request: R, pagination: Pagination | None
) -> R:
    """Return a copy of ``request`` carrying the cursor's limit and next.

    With no cursor the request is returned unchanged. A cursor always
    overrides both fields, including an explicit ``next=None``.
    """
    if pagination is None:
        return request
    return dataclasses.replace(
        request, limit=pagination.page_item_limit, next=pagination.next
    )


async def perform_paged[T](
    transport: Transport,
    request: PagedAPIRequest[T],
    pagination: Pagination | None = None,
) -> Result[PagedData[T]]:
    """Send a paged ``request`` and deliver one page plus the next cursor.

    A response without paging metadata yields ``Pagination()``, whose
    ``has_next`` is False.
    """
    outgoing = with_pagination(request, pagination)
    raw = await _dispatch(transport, outgoing)
    container = map_result(raw, _decode(outgoing))
    return map_result(
        container,
        lambda c: PagedData(data=c.value, pagination=c.pagination or Pagination()),
    )


async def iterate_pages[T](
    fetch: Callable[[Pagination | None], Awaitable[Result[PagedData[T]]]],
    *,
    start: Pagination | None = None,
) -> AsyncIterator[Result[PagedData[T]]]:
    """Yield page results, threading each response cursor into the next call.

    Stops after the last page, after the first ``Failure`` (which is yielded),
    or when the server hands back a cursor it already returned.

    Example:
        async for page in iterate_pages(lambda p: service.get_apps(pagination=p)):
            apps.extend(unwrap(page).data)
    """
    cursor = start
    seen: set[str] = set()
    while True:
        result = await fetch(cursor)
        yield result
        if isinstance(result, Failure):
            return
        cursor = result.value.pagination
        if not cursor.has_next or cursor.next in seen:
            return
        seen.add(cursor.next)
