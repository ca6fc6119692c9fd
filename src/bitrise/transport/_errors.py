"""Transport-side error helpers.

httpx failures are mapped into ``APIError`` with retry metadata so retry
decisions stay bounded and deterministic.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import httpx

from bitrise._http import RETRYABLE_STATUS_CODES
from bitrise.config import API_TOKEN_ENV_VAR
from bitrise.errors import (
    APIError,
    NotFoundError,
    RateLimitError,
    _walk_exception_chain,
)

if TYPE_CHECKING:
    from bitrise.descriptors import APIRequest


def extract_status_code(exc: BaseException) -> int | None:
    """Walk the exception chain to find an HTTP status code."""
    for e in _walk_exception_chain(exc):
        for attr in ("status_code", "status"):
            value = getattr(e, attr, None)
            if isinstance(value, int) and 100 <= value <= 599:
                return value
        response = getattr(e, "response", None)
        value = getattr(response, "status_code", None)
        if isinstance(value, int) and 100 <= value <= 599:
            return value
    return None


def extract_retry_after_s(exc: BaseException) -> float | None:
    """Walk the exception chain to find a Retry-After delay in seconds."""
    for e in _walk_exception_chain(exc):
        value = getattr(e, "retry_after", None)
        if isinstance(value, (int, float)) and value >= 0:
            return float(value)

        response = getattr(e, "response", None)
        headers: Any = getattr(response, "headers", None)
        if headers is None:
            continue
        raw = headers.get("Retry-After")
        if isinstance(raw, str) and raw.strip():
            try:
                seconds = float(raw)
            except ValueError:
                continue
            if seconds >= 0:
                return seconds
    return None


def _error_message(exc: BaseException) -> str:
    """Prefer the API's own ``{"message": ...}`` over httpx's generic text."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for key in ("message", "error_msg", "error"):
                value = body.get(key)
                if isinstance(value, str) and value.strip():
                    return value
    return str(exc)


def _auth_hint(status_code: int | None) -> str | None:
    if status_code in {401, 403}:
        return (
            "Check the token and its permissions "
            f"(try setting {API_TOKEN_ENV_VAR} or Config.api_token)."
        )
    return None


def wrap_transport_error(
    exc: BaseException,
    *,
    request: APIRequest[Any],
    hint: str | None = None,
) -> APIError:
    """Map httpx exceptions into APIError with stable retry metadata."""
    if isinstance(exc, asyncio.CancelledError):
        raise exc

    # Already wrapped: fill in missing context only.
    if isinstance(exc, APIError):
        if exc.method is None:
            exc.method = request.method
        if exc.path is None:
            exc.path = request.path
        if hint is not None and exc.hint is None:
            exc.hint = hint
        return exc

    status_code = extract_status_code(exc)
    retry_after_s = extract_retry_after_s(exc)

    retryable = retry_after_s is not None
    if isinstance(status_code, int) and status_code in RETRYABLE_STATUS_CODES:
        retryable = True
    elif status_code is None:
        for e in _walk_exception_chain(exc):
            if isinstance(e, (httpx.TimeoutException, httpx.RequestError)):
                retryable = True
                break

    err_cls: type[APIError] = APIError
    if status_code == 429:
        err_cls = RateLimitError
    elif status_code == 404:
        err_cls = NotFoundError

    status_note = f" (status={status_code})" if isinstance(status_code, int) else ""
    cause = _error_message(exc)
    msg = f"{request.method} {request.path} failed{status_note}"
    return err_cls(
        f"{msg}: {cause}" if cause else msg,
        hint=hint if hint is not None else _auth_hint(status_code),
        retryable=retryable,
        status_code=status_code,
        retry_after_s=retry_after_s,
        method=request.method,
        path=request.path,
    )
