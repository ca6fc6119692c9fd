from __future__ import annotations

import pytest

from bitrise.errors import (
    APIError,
    BitriseError,
    DecodingError,
    NotFoundError,
    RateLimitError,
)

pytestmark = pytest.mark.unit


def test_api_error_structured_metadata() -> None:
    err = APIError(
        "boom",
        hint="do this",
        retryable=True,
        status_code=429,
        retry_after_s=2.0,
        method="GET",
        path="apps",
    )

    assert str(err) == "boom"
    assert err.hint == "do this"
    assert err.retryable is True
    assert err.status_code == 429
    assert err.retry_after_s == 2.0
    assert err.method == "GET"
    assert err.path == "apps"


def test_api_error_defaults_to_none() -> None:
    err = APIError("fail")
    assert err.hint is None
    assert err.retryable is None
    assert err.status_code is None
    assert err.retry_after_s is None
    assert err.method is None
    assert err.path is None


def test_subclass_hierarchy() -> None:
    """HTTP-specific errors are catchable as APIError and BitriseError."""
    for err in (
        NotFoundError("missing", status_code=404),
        RateLimitError("slow down", status_code=429, retryable=True),
    ):
        assert isinstance(err, APIError)
        assert isinstance(err, BitriseError)

    assert isinstance(DecodingError("bad"), BitriseError)
    assert not isinstance(DecodingError("bad"), APIError)
