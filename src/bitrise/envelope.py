"""Envelope decoding: raw JSON payloads into typed containers."""

from __future__ import annotations

from functools import cache
from typing import Any

from pydantic import TypeAdapter, ValidationError

from bitrise.errors import DecodingError
from bitrise.models import DataContainer


@cache
def _adapter(target: Any) -> TypeAdapter[Any]:
    # Building a TypeAdapter compiles a validator; reuse them per target type.
    return TypeAdapter(target)


def decode_payload(payload: Any, response_type: Any) -> Any:
    """Validate a bare payload against ``response_type``.

    Raises:
        DecodingError: If the payload does not match the expected shape.
    """
    try:
        return _adapter(response_type).validate_python(payload)
    except ValidationError as exc:
        raise DecodingError(
            f"Response does not match {_type_name(response_type)}: "
            f"{exc.error_count()} validation error(s)",
            hint="The remote API may have changed shape; inspect the raw payload.",
        ) from exc


def decode_envelope(payload: Any, response_type: Any) -> DataContainer[Any]:
    """Validate a ``{"data": ..., "paging"?: ...}`` envelope.

    Raises:
        DecodingError: If the envelope or its ``data`` does not match.
    """
    if not isinstance(payload, dict) or "data" not in payload:
        raise DecodingError(
            "Response is not a data envelope",
            hint="Expected a JSON object with a 'data' key.",
        )
    return decode_payload(payload, DataContainer[response_type])


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)
