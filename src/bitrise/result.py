"""Result primitives for explicit, exception-free delivery.

Every service call resolves to exactly one ``Success`` or ``Failure``; failures
carry the original error object so callers can match on it directly.
"""

from __future__ import annotations

import dataclasses
import typing

from bitrise.errors import DecodingError

if typing.TYPE_CHECKING:
    from collections.abc import Callable


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """A successful outcome carrying its payload."""

    value: T


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E: Exception]:
    """A failed outcome carrying the error untouched."""

    error: E


type Result[T] = Success[T] | Failure[Exception]


def is_success[T](result: Result[T]) -> typing.TypeGuard[Success[T]]:
    """Return True when ``result`` is a ``Success``."""
    return isinstance(result, Success)


def is_failure(result: Result[typing.Any]) -> typing.TypeGuard[Failure[Exception]]:
    """Return True when ``result`` is a ``Failure``."""
    return isinstance(result, Failure)


def map_result[T, U](result: Result[T], transform: Callable[[T], U]) -> Result[U]:
    """Transform a success payload; hand failures back untouched.

    ``transform`` is never invoked for a ``Failure``, and the very same
    ``Failure`` instance is returned. When ``transform`` raises, the outcome is
    a ``Failure`` holding a ``DecodingError`` chained to the raised exception.
    """
    if isinstance(result, Failure):
        return result
    try:
        return Success(transform(result.value))
    except DecodingError as exc:
        return Failure(exc)
    except Exception as exc:
        err = DecodingError(f"Could not transform response payload: {exc}")
        err.__cause__ = exc
        return Failure(err)


def unwrap[T](result: Result[T]) -> T:
    """Return the success payload or raise the held error."""
    if isinstance(result, Failure):
        raise result.error
    return result.value
