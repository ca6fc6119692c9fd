"""Transport implementations."""

from .base import Transport
from .client import HttpxTransport

__all__ = [
    "HttpxTransport",
    "Transport",
]
