"""Small HTTP-related constants shared across the client.

Kept tiny to avoid circular imports between config, retry and transports.
"""

from __future__ import annotations

from typing import Literal

HTTPMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

DEFAULT_BASE_URL = "api.bitrise.io"
DEFAULT_API_VERSION = "v0.1"

# Retryable status codes shared by transport error mapping and retry.
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({408, 409, 429, 500, 502, 503, 504})
