"""bitrise: a typed async client for the Bitrise CI REST API.

Public API:
    - BitriseService: one coroutine per remote operation
    - Config / APIConfig: token, endpoint and retry settings
    - Result (Success | Failure), map_result, unwrap: outcome handling
    - PagedData / Pagination, iterate_pages: cursor-based paging
"""

from __future__ import annotations

import logging

from bitrise.config import APIConfig, Config
from bitrise.errors import (
    APIError,
    BitriseError,
    ConfigurationError,
    DecodingError,
    NotFoundError,
    RateLimitError,
)
from bitrise.models import (
    AbortBuildOptions,
    AbortRequestResponse,
    App,
    AppOwner,
    Artifact,
    Build,
    BuildFilterQuery,
    BuildStatus,
    DataContainer,
    PagedData,
    Pagination,
    User,
)
from bitrise.pipeline import iterate_pages, perform, perform_paged
from bitrise.result import (
    Failure,
    Result,
    Success,
    is_failure,
    is_success,
    map_result,
    unwrap,
)
from bitrise.retry import RetryPolicy
from bitrise.service import BitriseService
from bitrise.transport import HttpxTransport, Transport

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("bitrise-client")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("bitrise").addHandler(logging.NullHandler())

__all__ = [
    "APIConfig",
    "APIError",
    "AbortBuildOptions",
    "AbortRequestResponse",
    "App",
    "AppOwner",
    "Artifact",
    "BitriseError",
    "BitriseService",
    "Build",
    "BuildFilterQuery",
    "BuildStatus",
    "Config",
    "ConfigurationError",
    "DataContainer",
    "DecodingError",
    "Failure",
    "HttpxTransport",
    "NotFoundError",
    "PagedData",
    "Pagination",
    "RateLimitError",
    "Result",
    "RetryPolicy",
    "Success",
    "Transport",
    "User",
    "is_failure",
    "is_success",
    "iterate_pages",
    "map_result",
    "perform",
    "perform_paged",
    "unwrap",
]
