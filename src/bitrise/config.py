"""Configuration: frozen API endpoint and client settings."""

from __future__ import annotations

from dataclasses import dataclass, field
import os

from dotenv import load_dotenv

from bitrise._http import DEFAULT_API_VERSION, DEFAULT_BASE_URL
from bitrise.errors import ConfigurationError
from bitrise.retry import RetryPolicy

load_dotenv()

API_TOKEN_ENV_VAR = "BITRISE_API_TOKEN"


@dataclass(frozen=True)
class APIConfig:
    """Immutable host/version pair every request URL is rooted at.

    Example:
        APIConfig().url  # "https://api.bitrise.io/v0.1"
    """

    base_url: str = DEFAULT_BASE_URL
    version: str = DEFAULT_API_VERSION

    def __post_init__(self) -> None:
        """Reject empty components; they would produce malformed URLs."""
        if not self.base_url.strip():
            raise ConfigurationError(
                "base_url must be non-empty",
                hint=f"The public API host is {DEFAULT_BASE_URL!r}.",
            )
        if not self.version.strip():
            raise ConfigurationError(
                "version must be non-empty",
                hint=f"The current API version is {DEFAULT_API_VERSION!r}.",
            )

    @property
    def url(self) -> str:
        """Root URL: ``{base_url}/{version}``, defaulting to https."""
        base = self.base_url.rstrip("/")
        if "://" not in base:
            base = f"https://{base}"
        return f"{base}/{self.version.strip('/')}"


@dataclass(frozen=True)
class Config:
    """Immutable configuration for a service instance.

    The API token is auto-resolved from ``BITRISE_API_TOKEN`` when omitted.

    Example:
        config = Config()  # token read from the environment
        config = Config(api_token="...", timeout_s=10.0)
    """

    #: Auto-resolved from ``BITRISE_API_TOKEN`` when *None*.
    api_token: str | None = None
    api: APIConfig = field(default_factory=APIConfig)
    timeout_s: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)

    def __post_init__(self) -> None:
        """Auto-resolve the API token and validate configuration."""
        if self.timeout_s <= 0:
            raise ConfigurationError(
                f"timeout_s must be > 0, got {self.timeout_s}",
                hint="This bounds each HTTP request in seconds.",
            )

        if self.api_token is None:
            object.__setattr__(self, "api_token", os.environ.get(API_TOKEN_ENV_VAR))

        if not self.api_token:
            raise ConfigurationError(
                "API token required",
                hint=f"Set {API_TOKEN_ENV_VAR} environment variable or pass api_token=...",
            )

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"Config(api_url={self.api.url!r}, "
            f"api_token={'[REDACTED]' if self.api_token else None}, "
            f"timeout_s={self.timeout_s})"
        )

    __repr__ = __str__
