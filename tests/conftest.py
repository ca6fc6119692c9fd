"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration, marker handling, and
automatic API test skipping. Fixtures in the environment/logging sections are
autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import logging
import os
from typing import TYPE_CHECKING, Any

import pytest

from bitrise.config import Config
from bitrise.result import Failure, Success
from bitrise.service import BitriseService

if TYPE_CHECKING:
    from bitrise.descriptors import APIRequest
    from bitrise.result import Result

TEST_TOKEN = "test-token"
API_ROOT = "https://api.bitrise.io/v0.1"

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class FakeTransport:
    """Transport test double for pipeline and facade verification.

    Records every dispatched descriptor and replays a script of outcomes.
    Script items may be raw payloads (delivered as ``Success``), ready-made
    ``Success``/``Failure`` results, or exceptions to raise from ``send``.
    """

    script: list[Any] = field(default_factory=list)
    sent: list[APIRequest[Any]] = field(default_factory=list)
    closed: bool = False

    @property
    def last_request(self) -> APIRequest[Any]:
        assert self.sent, "no request was dispatched"
        return self.sent[-1]

    async def send(self, request: APIRequest[Any]) -> Result[Any]:
        self.sent.append(request)
        if not self.script:
            return Success({"data": None})
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, (Success, Failure)):
            return item
        return Success(item)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def config() -> Config:
    return Config(api_token=TEST_TOKEN)


@pytest.fixture
def service(config: Config, fake_transport: FakeTransport) -> BitriseService:
    """Facade wired to ``fake_transport``."""
    return BitriseService(config, transport=fake_transport)


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_bitrise_env(request, monkeypatch):
    """Ensure a clean environment for each test.

    Clears BITRISE_* env vars to prevent test pollution.
    Opt-out: @pytest.mark.allow_env_pollution or @pytest.mark.api
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith("BITRISE_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Pytest Hooks
# =============================================================================

API_TESTS_REASON = "API tests require ENABLE_API_TESTS=1"


def _api_tests_enabled() -> bool:
    return bool(os.getenv("ENABLE_API_TESTS"))


def pytest_collection_modifyitems(items):
    """Automatically skip API tests when not explicitly enabled."""
    if _api_tests_enabled():
        return
    skip_api = pytest.mark.skip(reason=API_TESTS_REASON)
    for item in items:
        if "api" in item.keywords:
            item.add_marker(skip_api)


# =============================================================================
# API Test Configuration
# =============================================================================


@pytest.fixture
def bitrise_api_token():
    """Return BITRISE_API_TOKEN or skip the test if unavailable."""
    token = os.getenv("BITRISE_API_TOKEN")
    if not token:
        pytest.skip("BITRISE_API_TOKEN not set")
    return token
