"""Request descriptor tests: paths, query parameters, bodies, immutability."""

from __future__ import annotations

import dataclasses

import pytest

from bitrise.descriptors import (
    AbortBuildRequest,
    GetAppBySlugRequest,
    GetAppsRequest,
    GetArtifactBySlugRequest,
    GetArtifactsByBuildSlugRequest,
    GetBuildBySlugRequest,
    GetBuildsByAppSlugRequest,
    GetUserRequest,
)
from bitrise.models import (
    AbortBuildOptions,
    AbortRequestResponse,
    App,
    Build,
    BuildFilterQuery,
    User,
)
from tests.conftest import API_ROOT

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("request_obj", "method", "url"),
    [
        (GetUserRequest(base_url=API_ROOT), "GET", f"{API_ROOT}/me"),
        (GetAppsRequest(base_url=API_ROOT), "GET", f"{API_ROOT}/apps"),
        (
            GetAppBySlugRequest(base_url=API_ROOT, slug="a1"),
            "GET",
            f"{API_ROOT}/apps/a1",
        ),
        (
            GetBuildsByAppSlugRequest(base_url=API_ROOT, app_slug="a1"),
            "GET",
            f"{API_ROOT}/apps/a1/builds",
        ),
        (
            GetBuildBySlugRequest(base_url=API_ROOT, app_slug="a1", build_slug="b1"),
            "GET",
            f"{API_ROOT}/apps/a1/builds/b1",
        ),
        (
            AbortBuildRequest(base_url=API_ROOT, app_slug="a1", build_slug="b1"),
            "POST",
            f"{API_ROOT}/apps/a1/builds/b1/abort",
        ),
        (
            GetArtifactsByBuildSlugRequest(
                base_url=API_ROOT, app_slug="a1", build_slug="b1"
            ),
            "GET",
            f"{API_ROOT}/apps/a1/builds/b1/artifacts",
        ),
        (
            GetArtifactBySlugRequest(
                base_url=API_ROOT, app_slug="a1", build_slug="b1", artifact_slug="x1"
            ),
            "GET",
            f"{API_ROOT}/apps/a1/builds/b1/artifacts/x1",
        ),
    ],
)
def test_descriptor_method_and_url(request_obj, method: str, url: str) -> None:
    assert request_obj.method == method
    assert request_obj.url == url


def test_trailing_slash_on_base_url_is_tolerated() -> None:
    request = GetUserRequest(base_url=f"{API_ROOT}/")

    assert request.url == f"{API_ROOT}/me"


def test_response_types_and_envelope_flags() -> None:
    assert GetUserRequest.response_type is User
    assert GetAppsRequest.response_type == list[App]
    assert GetBuildsByAppSlugRequest.response_type == list[Build]
    assert GetUserRequest.enveloped is True
    assert AbortBuildRequest.response_type is AbortRequestResponse
    assert AbortBuildRequest.enveloped is False


def test_paged_request_without_cursor_sends_no_pagination_params() -> None:
    assert GetAppsRequest(base_url=API_ROOT).query_params() == {}


def test_paged_request_emits_limit_and_next() -> None:
    request = GetAppsRequest(base_url=API_ROOT, limit=25, next="cursor")

    assert request.query_params() == {"limit": "25", "next": "cursor"}


def test_builds_request_merges_filter_and_pagination() -> None:
    request = GetBuildsByAppSlugRequest(
        base_url=API_ROOT,
        app_slug="a1",
        filter_query=BuildFilterQuery(branch="main", workflow="primary"),
        next="p2",
    )

    assert request.query_params() == {
        "branch": "main",
        "workflow": "primary",
        "next": "p2",
    }


def test_descriptors_are_frozen() -> None:
    request = GetAppsRequest(base_url=API_ROOT)

    with pytest.raises(dataclasses.FrozenInstanceError):
        request.next = "p2"  # type: ignore[misc]


def test_abort_without_options_has_no_body() -> None:
    request = AbortBuildRequest.with_options(
        base_url=API_ROOT, app_slug="a1", build_slug="b1"
    )

    assert request.body is None


def test_abort_with_options_serializes_body() -> None:
    request = AbortBuildRequest.with_options(
        base_url=API_ROOT,
        app_slug="a1",
        build_slug="b1",
        options=AbortBuildOptions(abort_reason="stale", skip_notifications=True),
    )

    assert request.body == {"abort_reason": "stale", "skip_notifications": True}
