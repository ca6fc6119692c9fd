"""Test helpers: wire payload builders.

Keep this file tiny and purpose-built; payloads mirror the remote JSON shapes.
"""

from __future__ import annotations

from typing import Any


def envelope(data: Any, paging: dict[str, Any] | None = None) -> dict[str, Any]:
    """Wrap ``data`` the way the API does."""
    payload: dict[str, Any] = {"data": data}
    if paging is not None:
        payload["paging"] = paging
    return payload


def app_payload(slug: str, **extra: Any) -> dict[str, Any]:
    return {
        "slug": slug,
        "title": f"App {slug}",
        "project_type": "ios",
        "provider": "github",
        "repo_owner": "acme",
        "is_disabled": False,
        "owner": {"account_type": "organization", "name": "Acme", "slug": "org1"},
        **extra,
    }


def build_payload(slug: str, **extra: Any) -> dict[str, Any]:
    return {
        "slug": slug,
        "build_number": 42,
        "status": 1,
        "status_text": "success",
        "branch": "main",
        "triggered_workflow": "primary",
        "triggered_at": "2024-03-01T10:00:00Z",
        "finished_at": None,
        **extra,
    }


def artifact_payload(slug: str, **extra: Any) -> dict[str, Any]:
    return {
        "slug": slug,
        "title": "app-release.apk",
        "artifact_type": "android-apk",
        "file_size_bytes": 1024,
        **extra,
    }
