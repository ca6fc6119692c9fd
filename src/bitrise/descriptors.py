"""Request descriptors: declarative values describing one API call each.

A descriptor knows where it goes and what it expects back; it never performs
I/O. Descriptors are frozen, so pagination overrides always produce a new
value via ``dataclasses.replace`` and the caller's instance stays intact.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from bitrise.models import (
    AbortRequestResponse,
    App,
    Artifact,
    Build,
    User,
)

if TYPE_CHECKING:
    from bitrise._http import HTTPMethod
    from bitrise.models import AbortBuildOptions, BuildFilterQuery


@dataclass(frozen=True, kw_only=True)
class APIRequest[T]:
    """A call whose response envelope holds a single value of type ``T``.

    Subclasses set ``response_type`` (the decode target for the envelope's
    ``data``) and implement ``path``. ``enveloped = False`` marks endpoints
    that answer with a bare object instead of ``{"data": ...}``.
    """

    method: ClassVar[HTTPMethod] = "GET"
    response_type: ClassVar[Any]
    enveloped: ClassVar[bool] = True

    base_url: str
    body: dict[str, Any] | None = None

    @property
    def path(self) -> str:
        """Resource path relative to ``base_url``."""
        raise NotImplementedError

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.path}"

    def query_params(self) -> dict[str, str]:
        return {}


@dataclass(frozen=True, kw_only=True)
class PagedAPIRequest[T](APIRequest[T]):
    """A collection call that accepts a page size and continuation cursor."""

    limit: int | None = None
    next: str | None = None

    def query_params(self) -> dict[str, str]:
        params = super().query_params()
        if self.limit is not None:
            params["limit"] = str(self.limit)
        if self.next is not None:
            params["next"] = self.next
        return params


# =============================================================================
# User
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class GetUserRequest(APIRequest[User]):
    response_type: ClassVar[Any] = User

    @property
    def path(self) -> str:
        return "me"


# =============================================================================
# Apps
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class GetAppsRequest(PagedAPIRequest[list[App]]):
    response_type: ClassVar[Any] = list[App]

    @property
    def path(self) -> str:
        return "apps"


@dataclass(frozen=True, kw_only=True)
class GetAppBySlugRequest(APIRequest[App]):
    response_type: ClassVar[Any] = App

    slug: str

    @property
    def path(self) -> str:
        return f"apps/{self.slug}"


# =============================================================================
# Builds
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class GetBuildsByAppSlugRequest(PagedAPIRequest[list[Build]]):
    response_type: ClassVar[Any] = list[Build]

    app_slug: str
    filter_query: BuildFilterQuery | None = None

    @property
    def path(self) -> str:
        return f"apps/{self.app_slug}/builds"

    def query_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.filter_query is not None:
            params.update(self.filter_query.to_query_params())
        # Pagination wins over any same-named filter key.
        params.update(super().query_params())
        return params


@dataclass(frozen=True, kw_only=True)
class GetBuildBySlugRequest(APIRequest[Build]):
    response_type: ClassVar[Any] = Build

    app_slug: str
    build_slug: str

    @property
    def path(self) -> str:
        return f"apps/{self.app_slug}/builds/{self.build_slug}"


@dataclass(frozen=True, kw_only=True)
class AbortBuildRequest(APIRequest[AbortRequestResponse]):
    method: ClassVar[HTTPMethod] = "POST"
    response_type: ClassVar[Any] = AbortRequestResponse
    enveloped: ClassVar[bool] = False

    app_slug: str
    build_slug: str

    @classmethod
    def with_options(
        cls,
        *,
        base_url: str,
        app_slug: str,
        build_slug: str,
        options: AbortBuildOptions | None = None,
    ) -> AbortBuildRequest:
        """Build the descriptor; the body is absent when no options are given."""
        return cls(
            base_url=base_url,
            app_slug=app_slug,
            build_slug=build_slug,
            body=options.to_body() if options is not None else None,
        )

    @property
    def path(self) -> str:
        return f"apps/{self.app_slug}/builds/{self.build_slug}/abort"


# =============================================================================
# Artifacts
# =============================================================================


@dataclass(frozen=True, kw_only=True)
class GetArtifactsByBuildSlugRequest(PagedAPIRequest[list[Artifact]]):
    response_type: ClassVar[Any] = list[Artifact]

    app_slug: str
    build_slug: str

    @property
    def path(self) -> str:
        return f"apps/{self.app_slug}/builds/{self.build_slug}/artifacts"


@dataclass(frozen=True, kw_only=True)
class GetArtifactBySlugRequest(APIRequest[Artifact]):
    response_type: ClassVar[Any] = Artifact

    app_slug: str
    build_slug: str
    artifact_slug: str

    @property
    def path(self) -> str:
        return (
            f"apps/{self.app_slug}/builds/{self.build_slug}"
            f"/artifacts/{self.artifact_slug}"
        )
