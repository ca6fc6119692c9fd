"""Service facade: one named coroutine per remote operation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from bitrise.config import Config
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
from bitrise.models import App
from bitrise.pipeline import perform, perform_paged
from bitrise.transport.client import HttpxTransport

if TYPE_CHECKING:
    from types import TracebackType

    from bitrise.models import (
        AbortBuildOptions,
        AbortRequestResponse,
        Artifact,
        Build,
        BuildFilterQuery,
        PagedData,
        Pagination,
        User,
    )
    from bitrise.result import Result
    from bitrise.transport.base import Transport


def _app_slug(app: App | str) -> str:
    return app.slug if isinstance(app, App) else app


class BitriseService:
    """Typed client for the Bitrise REST API.

    Every operation returns a single ``Result``; failures are delivered, never
    raised. Apps may be passed as ``App`` objects or bare slugs.

    Example:
        async with BitriseService(Config(api_token="...")) as service:
            page = await service.get_apps()
            if is_success(page):
                for app in page.value.data:
                    print(app.slug)
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        transport: Transport | None = None,
    ) -> None:
        """Initialize from ``config`` (env-resolved when omitted).

        A supplied ``transport`` is used as-is and not closed by ``aclose``.
        """
        self.config = config or Config()
        self._owns_transport = transport is None
        if transport is None:
            transport = HttpxTransport(
                self.config.api_token or "",
                timeout_s=self.config.timeout_s,
                retry=self.config.retry,
            )
        self.transport = transport

    @property
    def _base_url(self) -> str:
        return self.config.api.url

    # -- User -----------------------------------------------------------------

    async def get_user(self) -> Result[User]:
        request = GetUserRequest(base_url=self._base_url)
        return await perform(self.transport, request)

    # -- Apps -----------------------------------------------------------------

    async def get_apps(
        self, pagination: Pagination | None = None
    ) -> Result[PagedData[list[App]]]:
        request = GetAppsRequest(base_url=self._base_url)
        return await perform_paged(self.transport, request, pagination)

    async def get_app_by_slug(self, slug: str) -> Result[App]:
        request = GetAppBySlugRequest(base_url=self._base_url, slug=slug)
        return await perform(self.transport, request)

    # -- Builds ---------------------------------------------------------------

    async def get_builds_for_app(
        self,
        app: App | str,
        pagination: Pagination | None = None,
        filter_query: BuildFilterQuery | None = None,
    ) -> Result[PagedData[list[Build]]]:
        request = GetBuildsByAppSlugRequest(
            base_url=self._base_url,
            app_slug=_app_slug(app),
            filter_query=filter_query,
        )
        return await perform_paged(self.transport, request, pagination)

    async def get_build_by_slug(
        self, build_slug: str, app: App | str
    ) -> Result[Build]:
        request = GetBuildBySlugRequest(
            base_url=self._base_url,
            app_slug=_app_slug(app),
            build_slug=build_slug,
        )
        return await perform(self.transport, request)

    async def abort_build(
        self,
        build_slug: str,
        app: App | str,
        options: AbortBuildOptions | None = None,
    ) -> Result[AbortRequestResponse]:
        """Abort a running build; the request body is omitted without options."""
        request = AbortBuildRequest.with_options(
            base_url=self._base_url,
            app_slug=_app_slug(app),
            build_slug=build_slug,
            options=options,
        )
        return await perform(self.transport, request)

    # -- Artifacts ------------------------------------------------------------

    async def get_artifacts_for_build(
        self,
        build_slug: str,
        app: App | str,
        pagination: Pagination | None = None,
    ) -> Result[PagedData[list[Artifact]]]:
        request = GetArtifactsByBuildSlugRequest(
            base_url=self._base_url,
            app_slug=_app_slug(app),
            build_slug=build_slug,
        )
        return await perform_paged(self.transport, request, pagination)

    async def get_artifact_by_slug(
        self, artifact_slug: str, build_slug: str, app_slug: str
    ) -> Result[Artifact]:
        request = GetArtifactBySlugRequest(
            base_url=self._base_url,
            app_slug=app_slug,
            build_slug=build_slug,
            artifact_slug=artifact_slug,
        )
        return await perform(self.transport, request)

    # -- Lifecycle ------------------------------------------------------------

    async def aclose(self) -> None:
        """Release the owned transport's connections."""
        if not self._owns_transport:
            return
        aclose: Any = getattr(self.transport, "aclose", None)
        if callable(aclose):
            await aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
