"""Wire envelope and domain resource models.

Resources mirror the remote JSON closely. Almost every field is optional: the
API returns ``null`` freely and the client must not reject a page because one
build is missing a timestamp.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import enum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class _Resource(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


# =============================================================================
# Envelope
# =============================================================================


class Pagination(_Resource):
    """Opaque continuation cursor returned alongside paged data.

    ``next is None`` means there are no further pages. Pass a cursor received
    from one page back into the same operation to fetch the following page.
    """

    page_item_limit: int | None = None
    next: str | None = None
    total_item_count: int | None = None

    @property
    def has_next(self) -> bool:
        """Whether another page can be requested with this cursor."""
        return self.next is not None


class DataContainer(BaseModel, Generic[T]):
    """Decoded single-item envelope: ``{"data": ..., "paging"?: ...}``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: T = Field(alias="data")
    pagination: Pagination | None = Field(default=None, alias="paging")


@dataclass(frozen=True)
class PagedData[T]:
    """One page of results plus the cursor for the page after it."""

    data: T
    pagination: Pagination


# =============================================================================
# Resources
# =============================================================================


class User(_Resource):
    """The authenticated account."""

    username: str | None = None
    slug: str
    email: str | None = None
    avatar_url: str | None = None
    created_at: datetime | None = None
    data_id: int | None = None
    has_used_organization_trial: bool | None = None
    unconfirmed_email: str | None = None


class AppOwner(_Resource):
    account_type: str | None = None
    name: str | None = None
    slug: str | None = None


class App(_Resource):
    """A project connected to the CI service."""

    slug: str
    title: str | None = None
    project_type: str | None = None
    provider: str | None = None
    repo_owner: str | None = None
    repo_url: str | None = None
    repo_slug: str | None = None
    is_disabled: bool | None = None
    is_public: bool | None = None
    status: int | None = None
    owner: AppOwner | None = None
    avatar_url: str | None = None


class BuildStatus(enum.IntEnum):
    NOT_FINISHED = 0
    SUCCESS = 1
    FAILED = 2
    ABORTED = 3
    ABORTED_WITH_SUCCESS = 4


class Build(_Resource):
    """A single workflow run of an app."""

    slug: str
    build_number: int | None = None
    #: Compare against ``BuildStatus``; unknown codes are kept as plain ints.
    status: int | None = None
    status_text: str | None = None
    branch: str | None = None
    tag: str | None = None
    commit_hash: str | None = None
    commit_message: str | None = None
    commit_view_url: str | None = None
    pull_request_id: int | None = None
    pull_request_target_branch: str | None = None
    pull_request_view_url: str | None = None
    triggered_workflow: str | None = None
    triggered_by: str | None = None
    triggered_at: datetime | None = None
    started_on_worker_at: datetime | None = None
    environment_prepare_finished_at: datetime | None = None
    finished_at: datetime | None = None
    abort_reason: str | None = None
    is_on_hold: bool | None = None
    machine_type_id: str | None = None
    stack_identifier: str | None = None
    original_build_params: dict[str, Any] | None = None

    @property
    def is_finished(self) -> bool:
        """Whether the build reached a terminal status."""
        return self.status is not None and self.status != BuildStatus.NOT_FINISHED


class Artifact(_Resource):
    """A file produced by a build."""

    slug: str
    title: str | None = None
    artifact_type: str | None = None
    file_size_bytes: int | None = None
    is_public_page_enabled: bool | None = None
    public_install_page_url: str | None = None
    expiring_download_url: str | None = None
    artifact_meta: dict[str, Any] | None = None


class AbortRequestResponse(_Resource):
    """Bare (un-enveloped) acknowledgement returned by the abort endpoint."""

    status: str | None = None


# =============================================================================
# Request inputs
# =============================================================================


class AbortBuildOptions(_Resource):
    """Optional body for aborting a build."""

    abort_reason: str | None = None
    abort_with_success: bool | None = None
    skip_notifications: bool | None = None

    def to_body(self) -> dict[str, Any]:
        """Serialize to the JSON body, dropping unset fields."""
        return self.model_dump(exclude_none=True)


class BuildFilterQuery(_Resource):
    """Server-side filters for listing an app's builds.

    ``after`` and ``before`` are Unix timestamps in seconds.
    """

    sort_by: Literal["running_first", "created_at"] | None = None
    branch: str | None = None
    workflow: str | None = None
    commit_message: str | None = None
    trigger_event_type: str | None = None
    pull_request_id: int | None = None
    build_number: int | None = None
    after: int | None = None
    before: int | None = None
    status: BuildStatus | None = None

    def to_query_params(self) -> dict[str, str]:
        """Render set filters as string query parameters."""
        params: dict[str, str] = {}
        for key, value in self.model_dump(exclude_none=True).items():
            if isinstance(value, bool):
                params[key] = "true" if value else "false"
            elif isinstance(value, enum.Enum):
                params[key] = str(value.value)
            else:
                params[key] = str(value)
        return params
