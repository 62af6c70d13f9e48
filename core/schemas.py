"""
Pydantic schemas for service requests and hydrated views.

Views are what services return and what the HTTP layer serializes; they
carry resolved display names so clients never need a follow-up fetch.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from core.models import ActivityType, IssuePriority, IssueStatus

T = TypeVar("T")


class ApiModel(BaseModel):
    """camelCase on the wire; snake_case attribute names are accepted too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _require_text(value: str, field_name: str) -> str:
    if value is None or not value.strip():
        raise ValueError(f"{field_name} is required")
    return value


# =============================================================================
# Requests
# =============================================================================


class IssueRequest(ApiModel):
    """
    Payload for creating or fully replacing an issue.

    status and priority default to OPEN / MEDIUM on both create and update,
    so a stored issue never has a null status or priority.
    """

    title: str
    description: str | None = None
    status: IssueStatus = IssueStatus.OPEN
    priority: IssuePriority = IssuePriority.MEDIUM
    project_id: int
    assignee_id: int | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        return _require_text(v, "Title")

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v):
        return IssueStatus.OPEN if v is None else v

    @field_validator("priority", mode="before")
    @classmethod
    def default_priority(cls, v):
        return IssuePriority.MEDIUM if v is None else v


class CommentRequest(ApiModel):
    content: str

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        return _require_text(v, "Comment content")


class ProjectRequest(ApiModel):
    name: str = Field(min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return _require_text(v, "Project name")


# =============================================================================
# Views
# =============================================================================


class IssueView(ApiModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    status: IssueStatus
    priority: IssuePriority
    project_id: int
    project_name: str | None = None
    creator_id: int | None = None
    creator_name: str | None = None
    assignee_id: int | None = None
    assignee_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CommentView(ApiModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    issue_id: int
    content: str
    author_id: int
    author_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ActivityLogView(ApiModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    issue_id: int
    activity_type: ActivityType
    user_id: int
    user_name: str | None = None
    old_value: str | None = None
    new_value: str | None = None
    created_at: datetime | None = None


class ProjectView(ApiModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    owner_id: int
    owner_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PageResult(ApiModel, Generic[T]):
    """One page of a listing plus the totals needed to navigate the rest."""

    content: list[T] = Field(default_factory=list)
    page: int
    size: int
    total_elements: int
    total_pages: int
    last: bool


__all__ = [
    "IssueRequest",
    "CommentRequest",
    "ProjectRequest",
    "IssueView",
    "CommentView",
    "ActivityLogView",
    "ProjectView",
    "PageResult",
    "ApiModel",
]
