"""
Domain events broadcast after a committed mutation.

Events share the HTTP views' camelCase wire format, so subscribers see the
same field names whether a payload came from the API or a publisher.
"""

from enum import Enum

from core.schemas import ApiModel


class EventType(str, Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"


class DomainEvent(ApiModel):
    event_type: EventType

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class IssueEvent(DomainEvent):
    issue_id: int
    title: str | None = None
    status: str | None = None
    priority: str | None = None
    project_id: int | None = None


class CommentEvent(DomainEvent):
    comment_id: int
    issue_id: int
    content: str | None = None
    author_id: int | None = None
    author_name: str | None = None


class ActivityEvent(DomainEvent):
    activity_log_id: int
    issue_id: int
    activity_type: str
    user_id: int | None = None
    user_name: str | None = None
    old_value: str | None = None
    new_value: str | None = None


__all__ = ["EventType", "DomainEvent", "IssueEvent", "CommentEvent", "ActivityEvent"]
