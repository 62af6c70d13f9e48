"""
Field-level change detection between two issue snapshots.

Pure functions only: nothing here touches the database. The caller persists
each returned FieldChange as an activity log entry.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from core.constants import TRUNCATION_MARKER
from core.models import ActivityType, Issue, IssuePriority, IssueStatus


@dataclass(frozen=True)
class IssueSnapshot:
    """The audited fields of an issue at one point in time."""

    title: str
    description: str | None
    status: IssueStatus | None
    priority: IssuePriority | None
    assignee_id: int | None

    @classmethod
    def of(cls, issue: Issue) -> "IssueSnapshot":
        return cls(
            title=issue.title,
            description=issue.description,
            status=issue.status,
            priority=issue.priority,
            assignee_id=issue.assignee_id,
        )


class FieldChange(NamedTuple):
    activity_type: ActivityType
    old_value: str | None
    new_value: str | None


def _enum_value(value: Enum | None) -> str | None:
    return value.value if value is not None else None


def diff_snapshots(
    old: IssueSnapshot,
    new: IssueSnapshot,
    assignee_name: Callable[[int], str],
) -> list[FieldChange]:
    """
    Compare two snapshots in the order title, description, status, priority,
    assignee and return one FieldChange per differing field.

    Args:
        old: Snapshot taken before the update
        new: Snapshot taken after the update
        assignee_name: Maps a user id to the name recorded in the audit trail

    Returns:
        Changes in field order; empty when nothing differs
    """
    changes: list[FieldChange] = []

    if old.title != new.title:
        changes.append(FieldChange(ActivityType.TITLE_CHANGED, old.title, new.title))

    # A missing description and an empty one are the same thing
    if (old.description or "") != (new.description or ""):
        changes.append(
            FieldChange(ActivityType.DESCRIPTION_CHANGED, old.description, new.description)
        )

    if old.status is not new.status:
        changes.append(
            FieldChange(
                ActivityType.STATUS_CHANGED, _enum_value(old.status), _enum_value(new.status)
            )
        )

    if old.priority is not new.priority:
        changes.append(
            FieldChange(
                ActivityType.PRIORITY_CHANGED,
                _enum_value(old.priority),
                _enum_value(new.priority),
            )
        )

    if old.assignee_id != new.assignee_id:
        changes.append(
            FieldChange(
                ActivityType.ASSIGNEE_CHANGED,
                assignee_name(old.assignee_id) if old.assignee_id is not None else None,
                assignee_name(new.assignee_id) if new.assignee_id is not None else None,
            )
        )

    return changes


def truncate(
    value: str | None, max_length: int, marker: str = TRUNCATION_MARKER
) -> str | None:
    """Cut value to max_length characters, appending marker when anything was cut."""
    if value is None or len(value) <= max_length:
        return value
    return value[:max_length] + marker
