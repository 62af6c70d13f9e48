"""
ORM entity to view conversion.

Callers must have the relationships used for display names loaded (the
repositories' eager-loading getters do this).
"""

from core.models import ActivityLog, Comment, Issue, Project
from core.schemas import ActivityLogView, CommentView, IssueView, ProjectView


def issue_to_view(issue: Issue) -> IssueView:
    return IssueView(
        id=issue.id,
        title=issue.title,
        description=issue.description,
        status=issue.status,
        priority=issue.priority,
        project_id=issue.project_id,
        project_name=issue.project.name if issue.project else None,
        creator_id=issue.creator_id,
        creator_name=issue.creator.name if issue.creator else None,
        assignee_id=issue.assignee_id,
        assignee_name=issue.assignee.name if issue.assignee else None,
        created_at=issue.created_at,
        updated_at=issue.updated_at,
    )


def comment_to_view(comment: Comment) -> CommentView:
    return CommentView(
        id=comment.id,
        issue_id=comment.issue_id,
        content=comment.content,
        author_id=comment.author_id,
        author_name=comment.author.name if comment.author else None,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


def activity_to_view(log: ActivityLog) -> ActivityLogView:
    return ActivityLogView(
        id=log.id,
        issue_id=log.issue_id,
        activity_type=log.activity_type,
        user_id=log.user_id,
        user_name=log.user.name if log.user else None,
        old_value=log.old_value,
        new_value=log.new_value,
        created_at=log.created_at,
    )


def project_to_view(project: Project) -> ProjectView:
    return ProjectView(
        id=project.id,
        name=project.name,
        owner_id=project.owner_id,
        owner_name=project.owner.name if project.owner else None,
        created_at=project.created_at,
        updated_at=project.updated_at,
    )
