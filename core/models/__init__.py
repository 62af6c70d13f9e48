"""
Unified SQLAlchemy models for the issue tracker.

Single source of truth for all database models.

Usage:
    from core.models import User, Project, Issue, Comment, ActivityLog
"""

from .activity import ActivityLog, ActivityType
from .base import Base
from .comment import Comment
from .issue import Issue, IssuePriority, IssueStatus
from .project import Project
from .user import User

__all__ = [
    # Base
    "Base",
    # User
    "User",
    # Project
    "Project",
    # Issue
    "Issue",
    "IssueStatus",
    "IssuePriority",
    # Comment
    "Comment",
    # Activity
    "ActivityLog",
    "ActivityType",
]
