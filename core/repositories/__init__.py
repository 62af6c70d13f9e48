"""
Repository pattern implementations for data access.

Repositories flush but never commit; the caller owns the unit of work.

Usage:
    from core.repositories import IssueRepository
    from core.db import db

    with db.session() as session:
        repo = IssueRepository(session)
        issues, total = repo.find_filtered({"status": IssueStatus.OPEN}, order_by, 0, 20)
"""

from .activity_log_repository import ActivityLogRepository
from .base import BaseRepository
from .comment_repository import CommentRepository
from .issue_repository import IssueRepository
from .project_repository import ProjectRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ActivityLogRepository",
    "CommentRepository",
    "IssueRepository",
    "ProjectRepository",
    "UserRepository",
]
