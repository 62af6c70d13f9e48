"""
Core services: issue and comment mutations, the audit trail, issue listing
and projects.

Mutation services commit their own session before recording audit entries
and publishing, so side-effect failures never undo a write.
"""

from core.services.audit_service import AuditRecorder
from core.services.comment_service import CommentService
from core.services.diff import FieldChange, IssueSnapshot, diff_snapshots, truncate
from core.services.issue_query import IssueQuery, IssueQueryEngine, SortField
from core.services.issue_service import IssueService
from core.services.project_service import ProjectService

__all__ = [
    "AuditRecorder",
    "CommentService",
    "FieldChange",
    "IssueSnapshot",
    "diff_snapshots",
    "truncate",
    "IssueQuery",
    "IssueQueryEngine",
    "SortField",
    "IssueService",
    "ProjectService",
]
