"""
FastAPI dependency injection module.

Provides centralized dependencies for:
- Database sessions
- Notification publisher
- Services
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from core.db import db as core_db
from core.db import get_db
from core.notifications import NotificationPublisher
from core.notifications import get_publisher as core_get_publisher
from core.services import (
    AuditRecorder,
    CommentService,
    IssueQueryEngine,
    IssueService,
    ProjectService,
)

# =============================================================================
# Infrastructure Dependencies
# =============================================================================


def get_publisher() -> NotificationPublisher:
    """Get the configured notification publisher."""
    return core_get_publisher()


def get_audit_recorder(
    publisher: NotificationPublisher = Depends(get_publisher),
) -> AuditRecorder:
    """Audit recorder on its own sessions from the global session factory."""
    return AuditRecorder(core_db.session_factory, publisher)


# =============================================================================
# Service Dependencies
# =============================================================================


def get_issue_service(
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
    publisher: NotificationPublisher = Depends(get_publisher),
) -> IssueService:
    return IssueService(db, audit, publisher)


def get_comment_service(
    db: Session = Depends(get_db),
    audit: AuditRecorder = Depends(get_audit_recorder),
    publisher: NotificationPublisher = Depends(get_publisher),
) -> CommentService:
    return CommentService(db, audit, publisher)


def get_query_engine(db: Session = Depends(get_db)) -> IssueQueryEngine:
    return IssueQueryEngine(db)


def get_project_service(db: Session = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


__all__ = [
    "get_publisher",
    "get_audit_recorder",
    "get_issue_service",
    "get_comment_service",
    "get_query_engine",
    "get_project_service",
]
