"""
Activity log repository.

Append-only: exposes inserts and reads, never updates or deletes.
"""

from sqlalchemy.orm import Session, joinedload

from core.models import ActivityLog


class ActivityLogRepository:
    """Repository for ActivityLog operations."""

    def __init__(self, session: Session):
        self.session = session

    def save(self, log: ActivityLog) -> ActivityLog:
        """Insert a new entry and assign its ID."""
        self.session.add(log)
        self.session.flush()
        return log

    def list_by_issue(self, issue_id: int) -> list[ActivityLog]:
        """Entries for an issue, newest first; equal timestamps fall back to id ascending."""
        return (
            self.session.query(ActivityLog)
            .options(joinedload(ActivityLog.user))
            .filter(ActivityLog.issue_id == issue_id)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.asc())
            .all()
        )
