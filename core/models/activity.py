"""
Activity log SQLAlchemy model.

Rows are append-only: nothing in this package updates or deletes them
except the cascade from a deleted issue.
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow

if TYPE_CHECKING:
    from .issue import Issue
    from .user import User


class ActivityType(str, Enum):
    ISSUE_CREATED = "ISSUE_CREATED"
    TITLE_CHANGED = "TITLE_CHANGED"
    DESCRIPTION_CHANGED = "DESCRIPTION_CHANGED"
    STATUS_CHANGED = "STATUS_CHANGED"
    PRIORITY_CHANGED = "PRIORITY_CHANGED"
    ASSIGNEE_CHANGED = "ASSIGNEE_CHANGED"
    COMMENT_ADDED = "COMMENT_ADDED"
    COMMENT_EDITED = "COMMENT_EDITED"
    COMMENT_DELETED = "COMMENT_DELETED"


class ActivityLog(Base):
    """
    One semantic change to an issue, recorded for the audit trail.
    """

    __tablename__ = "activity_logs"
    __table_args__ = (Index("ix_activity_logs_issue_created", "issue_id", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    issue_id: Mapped[int] = mapped_column(ForeignKey("issues.id", ondelete="CASCADE"))
    activity_type: Mapped[ActivityType] = mapped_column(SAEnum(ActivityType, name="activity_type"))
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    old_value: Mapped[Optional[str]] = mapped_column(Text)
    new_value: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    issue: Mapped["Issue"] = relationship("Issue", back_populates="activity_logs")
    user: Mapped["User"] = relationship("User")
