"""
User-related SQLAlchemy models.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow

if TYPE_CHECKING:
    from .project import Project


class User(Base):
    """
    User model representing an account of the tracker.

    Identity is immutable once created; accounts are managed outside this
    package, which only reads users.

    Attributes:
        name: Display name shown on issues, comments and audit entries
        email: Unique login identifier (the JWT subject)
        password_hash: Opaque credential hash owned by the identity provider
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # Relationships
    projects: Mapped[list["Project"]] = relationship("Project", back_populates="owner")
