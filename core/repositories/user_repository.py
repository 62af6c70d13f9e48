"""User repository for resolving principals, creators and assignees."""

from core.models import User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Get user by email."""
        return self.session.query(User).filter(User.email == email).first()

    def exists_by_email(self, email: str) -> bool:
        """Check whether an account with this email exists."""
        return self.exists_where(email=email)
