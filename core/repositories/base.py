"""Base repository class with common persistence operations."""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from core.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository shared by the entity repositories.

    Repositories only flush; committing is the caller's unit of work.

    Usage:
        class UserRepository(BaseRepository[User]):
            model = User

        repo = UserRepository(session)
        user = repo.get_by_id(1)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: int) -> T | None:
        """Get a single record by ID."""
        return self.session.get(self.model, id)

    def save(self, instance: T) -> T:
        """Persist a new or modified instance and assign its ID."""
        self.session.add(instance)
        self.session.flush()
        return instance

    def delete(self, instance: T) -> None:
        """Delete a loaded instance; database cascades remove its dependents."""
        self.session.delete(instance)
        self.session.flush()

    def exists_where(self, **filters) -> bool:
        """Check if any record matches every filter; unknown column names raise ValueError."""
        unknown = [key for key in filters if not hasattr(self.model, key)]
        if unknown:
            raise ValueError(
                f"Unknown filter key(s) for {self.model.__name__}: {', '.join(unknown)}"
            )
        query = self.session.query(self.model)
        for key, value in filters.items():
            query = query.filter(getattr(self.model, key) == value)
        return bool(self.session.query(query.exists()).scalar())
