"""Project repository."""

from sqlalchemy.orm import joinedload

from core.models import Project

from .base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project operations."""

    model = Project

    def get_with_owner(self, project_id: int) -> Project | None:
        """Get a project with its owner loaded in the same query."""
        return (
            self.session.query(Project)
            .options(joinedload(Project.owner))
            .filter(Project.id == project_id)
            .first()
        )

    def list_sorted(self, order_by: list, search_text: str | None = None) -> list[Project]:
        """List projects, optionally narrowed by a case-insensitive name match."""
        query = self.session.query(Project).options(joinedload(Project.owner))
        if search_text:
            query = query.filter(Project.name.icontains(search_text, autoescape=True))
        return query.order_by(*order_by).all()
