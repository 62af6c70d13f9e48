"""
Project Service.

Projects are owned by the user who created them; only the owner may rename
or delete one. Deleting a project removes its issues.
"""

from sqlalchemy.orm import Session

from core.constants import DEFAULT_PROJECT_SORT_FIELD
from core.errors import ForbiddenError, InvalidInputError, NotFoundError
from core.identity import Principal
from core.logging import get_logger
from core.models import Project
from core.models.base import utcnow
from core.repositories import ProjectRepository, UserRepository
from core.schemas import ProjectView

from .issue_query import is_descending
from .principals import resolve_acting_user
from .views import project_to_view

logger = get_logger("projects")

PROJECT_SORT_COLUMNS = {
    "name": Project.name,
    "createdAt": Project.created_at,
    "updatedAt": Project.updated_at,
}


class ProjectService:
    def __init__(self, session: Session):
        self.session = session
        self.projects = ProjectRepository(session)
        self.users = UserRepository(session)

    def _require_name(self, name: str) -> str:
        if not name or not name.strip():
            raise InvalidInputError("Project name is required")
        return name

    def _owned_project(self, project_id: int, acting_user: Principal | None) -> Project:
        project = self.projects.get_with_owner(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        user = resolve_acting_user(self.users, acting_user)
        if project.owner_id != user.id:
            raise ForbiddenError("Only the project owner can modify this project")
        return project

    def create_project(self, name: str, acting_user: Principal | None) -> ProjectView:
        self._require_name(name)
        owner = resolve_acting_user(self.users, acting_user)
        project = Project(name=name, owner_id=owner.id, owner=owner)
        self.projects.save(project)
        self.session.commit()
        logger.info("project_created", project_id=project.id, owner_id=owner.id)
        return project_to_view(project)

    def list_projects(
        self,
        sort_by: str | None = DEFAULT_PROJECT_SORT_FIELD,
        sort_dir: str | None = None,
        search_text: str | None = None,
    ) -> list[ProjectView]:
        """
        All projects, sorted by name, createdAt or updatedAt with id as tie-break.

        Raises:
            InvalidInputError: Unknown sort field
        """
        column = PROJECT_SORT_COLUMNS.get(sort_by or DEFAULT_PROJECT_SORT_FIELD)
        if column is None:
            allowed = ", ".join(PROJECT_SORT_COLUMNS)
            raise InvalidInputError(f"Unknown sort field '{sort_by}'. Allowed: {allowed}")
        order_by = [column.desc() if is_descending(sort_dir) else column.asc(), Project.id.asc()]
        text = search_text.strip() if search_text else None
        return [project_to_view(p) for p in self.projects.list_sorted(order_by, text or None)]

    def get_project(self, project_id: int) -> ProjectView:
        project = self.projects.get_with_owner(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project_to_view(project)

    def update_project(
        self, project_id: int, name: str, acting_user: Principal | None
    ) -> ProjectView:
        """
        Raises:
            NotFoundError: Project does not exist
            UnauthorizedError: Acting user cannot be resolved
            ForbiddenError: Acting user is not the owner
        """
        self._require_name(name)
        project = self._owned_project(project_id, acting_user)
        project.name = name
        project.updated_at = utcnow()
        self.projects.save(project)
        self.session.commit()
        logger.info("project_updated", project_id=project_id)
        return project_to_view(project)

    def delete_project(self, project_id: int, acting_user: Principal | None) -> None:
        """Same errors as update_project."""
        project = self._owned_project(project_id, acting_user)
        self.projects.delete(project)
        self.session.commit()
        logger.info("project_deleted", project_id=project_id)
