"""
Project endpoints. Only a project's owner may rename or delete it.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from core.constants import DEFAULT_PROJECT_SORT_FIELD
from core.identity import Principal
from core.schemas import ProjectRequest, ProjectView
from core.services import ProjectService

from ..auth.dependencies import get_current_principal
from ..dependencies import get_project_service

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectView, status_code=status.HTTP_201_CREATED)
def create_project(
    request: ProjectRequest,
    service: ProjectService = Depends(get_project_service),
    principal: Principal = Depends(get_current_principal),
):
    return service.create_project(request.name, principal)


@router.get("", response_model=list[ProjectView])
def list_projects(
    sort_by: str = Query(DEFAULT_PROJECT_SORT_FIELD, alias="sortBy"),
    sort_dir: str | None = Query(None, alias="sortDir"),
    search_text: str | None = Query(None, alias="searchText"),
    service: ProjectService = Depends(get_project_service),
    principal: Principal = Depends(get_current_principal),
):
    return service.list_projects(sort_by, sort_dir, search_text)


@router.get("/{project_id}", response_model=ProjectView)
def get_project(
    project_id: int,
    service: ProjectService = Depends(get_project_service),
    principal: Principal = Depends(get_current_principal),
):
    return service.get_project(project_id)


@router.put("/{project_id}", response_model=ProjectView)
def update_project(
    project_id: int,
    request: ProjectRequest,
    service: ProjectService = Depends(get_project_service),
    principal: Principal = Depends(get_current_principal),
):
    return service.update_project(project_id, request.name, principal)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    service: ProjectService = Depends(get_project_service),
    principal: Principal = Depends(get_current_principal),
):
    service.delete_project(project_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
