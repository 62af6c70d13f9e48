"""
Issue endpoints: create, list, read, replace and delete.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from core.constants import DEFAULT_PAGE, DEFAULT_SORT_FIELD
from core.identity import Principal
from core.models import IssuePriority, IssueStatus
from core.schemas import IssueRequest, IssueView, PageResult
from core.services import IssueQuery, IssueQueryEngine, IssueService

from ..auth.dependencies import get_current_principal
from ..dependencies import get_issue_service, get_query_engine

router = APIRouter(prefix="/issues", tags=["issues"])


@router.post("", response_model=IssueView, status_code=status.HTTP_201_CREATED)
def create_issue(
    request: IssueRequest,
    service: IssueService = Depends(get_issue_service),
    principal: Principal = Depends(get_current_principal),
):
    return service.create_issue(request, principal)


@router.get("", response_model=PageResult[IssueView])
def list_issues(
    page: int = Query(DEFAULT_PAGE, description="Zero-based page index"),
    size: int | None = Query(None, description="Page size; defaults to DEFAULT_PAGE_SIZE"),
    sort_by: str = Query(DEFAULT_SORT_FIELD, alias="sortBy"),
    sort_dir: str | None = Query(None, alias="sortDir"),
    status_filter: IssueStatus | None = Query(None, alias="status"),
    priority: IssuePriority | None = Query(None),
    assignee_id: int | None = Query(None, alias="assigneeId"),
    project_id: int | None = Query(None, alias="projectId"),
    search_text: str | None = Query(
        None, alias="searchText", description="Case-insensitive title substring"
    ),
    engine: IssueQueryEngine = Depends(get_query_engine),
    principal: Principal = Depends(get_current_principal),
):
    """List issues with AND-combined filters and a stable sort."""
    return engine.list(
        IssueQuery(
            page=page,
            page_size=size,
            sort_by=sort_by,
            sort_dir=sort_dir,
            status=status_filter,
            priority=priority,
            assignee_id=assignee_id,
            project_id=project_id,
            search_text=search_text,
        )
    )


@router.get("/{issue_id}", response_model=IssueView)
def get_issue(
    issue_id: int,
    service: IssueService = Depends(get_issue_service),
    principal: Principal = Depends(get_current_principal),
):
    return service.get_issue(issue_id)


@router.put("/{issue_id}", response_model=IssueView)
def update_issue(
    issue_id: int,
    request: IssueRequest,
    service: IssueService = Depends(get_issue_service),
    principal: Principal = Depends(get_current_principal),
):
    """Full replace: fields left out of the body reset to their defaults."""
    return service.update_issue(issue_id, request, principal)


@router.delete("/{issue_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_issue(
    issue_id: int,
    service: IssueService = Depends(get_issue_service),
    principal: Principal = Depends(get_current_principal),
):
    service.delete_issue(issue_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
