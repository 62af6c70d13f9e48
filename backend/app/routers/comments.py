"""
Comment endpoints, nested under their issue.
"""

from fastapi import APIRouter, Depends, Response, status

from core.identity import Principal
from core.schemas import CommentRequest, CommentView
from core.services import CommentService

from ..auth.dependencies import get_current_principal
from ..dependencies import get_comment_service

router = APIRouter(prefix="/issues/{issue_id}/comments", tags=["comments"])


@router.get("", response_model=list[CommentView])
def list_comments(
    issue_id: int,
    service: CommentService = Depends(get_comment_service),
    principal: Principal = Depends(get_current_principal),
):
    return service.list_comments(issue_id)


@router.post("", response_model=CommentView, status_code=status.HTTP_201_CREATED)
def create_comment(
    issue_id: int,
    request: CommentRequest,
    service: CommentService = Depends(get_comment_service),
    principal: Principal = Depends(get_current_principal),
):
    return service.create_comment(issue_id, request.content, principal)


@router.put("/{comment_id}", response_model=CommentView)
def update_comment(
    issue_id: int,
    comment_id: int,
    request: CommentRequest,
    service: CommentService = Depends(get_comment_service),
    principal: Principal = Depends(get_current_principal),
):
    """Only the author may edit."""
    return service.update_comment(comment_id, request.content, principal)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    issue_id: int,
    comment_id: int,
    service: CommentService = Depends(get_comment_service),
    principal: Principal = Depends(get_current_principal),
):
    service.delete_comment(comment_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
