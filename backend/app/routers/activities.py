"""
Activity log endpoint: an issue's audit trail, newest first.
"""

from fastapi import APIRouter, Depends

from core.identity import Principal
from core.schemas import ActivityLogView
from core.services import AuditRecorder

from ..auth.dependencies import get_current_principal
from ..dependencies import get_audit_recorder

router = APIRouter(prefix="/issues/{issue_id}/activities", tags=["activities"])


@router.get("", response_model=list[ActivityLogView])
def list_activities(
    issue_id: int,
    audit: AuditRecorder = Depends(get_audit_recorder),
    principal: Principal = Depends(get_current_principal),
):
    return audit.list_by_issue(issue_id)
