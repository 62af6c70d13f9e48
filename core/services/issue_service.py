"""
Issue Mutation Service.

Every mutation follows the same sequence: write and commit the issue, record
the audit trail through AuditRecorder (its own unit of work), then publish
one event on the issues topic. Audit and publish failures are logged and
never undo the committed write.
"""

from sqlalchemy.orm import Session

from core.constants import ISSUES_TOPIC
from core.errors import InvalidInputError, NotFoundError
from core.identity import Principal
from core.logging import get_logger
from core.models import ActivityType, Issue
from core.models.base import utcnow
from core.notifications import EventType, IssueEvent, NotificationPublisher
from core.repositories import IssueRepository, ProjectRepository, UserRepository
from core.schemas import IssueRequest, IssueView

from .audit_service import AuditRecorder
from .diff import IssueSnapshot, diff_snapshots
from .principals import display_name, resolve_acting_user
from .views import issue_to_view

logger = get_logger("issues")


def _issue_event(event_type: EventType, issue: Issue | IssueView) -> IssueEvent:
    return IssueEvent(
        event_type=event_type,
        issue_id=issue.id,
        title=issue.title,
        status=issue.status.value if issue.status else None,
        priority=issue.priority.value if issue.priority else None,
        project_id=issue.project_id,
    )


class IssueService:
    """
    Usage:
        with db.session() as session:
            service = IssueService(session, AuditRecorder(db.session_factory, publisher), publisher)
            view = service.create_issue(IssueRequest(title="Crash", project_id=1), principal)
    """

    def __init__(
        self,
        session: Session,
        audit: AuditRecorder,
        publisher: NotificationPublisher,
    ):
        self.session = session
        self.audit = audit
        self.publisher = publisher
        self.issues = IssueRepository(session)
        self.projects = ProjectRepository(session)
        self.users = UserRepository(session)

    def _require_assignee(self, assignee_id: int | None) -> None:
        if assignee_id is not None and self.users.get_by_id(assignee_id) is None:
            raise NotFoundError("Assignee", assignee_id)

    def _hydrated(self, issue_id: int) -> IssueView:
        issue = self.issues.get_with_creator_and_assignee(issue_id)
        if issue is None:
            raise NotFoundError("Issue", issue_id)
        return issue_to_view(issue)

    def create_issue(self, request: IssueRequest, acting_user: Principal | None) -> IssueView:
        """
        Create an issue owned by the acting user.

        Raises:
            InvalidInputError: Blank title
            NotFoundError: Project or assignee does not exist
            UnauthorizedError: Acting user cannot be resolved
        """
        if not request.title or not request.title.strip():
            raise InvalidInputError("Title is required")
        if self.projects.get_by_id(request.project_id) is None:
            raise NotFoundError("Project", request.project_id)
        self._require_assignee(request.assignee_id)
        creator = resolve_acting_user(self.users, acting_user)

        issue = Issue(
            title=request.title,
            description=request.description,
            status=request.status,
            priority=request.priority,
            project_id=request.project_id,
            creator_id=creator.id,
            assignee_id=request.assignee_id,
        )
        self.issues.save(issue)
        self.session.commit()
        view = self._hydrated(issue.id)

        logger.info("issue_created", issue_id=view.id, project_id=view.project_id)
        self.audit.try_record(view.id, ActivityType.ISSUE_CREATED, None, None, acting_user)
        self.publisher.publish(ISSUES_TOPIC, _issue_event(EventType.CREATED, view))
        return view

    def update_issue(
        self, issue_id: int, request: IssueRequest, acting_user: Principal | None
    ) -> IssueView:
        """
        Replace every editable field of an issue and audit what changed.

        An omitted assignee clears the assignment.

        Raises:
            InvalidInputError: Blank title
            NotFoundError: Issue or assignee does not exist
            UnauthorizedError: Acting user cannot be resolved
        """
        if not request.title or not request.title.strip():
            raise InvalidInputError("Title is required")
        issue = self.issues.get_by_id(issue_id)
        if issue is None:
            raise NotFoundError("Issue", issue_id)
        self._require_assignee(request.assignee_id)
        resolve_acting_user(self.users, acting_user)

        before = IssueSnapshot.of(issue)

        issue.title = request.title
        issue.description = request.description
        issue.status = request.status
        issue.priority = request.priority
        issue.assignee_id = request.assignee_id
        # Refreshed even when no column changed
        issue.updated_at = utcnow()
        self.issues.save(issue)
        self.session.commit()

        after = IssueSnapshot.of(issue)
        view = self._hydrated(issue_id)

        changes = diff_snapshots(before, after, lambda uid: display_name(self.users, uid))
        logger.info("issue_updated", issue_id=issue_id, changed_fields=len(changes))
        for change in changes:
            self.audit.try_record(
                issue_id, change.activity_type, change.old_value, change.new_value, acting_user
            )
        self.publisher.publish(ISSUES_TOPIC, _issue_event(EventType.UPDATED, view))
        return view

    def get_issue(self, issue_id: int) -> IssueView:
        """Raises NotFoundError if the issue does not exist."""
        return self._hydrated(issue_id)

    def delete_issue(self, issue_id: int) -> None:
        """
        Delete an issue with its comments and activity logs.

        Raises:
            NotFoundError: Issue does not exist
        """
        issue = self.issues.get_by_id(issue_id)
        if issue is None:
            raise NotFoundError("Issue", issue_id)

        event = _issue_event(EventType.DELETED, issue)
        self.issues.delete(issue)
        self.session.commit()

        logger.info("issue_deleted", issue_id=issue_id)
        self.publisher.publish(ISSUES_TOPIC, event)
