"""
Audit Recorder.

Writes activity log entries in a unit of work of its own. The mutation that
triggered an entry has already committed, so nothing raised here can undo it.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session, sessionmaker

from core.constants import activities_topic
from core.errors import NotFoundError
from core.identity import Principal
from core.logging import audit_logger as logger
from core.models import ActivityLog, ActivityType
from core.notifications import ActivityEvent, EventType, NotificationPublisher
from core.repositories import ActivityLogRepository, IssueRepository, UserRepository
from core.schemas import ActivityLogView

from .principals import resolve_acting_user
from .views import activity_to_view


class AuditRecorder:
    """
    Persists one ActivityLog row per semantic change.

    Usage:
        audit = AuditRecorder(db.session_factory, get_publisher())
        audit.try_record(issue.id, ActivityType.ISSUE_CREATED, None, None, principal)
    """

    def __init__(self, session_factory: sessionmaker, publisher: NotificationPublisher):
        self.session_factory = session_factory
        self.publisher = publisher

    @contextmanager
    def _unit_of_work(self) -> Iterator[Session]:
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def record(
        self,
        issue_id: int,
        activity_type: ActivityType,
        old_value: str | None,
        new_value: str | None,
        acting_user: Principal | None,
    ) -> ActivityLogView:
        """
        Insert an entry and broadcast it on the issue's activity topic.

        Raises:
            NotFoundError: The issue no longer exists
            UnauthorizedError: The acting user cannot be resolved
        """
        with self._unit_of_work() as session:
            issue = IssueRepository(session).get_by_id(issue_id)
            if issue is None:
                raise NotFoundError("Issue", issue_id)
            user = resolve_acting_user(UserRepository(session), acting_user)

            log = ActivityLog(
                issue_id=issue.id,
                activity_type=activity_type,
                user_id=user.id,
                user=user,
                old_value=old_value,
                new_value=new_value,
            )
            ActivityLogRepository(session).save(log)
            view = activity_to_view(log)

        logger.info(
            "activity_recorded",
            issue_id=issue_id,
            activity_type=activity_type.value,
            activity_log_id=view.id,
        )
        self.publisher.publish(
            activities_topic(issue_id),
            ActivityEvent(
                event_type=EventType.CREATED,
                activity_log_id=view.id,
                issue_id=issue_id,
                activity_type=activity_type.value,
                user_id=view.user_id,
                user_name=view.user_name,
                old_value=old_value,
                new_value=new_value,
            ),
        )
        return view

    def try_record(
        self,
        issue_id: int,
        activity_type: ActivityType,
        old_value: str | None,
        new_value: str | None,
        acting_user: Principal | None,
    ) -> ActivityLogView | None:
        """Like record, but a failure is logged and None returned."""
        try:
            return self.record(issue_id, activity_type, old_value, new_value, acting_user)
        except Exception as e:
            logger.warning(
                "audit_record_failed",
                issue_id=issue_id,
                activity_type=activity_type.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    def list_by_issue(self, issue_id: int) -> list[ActivityLogView]:
        """Entries for an issue, newest first. An unknown issue yields an empty list."""
        with self._unit_of_work() as session:
            logs = ActivityLogRepository(session).list_by_issue(issue_id)
            return [activity_to_view(log) for log in logs]
