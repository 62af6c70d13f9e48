"""
Comment Mutation Service.

Only a comment's author may edit or delete it. Authorship is compared by
user id, since the principal is rebuilt on every request.
"""

from sqlalchemy.orm import Session

from core.config import Settings, get_settings
from core.constants import comments_topic
from core.errors import ForbiddenError, NotFoundError
from core.identity import Principal
from core.logging import get_logger
from core.models import ActivityType, Comment, User
from core.models.base import utcnow
from core.notifications import CommentEvent, EventType, NotificationPublisher
from core.repositories import CommentRepository, IssueRepository, UserRepository
from core.schemas import CommentView

from .audit_service import AuditRecorder
from .diff import truncate
from .principals import resolve_acting_user
from .views import comment_to_view

logger = get_logger("comments")


class CommentService:
    def __init__(
        self,
        session: Session,
        audit: AuditRecorder,
        publisher: NotificationPublisher,
        settings: Settings | None = None,
    ):
        self.session = session
        self.audit = audit
        self.publisher = publisher
        self.settings = settings or get_settings()
        self.comments = CommentRepository(session)
        self.issues = IssueRepository(session)
        self.users = UserRepository(session)

    def _authored_comment(
        self, comment_id: int, acting_user: Principal | None
    ) -> tuple[Comment, User]:
        comment = self.comments.get_with_author(comment_id)
        if comment is None:
            raise NotFoundError("Comment", comment_id)
        user = resolve_acting_user(self.users, acting_user)
        if comment.author_id != user.id:
            raise ForbiddenError("Only the author can modify this comment")
        return comment, user

    def list_comments(self, issue_id: int) -> list[CommentView]:
        """Comments on an issue, oldest first. Raises NotFoundError for an unknown issue."""
        if self.issues.get_by_id(issue_id) is None:
            raise NotFoundError("Issue", issue_id)
        return [comment_to_view(c) for c in self.comments.list_by_issue(issue_id)]

    def create_comment(
        self, issue_id: int, content: str, acting_user: Principal | None
    ) -> CommentView:
        """
        Raises:
            NotFoundError: Issue does not exist
            UnauthorizedError: Acting user cannot be resolved
        """
        if self.issues.get_by_id(issue_id) is None:
            raise NotFoundError("Issue", issue_id)
        author = resolve_acting_user(self.users, acting_user)

        comment = Comment(content=content, issue_id=issue_id, author_id=author.id, author=author)
        self.comments.save(comment)
        self.session.commit()
        view = comment_to_view(comment)

        logger.info("comment_created", comment_id=view.id, issue_id=issue_id)
        self.audit.try_record(issue_id, ActivityType.COMMENT_ADDED, None, None, acting_user)
        self.publisher.publish(
            comments_topic(issue_id),
            CommentEvent(
                event_type=EventType.CREATED,
                comment_id=view.id,
                issue_id=issue_id,
                content=view.content,
                author_id=view.author_id,
                author_name=view.author_name,
            ),
        )
        return view

    def update_comment(
        self, comment_id: int, content: str, acting_user: Principal | None
    ) -> CommentView:
        """
        Replace a comment's content.

        The audit entry keeps old and new content cut to the configured
        maximum length.

        Raises:
            NotFoundError: Comment does not exist
            UnauthorizedError: Acting user cannot be resolved
            ForbiddenError: Acting user is not the author
        """
        comment, _ = self._authored_comment(comment_id, acting_user)

        old_content = comment.content
        comment.content = content
        comment.updated_at = utcnow()
        self.comments.save(comment)
        self.session.commit()
        view = comment_to_view(comment)

        limit = self.settings.audit_value_max_length
        logger.info("comment_updated", comment_id=comment_id, issue_id=view.issue_id)
        self.audit.try_record(
            view.issue_id,
            ActivityType.COMMENT_EDITED,
            truncate(old_content, limit),
            truncate(content, limit),
            acting_user,
        )
        self.publisher.publish(
            comments_topic(view.issue_id),
            CommentEvent(
                event_type=EventType.UPDATED,
                comment_id=view.id,
                issue_id=view.issue_id,
                content=view.content,
                author_id=view.author_id,
                author_name=view.author_name,
            ),
        )
        return view

    def delete_comment(self, comment_id: int, acting_user: Principal | None) -> None:
        """
        Raises:
            NotFoundError: Comment does not exist
            UnauthorizedError: Acting user cannot be resolved
            ForbiddenError: Acting user is not the author
        """
        comment, author = self._authored_comment(comment_id, acting_user)
        issue_id = comment.issue_id

        self.comments.delete(comment)
        self.session.commit()

        logger.info("comment_deleted", comment_id=comment_id, issue_id=issue_id)
        self.audit.try_record(issue_id, ActivityType.COMMENT_DELETED, None, None, acting_user)
        self.publisher.publish(
            comments_topic(issue_id),
            CommentEvent(
                event_type=EventType.DELETED,
                comment_id=comment_id,
                issue_id=issue_id,
                content=None,
                author_id=author.id,
                author_name=author.name,
            ),
        )
