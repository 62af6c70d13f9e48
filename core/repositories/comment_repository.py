"""Comment repository."""

from sqlalchemy.orm import joinedload

from core.models import Comment

from .base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment operations."""

    model = Comment

    def list_by_issue(self, issue_id: int) -> list[Comment]:
        """All comments on an issue, oldest first."""
        return (
            self.session.query(Comment)
            .options(joinedload(Comment.author))
            .filter(Comment.issue_id == issue_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .all()
        )

    def get_with_author(self, comment_id: int) -> Comment | None:
        """Get a comment with its author loaded in the same query."""
        return (
            self.session.query(Comment)
            .options(joinedload(Comment.author))
            .filter(Comment.id == comment_id)
            .first()
        )
