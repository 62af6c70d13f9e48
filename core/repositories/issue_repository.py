"""
Issue repository with eager-loaded reads and filtered, paginated listing.
"""

from sqlalchemy import and_, func
from sqlalchemy.orm import joinedload

from core.models import Issue

from .base import BaseRepository


class IssueRepository(BaseRepository[Issue]):
    """
    Repository for Issue operations.

    Key features:
    - get_with_creator_and_assignee: one query for the issue and its display names
    - find_filtered: shared filter conditions for the page and its count
    """

    model = Issue

    def _with_people(self):
        return self.session.query(Issue).options(
            joinedload(Issue.creator),
            joinedload(Issue.assignee),
            joinedload(Issue.project),
        )

    def get_with_creator_and_assignee(self, issue_id: int) -> Issue | None:
        """Get an issue with creator, assignee and project eager-loaded."""
        return self._with_people().populate_existing().filter(Issue.id == issue_id).first()

    def find_filtered(
        self,
        filters: dict,
        order_by: list,
        page: int = 0,
        page_size: int = 20,
    ) -> tuple[list[Issue], int]:
        """
        Get one page of issues matching every supplied filter.

        Args:
            filters: Filter dictionary; None values are ignored. Keys:
                - status: exact IssueStatus
                - priority: exact IssuePriority
                - assignee_id: exact assignee
                - project_id: exact project
                - search_text: case-insensitive substring of the title
            order_by: Complete ORDER BY clause list, tie-breaks included
            page: Zero-based page index
            page_size: Rows per page

        Returns:
            Tuple of (issues, total_count)
        """
        # Build base filter conditions (reused for both count and select)
        base_conditions = []

        if filters.get("status") is not None:
            base_conditions.append(Issue.status == filters["status"])

        if filters.get("priority") is not None:
            base_conditions.append(Issue.priority == filters["priority"])

        if filters.get("assignee_id") is not None:
            base_conditions.append(Issue.assignee_id == filters["assignee_id"])

        if filters.get("project_id") is not None:
            base_conditions.append(Issue.project_id == filters["project_id"])

        search_text = filters.get("search_text")
        if search_text and search_text.strip():
            base_conditions.append(Issue.title.icontains(search_text.strip(), autoescape=True))

        count_query = self.session.query(func.count(Issue.id))
        query = self._with_people()
        if base_conditions:
            count_query = count_query.filter(and_(*base_conditions))
            query = query.filter(and_(*base_conditions))

        total = count_query.scalar() or 0

        issues = query.order_by(*order_by).offset(page * page_size).limit(page_size).all()
        return issues, total
