"""
Issue Query Engine.

Filtered, paginated issue listing with a deterministic order: every sort
field is followed by tie-breaks that end on the primary key, so walking the
pages returns each matching issue exactly once even when many rows share a
sort value.

Status and priority sort by their stored names (alphabetically), not by
severity.
"""

import math
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.orm import Session

from core.config import Settings, get_settings
from core.constants import DEFAULT_PAGE, DEFAULT_SORT_FIELD, SORT_DESCENDING
from core.errors import InvalidInputError
from core.logging import log_timing
from core.models import Issue, IssuePriority, IssueStatus
from core.repositories import IssueRepository
from core.schemas import IssueView, PageResult

from .views import issue_to_view


class SortField(str, Enum):
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    STATUS = "status"
    PRIORITY = "priority"
    TITLE = "title"

    @classmethod
    def parse(cls, name: str | None) -> "SortField":
        if name is None:
            return cls(DEFAULT_SORT_FIELD)
        try:
            return cls(name)
        except ValueError:
            allowed = ", ".join(f.value for f in cls)
            raise InvalidInputError(f"Unknown sort field '{name}'. Allowed: {allowed}") from None


_SORT_COLUMNS = {
    SortField.CREATED_AT: Issue.created_at,
    SortField.UPDATED_AT: Issue.updated_at,
    SortField.STATUS: Issue.status,
    SortField.PRIORITY: Issue.priority,
    SortField.TITLE: Issue.title,
}


def is_descending(sort_dir: str | None) -> bool:
    """Only "desc" (any case) sorts descending; everything else is ascending."""
    return sort_dir is not None and sort_dir.lower() == SORT_DESCENDING


def order_clauses(sort_field: SortField, descending: bool) -> list:
    """ORDER BY list for a sort field, tie-breaks included."""
    column = _SORT_COLUMNS[sort_field]
    clauses = [column.desc() if descending else column.asc()]
    if sort_field is not SortField.CREATED_AT:
        clauses.append(Issue.created_at.desc())
    clauses.append(Issue.id.asc())
    return clauses


@dataclass
class IssueQuery:
    page: int = DEFAULT_PAGE
    page_size: int | None = None
    sort_by: str | None = DEFAULT_SORT_FIELD
    sort_dir: str | None = None
    status: IssueStatus | None = None
    priority: IssuePriority | None = None
    assignee_id: int | None = None
    project_id: int | None = None
    search_text: str | None = None

    def filters(self) -> dict:
        return {
            "status": self.status,
            "priority": self.priority,
            "assignee_id": self.assignee_id,
            "project_id": self.project_id,
            "search_text": self.search_text,
        }


class IssueQueryEngine:
    """
    Usage:
        engine = IssueQueryEngine(session)
        page = engine.list(IssueQuery(status=IssueStatus.OPEN, sort_by="priority"))
    """

    def __init__(self, session: Session, settings: Settings | None = None):
        self.issues = IssueRepository(session)
        self.settings = settings or get_settings()

    def _page_size(self, requested: int | None) -> int:
        size = self.settings.default_page_size if requested is None else requested
        if size < 1 or size > self.settings.max_page_size:
            raise InvalidInputError(
                f"Page size must be between 1 and {self.settings.max_page_size}"
            )
        return size

    @log_timing("issue_listing")
    def list(self, query: IssueQuery) -> PageResult[IssueView]:
        """
        One page of issues matching every supplied filter.

        Raises:
            InvalidInputError: Unknown sort field, negative page or page size out of range
        """
        sort_field = SortField.parse(query.sort_by)
        if query.page < 0:
            raise InvalidInputError("Page index must not be negative")
        size = self._page_size(query.page_size)

        issues, total = self.issues.find_filtered(
            query.filters(),
            order_clauses(sort_field, is_descending(query.sort_dir)),
            page=query.page,
            page_size=size,
        )

        total_pages = math.ceil(total / size)
        return PageResult[IssueView](
            content=[issue_to_view(issue) for issue in issues],
            page=query.page,
            size=size,
            total_elements=total,
            total_pages=total_pages,
            last=query.page >= total_pages - 1,
        )
