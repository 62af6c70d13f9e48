"""
Application constants for the issue tracker.

Contains notification topics, audit formatting values and listing defaults.
"""

# =============================================================================
# Notification Topics
# =============================================================================

ISSUES_TOPIC = "issues"


def comments_topic(issue_id: int) -> str:
    """Topic carrying comment events for one issue."""
    return f"issues/{issue_id}/comments"


def activities_topic(issue_id: int) -> str:
    """Topic carrying activity-log events for one issue."""
    return f"issues/{issue_id}/activities"


# =============================================================================
# Audit Trail
# =============================================================================

# Display name recorded when an assignee id no longer resolves to a user
UNKNOWN_USER_NAME = "Unknown"

# Appended to audit values cut at the configured maximum length
TRUNCATION_MARKER = "..."

# =============================================================================
# Listing
# =============================================================================

DEFAULT_PAGE = 0
DEFAULT_SORT_FIELD = "createdAt"
DEFAULT_PROJECT_SORT_FIELD = "name"
SORT_DESCENDING = "desc"
