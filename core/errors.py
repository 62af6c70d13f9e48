"""
Domain error taxonomy.

Services raise these directly; the HTTP layer maps each kind to a status
code in backend.app.error_handlers.
"""


class TrackerError(Exception):
    """Base class for all domain errors."""

    status_code: int = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(TrackerError):
    """A referenced Project, Issue, Comment, Assignee or User is absent."""

    status_code = 404

    def __init__(self, entity: str, entity_id: int | str | None = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class UnauthorizedError(TrackerError):
    """No resolvable acting principal."""

    status_code = 401

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class ForbiddenError(TrackerError):
    """Principal resolved but lacks the specific permission."""

    status_code = 403


class InvalidInputError(TrackerError):
    """Malformed input rejected before any state change."""

    status_code = 422


__all__ = [
    "TrackerError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "InvalidInputError",
]
