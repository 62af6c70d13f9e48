"""Resolving the acting principal to a stored user."""

from core.constants import UNKNOWN_USER_NAME
from core.errors import UnauthorizedError
from core.identity import Principal
from core.models import User
from core.repositories import UserRepository


def resolve_acting_user(users: UserRepository, principal: Principal | None) -> User:
    """
    Load the stored user behind a principal.

    Raises:
        UnauthorizedError: No principal, or its email has no account
    """
    if principal is None:
        raise UnauthorizedError()
    user = users.get_by_email(principal.email)
    if user is None:
        raise UnauthorizedError()
    return user


def display_name(users: UserRepository, user_id: int) -> str:
    """Name shown in audit entries; ids that no longer resolve read as Unknown."""
    user = users.get_by_id(user_id)
    return user.name if user else UNKNOWN_USER_NAME
