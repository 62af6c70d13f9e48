"""
Authentication dependencies for FastAPI routes.

Supports both:
- Bearer token in Authorization header (for API clients)
- HttpOnly cookie (for browser-based frontends)
"""

from fastapi import Cookie, Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from core.db import get_db
from core.errors import UnauthorizedError
from core.identity import Principal
from core.repositories import UserRepository

from .jwt import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


class JwtIdentityGate:
    """Resolves the principal behind a bearer token whose subject is an email."""

    def __init__(self, token: str | None, users: UserRepository):
        self.token = token
        self.users = users

    def current_principal(self) -> Principal | None:
        if not self.token:
            return None
        try:
            payload = decode_access_token(self.token)
        except ValueError:
            return None

        email = payload.get("sub")
        if not email:
            return None

        user = self.users.get_by_email(email)
        if user is None:
            return None
        return Principal(id=user.id, email=user.email, name=user.name)


def get_token_from_request(
    token_header: str | None = Depends(oauth2_scheme),
    access_token_cookie: str | None = Cookie(None, alias="access_token"),
) -> str | None:
    """Authorization header first, then the access_token cookie."""
    return token_header or access_token_cookie


def get_optional_principal(
    token: str | None = Depends(get_token_from_request),
    db: Session = Depends(get_db),
) -> Principal | None:
    return JwtIdentityGate(token, UserRepository(db)).current_principal()


def get_current_principal(
    principal: Principal | None = Depends(get_optional_principal),
) -> Principal:
    """
    Resolve the authenticated principal or raise 401.

    Steps:
    1) Extract token from header or cookie
    2) Decode JWT and read the subject (email)
    3) Load the matching user
    """
    if principal is None:
        raise UnauthorizedError()
    return principal
