"""
Acting-principal contract.

The core never authenticates credentials. A request boundary resolves the
caller once (see backend.app.auth.dependencies) and passes the resulting
Principal explicitly into every mutation.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Principal:
    """The resolved identity of the caller."""

    id: int
    email: str
    name: str


class IdentityGate(Protocol):
    """Anything able to resolve the current caller."""

    def current_principal(self) -> Principal | None: ...


__all__ = ["Principal", "IdentityGate"]
