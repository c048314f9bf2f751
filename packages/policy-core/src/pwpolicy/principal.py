"""Principal - the identity whose password is being checked."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class Principal(Protocol):
    def current_roles(self) -> set[str]:
        ...


@dataclass(frozen=True)
class Account:
    """Read-only view of a user account and its persisted roles."""
    id: str
    name: str = ""
    roles: frozenset[str] = field(default_factory=frozenset)

    def current_roles(self) -> set[str]:
        return set(self.roles)
