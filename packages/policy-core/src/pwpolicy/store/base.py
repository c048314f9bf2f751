"""Policy store contract - read-only lookup by role membership."""

from __future__ import annotations

from typing import Protocol, Sequence

from pwpolicy.models import Policy


class PolicyStore(Protocol):
    def find_by_role_membership(self, role_id: str) -> Sequence[Policy]:
        ...


class WritablePolicyStore(PolicyStore, Protocol):
    def save(self, policy: Policy) -> None:
        ...
