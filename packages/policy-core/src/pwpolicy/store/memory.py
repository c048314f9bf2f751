"""In-memory policy store."""

from __future__ import annotations

from pwpolicy.models import Policy


class InMemoryPolicyStore:
    def __init__(self, policies: list[Policy] | None = None) -> None:
        self._policies: dict[str, Policy] = {}
        for policy in policies or []:
            self.save(policy)

    def save(self, policy: Policy) -> None:
        self._policies[policy.id] = policy

    def remove(self, policy_id: str) -> bool:
        return self._policies.pop(policy_id, None) is not None

    def get(self, policy_id: str) -> Policy | None:
        return self._policies.get(policy_id)

    def list_all(self) -> list[Policy]:
        return list(self._policies.values())

    def find_by_role_membership(self, role_id: str) -> list[Policy]:
        return [p for p in self._policies.values() if p.applies_to(role_id)]
