"""Policy resolver - role set to deduplicated applicable policies."""

from __future__ import annotations

import logging
from typing import Iterable

from pwpolicy.models import Policy
from pwpolicy.store.base import PolicyStore

logger = logging.getLogger(__name__)


class PolicyResolver:
    def __init__(self, store: PolicyStore) -> None:
        self._store = store

    def resolve(self, roles: Iterable[str | None]) -> dict[str, Policy]:
        """Return policies applying to any of *roles*, keyed by policy id.

        Each role is queried on its own and the results unioned; the first
        match for a policy id wins. Empty role ids are never queried.
        """
        role_ids = sorted({r for r in roles if r})
        applicable: dict[str, Policy] = {}
        for role in role_ids:
            for policy in self._store.find_by_role_membership(role):
                if policy.id not in applicable:
                    applicable[policy.id] = policy
        logger.debug("Resolved %d policies for roles %s", len(applicable), role_ids)
        return applicable
