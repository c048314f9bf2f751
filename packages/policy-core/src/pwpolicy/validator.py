"""Password policy validator - evaluates every applicable constraint.

Unlike a first-deny-wins rule engine, every constraint of every applicable
policy is always run so a full report can be built from the same pass.

Empty password handling:
  - roles unchanged → individual constraint failures are ignored
    (the user is not changing their password)
  - roles changed and a policy applies → forced failure, the user must
    enter a password that satisfies the newly applicable policies
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from pwpolicy.config import PolicySettings
from pwpolicy.constraints.base import Constraint, ValidationResult
from pwpolicy.constraints.registry import ConstraintFactory
from pwpolicy.models import Policy
from pwpolicy.principal import Principal
from pwpolicy.resolver import PolicyResolver
from pwpolicy.store.base import PolicyStore

logger = logging.getLogger(__name__)


class StatusClass(Enum):
    PASSED = "passed"
    FAILED = "failed"


@dataclass(frozen=True)
class ReportRow:
    policy_label: str
    status: str
    constraint_summary: str
    status_class: StatusClass

    @property
    def css_class(self) -> str:
        return f"password-policy-constraint-{self.status_class.value}"


@dataclass(frozen=True)
class _Evaluation:
    policy: Policy
    constraint: Constraint
    result: ValidationResult


class PolicyValidator:
    def __init__(
        self,
        store: PolicyStore,
        factory: ConstraintFactory,
        settings: PolicySettings | None = None,
    ) -> None:
        self._resolver = PolicyResolver(store)
        self._factory = factory
        self._settings = settings or PolicySettings()

    def validate(
        self,
        password: str,
        principal: Principal,
        effective_roles: Iterable[str] | None = None,
    ) -> bool:
        """Return True when the password satisfies every applicable policy.

        *effective_roles* is a collection of role ids overriding the
        principal's current roles for this call; empty or None uses the
        current roles.
        """
        # Lone surrogates are counted as bytes rather than rejected.
        if len(password.encode("utf-8", "surrogatepass")) > self._settings.max_password_length:
            logger.warning("Password exceeds max length, skipping policy evaluation")
            return True

        applicable, force_failure = self._prepare(password, principal, effective_roles)

        valid = True
        for evaluation in self._evaluate(applicable, password, principal):
            if valid and password != "" and not evaluation.result.valid:
                valid = False
            elif force_failure:
                valid = False
        return valid

    def build_report(
        self,
        password: str,
        principal: Principal,
        effective_roles: Iterable[str] | None = None,
    ) -> list[ReportRow]:
        """One row per (policy, constraint), policy-major.

        Status text follows force-failure; status class follows the raw
        constraint result only.
        """
        applicable, force_failure = self._prepare(password, principal, effective_roles)

        rows: list[ReportRow] = []
        for evaluation in self._evaluate(applicable, password, principal):
            result = evaluation.result
            if not force_failure and result.valid:
                status = "Pass"
            else:
                message = result.error_message or self._settings.fallback_message
                status = f"Fail - {message}"
            rows.append(ReportRow(
                policy_label=evaluation.policy.display_label,
                status=status,
                constraint_summary=evaluation.constraint.summary(),
                status_class=StatusClass.PASSED if result.valid else StatusClass.FAILED,
            ))
        return rows

    def _prepare(
        self,
        password: str,
        principal: Principal,
        effective_roles: Iterable[str] | None,
    ) -> tuple[dict[str, Policy], bool]:
        if isinstance(effective_roles, str):
            raise TypeError("effective_roles must be a collection of role ids, not a str")
        original_roles = set(principal.current_roles())
        roles = set(effective_roles or ()) or original_roles

        applicable = self._resolver.resolve(roles)

        # New role added and a policy now applies, but no password supplied.
        force_failure = roles != original_roles and password == "" and bool(applicable)
        if force_failure:
            logger.warning(
                "Roles changed with empty password, forcing failure for %d policies",
                len(applicable),
            )
        return applicable, force_failure

    def _evaluate(
        self,
        applicable: dict[str, Policy],
        password: str,
        principal: Principal,
    ) -> Iterator[_Evaluation]:
        for policy in applicable.values():
            for config in policy.constraints:
                constraint = self._factory.create(config.id, config.params)
                result = constraint.validate(password, principal)
                logger.debug(
                    "Policy %s constraint %s: %s",
                    policy.id, config.id, "valid" if result.valid else "invalid",
                )
                yield _Evaluation(policy=policy, constraint=constraint, result=result)
