"""Shared fixtures - stand-in constraints and a populated store."""

from __future__ import annotations

import pytest

from pwpolicy.constraints import Constraint, ConstraintRegistry, ValidationResult
from pwpolicy.models import ConstraintConfig, Policy
from pwpolicy.store.memory import InMemoryPolicyStore
from pwpolicy.validator import PolicyValidator


class MinLength(Constraint):
    params_schema = {
        "type": "object",
        "required": ["length"],
        "properties": {"length": {"type": "integer", "minimum": 1}},
        "additionalProperties": False,
    }

    def __init__(self, length: int) -> None:
        self.length = length

    def validate(self, password, principal):
        if len(password) < self.length:
            return ValidationResult.fail(f"Password length must be at least {self.length} characters.")
        return ValidationResult.ok()

    def summary(self) -> str:
        return f"Minimum length: {self.length}"


class RequireDigit(Constraint):
    """Fails without an error message."""

    def validate(self, password, principal):
        if any(c.isdigit() for c in password):
            return ValidationResult.ok()
        return ValidationResult(valid=False)

    def summary(self) -> str:
        return "At least one digit"


class NotUsername(Constraint):
    def validate(self, password, principal):
        name = getattr(principal, "name", "")
        if name and name.lower() in password.lower():
            return ValidationResult.fail("Password must not contain the username.")
        return ValidationResult.ok()

    def summary(self) -> str:
        return "Must not contain the username"


class AlwaysPass(Constraint):
    def validate(self, password, principal):
        return ValidationResult.ok()

    def summary(self) -> str:
        return "Always passes"


@pytest.fixture()
def registry() -> ConstraintRegistry:
    reg = ConstraintRegistry()
    reg.register("password_length", MinLength)
    reg.register("require_digit", RequireDigit)
    reg.register("not_username", NotUsername)
    reg.register("always_pass", AlwaysPass)
    return reg


@pytest.fixture()
def editor_policy() -> Policy:
    return Policy(
        id="p1",
        label="Editor policy",
        roles=frozenset({"editor"}),
        constraints=(ConstraintConfig(id="password_length", params={"length": 6}),),
    )


@pytest.fixture()
def store(editor_policy: Policy) -> InMemoryPolicyStore:
    return InMemoryPolicyStore([editor_policy])


@pytest.fixture()
def validator(store: InMemoryPolicyStore, registry: ConstraintRegistry) -> PolicyValidator:
    return PolicyValidator(store, registry)
