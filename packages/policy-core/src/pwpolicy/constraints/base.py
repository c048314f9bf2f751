"""Constraint contract - a single pluggable password rule.

Concrete constraints (length, character types, history, ...) live outside
this package and are registered with a ConstraintRegistry at startup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from pwpolicy.principal import Principal


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error_message: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def fail(cls, message: str = "") -> ValidationResult:
        return cls(valid=False, error_message=message or None)


class Constraint(ABC):
    """Base class for all password constraints."""

    # Optional JSON schema for the configuration params.
    params_schema: dict[str, Any] | None = None

    @abstractmethod
    def validate(self, password: str, principal: Principal) -> ValidationResult:
        ...

    @abstractmethod
    def summary(self) -> str:
        """Human-readable description of the configured rule."""
