"""Pydantic v2 models for stored password policies."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConstraintConfig(BaseModel):
    """One constraint entry inside a policy: which constraint, configured how."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)


class Policy(BaseModel):
    """A named, role-scoped collection of constraint configurations."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    label: str = ""
    roles: frozenset[str] = Field(default_factory=frozenset)
    constraints: tuple[ConstraintConfig, ...] = ()
    # 0 means the password never expires.
    password_reset_days: int = Field(default=0, ge=0)
    show_policy_table: bool = True

    @field_validator("roles", mode="before")
    @classmethod
    def _drop_empty_roles(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(r for r in value if r)
        return value

    def applies_to(self, role: str) -> bool:
        return role in self.roles

    @property
    def display_label(self) -> str:
        return self.label or self.id
