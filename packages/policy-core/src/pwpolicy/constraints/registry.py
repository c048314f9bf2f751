"""Constraint registry - maps constraint ids to factories.

Registration happens once at startup; the validator only ever calls
``create(id, params)``. Params are passed to the factory as keyword
arguments after being checked against the constraint's JSON schema.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Protocol

import jsonschema

from pwpolicy.constraints.base import Constraint
from pwpolicy.models import ConstraintConfig

logger = logging.getLogger(__name__)

ConstraintBuilder = Callable[..., Constraint]


class PolicyConfigError(Exception):
    """Stored policy data is unusable. A defect, not a user-facing failure."""


class UnknownConstraintError(PolicyConfigError):
    pass


class ConstraintParamsError(PolicyConfigError):
    pass


class ConstraintFactory(Protocol):
    def create(self, constraint_id: str, params: Mapping[str, Any]) -> Constraint:
        ...


@dataclass(frozen=True)
class _Registration:
    builder: ConstraintBuilder
    schema: dict[str, Any] | None = None


class ConstraintRegistry:
    def __init__(self) -> None:
        self._registrations: dict[str, _Registration] = {}

    def register(
        self,
        constraint_id: str,
        builder: ConstraintBuilder,
        schema: dict[str, Any] | None = None,
    ) -> None:
        if not constraint_id:
            raise ValueError("constraint_id must be non-empty")
        if schema is None:
            schema = getattr(builder, "params_schema", None)
        if schema is not None:
            jsonschema.Draft7Validator.check_schema(schema)
        self._registrations[constraint_id] = _Registration(builder=builder, schema=schema)

    def constraint(self, constraint_id: str, schema: dict[str, Any] | None = None):
        """Class decorator form of ``register``."""
        def decorator(cls):
            self.register(constraint_id, cls, schema)
            return cls
        return decorator

    def is_registered(self, constraint_id: str) -> bool:
        return constraint_id in self._registrations

    def ids(self) -> list[str]:
        return sorted(self._registrations)

    def check(self, config: ConstraintConfig) -> None:
        """Validate a stored config without building the constraint."""
        self._check_params(config.id, config.params)

    def create(self, constraint_id: str, params: Mapping[str, Any]) -> Constraint:
        registration = self._check_params(constraint_id, params)
        try:
            instance = registration.builder(**dict(params))
        except (TypeError, ValueError) as e:
            raise ConstraintParamsError(
                f"Constraint '{constraint_id}' rejected its params: {e}"
            ) from e
        logger.debug("Created constraint %s", constraint_id)
        return instance

    def _check_params(self, constraint_id: str, params: Mapping[str, Any]) -> _Registration:
        registration = self._registrations.get(constraint_id)
        if registration is None:
            raise UnknownConstraintError(f"Unknown constraint id: {constraint_id}")
        if registration.schema is not None:
            try:
                jsonschema.validate(instance=dict(params), schema=registration.schema)
            except jsonschema.ValidationError as e:
                raise ConstraintParamsError(
                    f"Constraint '{constraint_id}' params invalid: {e.json_path}: {e.message}"
                ) from e
        return registration
