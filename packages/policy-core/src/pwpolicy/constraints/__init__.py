"""Password constraints - contract and registry."""

from pwpolicy.constraints.base import Constraint, ValidationResult
from pwpolicy.constraints.registry import (
    ConstraintFactory,
    ConstraintParamsError,
    ConstraintRegistry,
    PolicyConfigError,
    UnknownConstraintError,
)

__all__ = [
    "Constraint",
    "ConstraintFactory",
    "ConstraintParamsError",
    "ConstraintRegistry",
    "PolicyConfigError",
    "UnknownConstraintError",
    "ValidationResult",
]
