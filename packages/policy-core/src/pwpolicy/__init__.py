"""Role-scoped password policy engine."""

from pwpolicy.config import PolicySettings
from pwpolicy.constraints import (
    Constraint,
    ConstraintParamsError,
    ConstraintRegistry,
    PolicyConfigError,
    UnknownConstraintError,
    ValidationResult,
)
from pwpolicy.models import ConstraintConfig, Policy
from pwpolicy.principal import Account, Principal
from pwpolicy.resolver import PolicyResolver
from pwpolicy.validator import PolicyValidator, ReportRow, StatusClass

__all__ = [
    "Account",
    "Constraint",
    "ConstraintConfig",
    "ConstraintParamsError",
    "ConstraintRegistry",
    "Policy",
    "PolicyConfigError",
    "PolicyResolver",
    "PolicySettings",
    "PolicyValidator",
    "Principal",
    "ReportRow",
    "StatusClass",
    "UnknownConstraintError",
    "ValidationResult",
]
