"""Policy file loader - YAML policy definitions validated against JSON Schema.

File layout::

    schema_version: "1.0"
    policies:
      - id: editors
        label: Editor passwords
        roles: [editor]
        constraints:
          - id: password_length
            params: {length: 8}

Constraint params are checked against the registry at load time so a bad
policy file fails before any password is evaluated.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import jsonschema
import yaml
from pydantic import ValidationError

from pwpolicy.config import PolicySettings
from pwpolicy.constraints.registry import ConstraintRegistry, PolicyConfigError
from pwpolicy.models import Policy
from pwpolicy.store.base import WritablePolicyStore

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "policy.schema.json"


class PolicyLoadError(PolicyConfigError):
    """Raised when a policy file cannot be read or is invalid."""


def _load_schema() -> dict:
    with open(SCHEMA_PATH) as f:
        return json.load(f)


def _load_yaml(path: Path) -> dict:
    try:
        with open(path) as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise PolicyLoadError(f"{path}: invalid YAML: {e}") from e


def parse_policies(data: dict, registry: ConstraintRegistry | None = None) -> list[Policy]:
    """Build policies from already-parsed policy file data."""
    try:
        jsonschema.validate(instance=data, schema=_load_schema())
    except jsonschema.ValidationError as e:
        raise PolicyLoadError(f"{e.json_path}: {e.message}") from e

    policies: list[Policy] = []
    seen: set[str] = set()
    for entry in data["policies"]:
        try:
            policy = Policy.model_validate(entry)
        except ValidationError as e:
            raise PolicyLoadError(f"policy {entry.get('id')!r}: {e}") from e
        if policy.id in seen:
            raise PolicyLoadError(f"Duplicate policy id: {policy.id}")
        seen.add(policy.id)

        if registry is not None:
            for config in policy.constraints:
                registry.check(config)
        policies.append(policy)
    return policies


def load_policies(
    path: Path | str | None = None,
    registry: ConstraintRegistry | None = None,
    settings: PolicySettings | None = None,
) -> list[Policy]:
    """Load policies from *path*, defaulting to the configured ``policy_file``."""
    if path is None:
        path = (settings or PolicySettings()).policy_file
    path = Path(path)
    if not path.exists():
        raise PolicyLoadError(f"Policy file not found: {path}")
    policies = parse_policies(_load_yaml(path), registry)
    logger.info("Loaded %d password policies from %s", len(policies), path)
    return policies


def load_into(
    store: WritablePolicyStore,
    path: Path | str | None = None,
    registry: ConstraintRegistry | None = None,
    settings: PolicySettings | None = None,
) -> list[Policy]:
    """Load a policy file and save every policy into *store*."""
    policies = load_policies(path, registry, settings)
    for policy in policies:
        store.save(policy)
    return policies
