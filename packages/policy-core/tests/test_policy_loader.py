"""Tests for the YAML policy loader."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from pwpolicy.config import PolicySettings
from pwpolicy.constraints import ConstraintParamsError, UnknownConstraintError
from pwpolicy.store.loader import PolicyLoadError, load_into, load_policies, parse_policies
from pwpolicy.store.memory import InMemoryPolicyStore

POLICY_FILE = {
    "schema_version": "1.0",
    "policies": [
        {
            "id": "editors",
            "label": "Editor passwords",
            "roles": ["editor", "author"],
            "password_reset_days": 90,
            "constraints": [
                {"id": "password_length", "params": {"length": 8}},
                {"id": "require_digit"},
            ],
        },
        {"id": "admins", "roles": ["admin"]},
    ],
}


@pytest.fixture()
def policy_path(tmp_path: Path) -> Path:
    path = tmp_path / "policies.yaml"
    path.write_text(yaml.safe_dump(POLICY_FILE))
    return path


class TestLoadPolicies:
    def test_load(self, policy_path, registry):
        policies = load_policies(policy_path, registry)
        assert [p.id for p in policies] == ["editors", "admins"]
        editors = policies[0]
        assert editors.label == "Editor passwords"
        assert editors.roles == frozenset({"editor", "author"})
        assert editors.password_reset_days == 90
        assert [c.id for c in editors.constraints] == ["password_length", "require_digit"]
        assert editors.constraints[0].params == {"length": 8}

    def test_load_without_registry(self, policy_path):
        assert len(load_policies(str(policy_path))) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(PolicyLoadError, match="not found"):
            load_policies(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("policies: [unclosed")
        with pytest.raises(PolicyLoadError, match="YAML"):
            load_policies(path)

    def test_empty_file_rejected(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(PolicyLoadError, match="policies"):
            load_policies(path)


class TestParsePolicies:
    def test_unknown_field_rejected(self):
        with pytest.raises(PolicyLoadError):
            parse_policies({"policies": [{"id": "p", "rolez": ["editor"]}]})

    def test_constraint_without_id_rejected(self):
        with pytest.raises(PolicyLoadError):
            parse_policies({"policies": [{"id": "p", "constraints": [{"params": {}}]}]})

    def test_duplicate_policy_id(self):
        with pytest.raises(PolicyLoadError, match="Duplicate"):
            parse_policies({"policies": [{"id": "p"}, {"id": "p"}]})

    def test_unknown_constraint_fails_at_load(self, registry):
        data = {"policies": [{"id": "p", "constraints": [{"id": "dictionary"}]}]}
        with pytest.raises(UnknownConstraintError):
            parse_policies(data, registry)

    def test_bad_params_fail_at_load(self, registry):
        data = {"policies": [{"id": "p", "constraints": [
            {"id": "password_length", "params": {"length": -3}},
        ]}]}
        with pytest.raises(ConstraintParamsError):
            parse_policies(data, registry)


class TestLoadInto:
    def test_into_memory_store(self, policy_path, registry):
        store = InMemoryPolicyStore()
        load_into(store, policy_path, registry)
        assert [p.id for p in store.find_by_role_membership("author")] == ["editors"]
        assert store.get("admins") is not None


class TestConfiguredPolicyFile:
    def test_load_uses_settings_policy_file(self, policy_path):
        settings = PolicySettings(_env_file=None, policy_file=str(policy_path))
        assert [p.id for p in load_policies(settings=settings)] == ["editors", "admins"]

    def test_load_into_uses_settings_policy_file(self, policy_path, registry):
        store = InMemoryPolicyStore()
        settings = PolicySettings(_env_file=None, policy_file=str(policy_path))
        load_into(store, registry=registry, settings=settings)
        assert store.get("editors").password_reset_days == 90

    def test_missing_configured_file(self, tmp_path):
        settings = PolicySettings(_env_file=None, policy_file=str(tmp_path / "absent.yaml"))
        with pytest.raises(PolicyLoadError, match="absent.yaml"):
            load_policies(settings=settings)
