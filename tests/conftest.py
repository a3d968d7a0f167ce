"""Pytest configuration and shared fixtures."""

import pytest

from accessgrid.rbac.permissions import RESOURCE_ACTIONS
from accessgrid.rbac.roles import Role, User
from accessgrid.rbac.rules import GRANTED


@pytest.fixture
def admin_user():
    return User(id="u-admin", roles=[Role.ADMIN])


@pytest.fixture
def read_only_user():
    return User(id="u-readonly", roles=[Role.READ_ONLY_USER])


@pytest.fixture
def no_role_user():
    return User(id="u-none", roles=[])


@pytest.fixture
def make_definitions():
    """Build a complete role table filled with one rule, with optional overrides.

    Usage::

        defs = make_definitions(DENIED, {(Role.ADMIN, "data_objects", "table"): GRANTED})
    """
    def _make(default_rule=GRANTED, overrides=None):
        overrides = overrides or {}
        table = {}
        for role in Role:
            table[role] = {}
            for resource, action_enum in RESOURCE_ACTIONS.items():
                table[role][resource] = {}
                for action in action_enum:
                    key = (role, resource.value, action.value)
                    table[role][resource][action] = overrides.get(key, default_rule)
        return table

    return _make


@pytest.fixture
def sample_registry_yaml():
    """YAML declaration equivalent to the built-in role table."""
    return """\
roles:
  admin:
    data_objects: {inventory: true, evidence: true, metadata: true, table: true}
    evidence: {evidence: true, create_data_firewall: true}
  readOnlyUser:
    data_objects: {inventory: true, evidence: false, metadata: false, table: false}
    evidence: {evidence: true, create_data_firewall: true}
  read OnlyWithDataObject:
    data_objects: {inventory: true, evidence: true, metadata: true, table: true}
    evidence: {evidence: true, create_data_firewall: true}
"""
