"""Tests for permission rules."""

import logging
from dataclasses import FrozenInstanceError

import pytest

from accessgrid.rbac.roles import Role, User
from accessgrid.rbac.rules import (
    DENIED,
    GRANTED,
    PermissionRule,
    RuleKind,
    conditional,
    rule_from_bool,
)


def _is_named_alice(user):
    return user.id == "alice"


class TestRuleResolution:
    """Test resolving each rule kind."""

    def test_granted(self, no_role_user):
        assert GRANTED.resolve(no_role_user) is True

    def test_denied(self, admin_user):
        assert DENIED.resolve(admin_user) is False

    def test_conditional_reads_user(self):
        rule = conditional(_is_named_alice)
        assert rule.resolve(User(id="alice")) is True
        assert rule.resolve(User(id="bob")) is False

    def test_conditional_only_true_allows(self):
        """Truthy values other than True do not grant access."""
        rule = conditional(lambda user: 1)
        assert rule.resolve(User(id="alice")) is False

    def test_failing_predicate_denies(self, caplog):
        """A predicate that raises is logged and denied."""
        def broken(user):
            raise RuntimeError("lookup failed")

        rule = conditional(broken)
        with caplog.at_level(logging.WARNING, logger="accessgrid"):
            assert rule.resolve(User(id="alice")) is False
        assert "broken" in caplog.text
        assert "lookup failed" in caplog.text

    def test_rule_from_bool(self):
        assert rule_from_bool(True) is GRANTED
        assert rule_from_bool(False) is DENIED


class TestRuleConstruction:
    """Test the tagged variant invariants."""

    def test_conditional_requires_predicate(self):
        with pytest.raises(ValueError):
            PermissionRule(RuleKind.CONDITIONAL)

    def test_plain_rules_take_no_predicate(self):
        with pytest.raises(ValueError):
            PermissionRule(RuleKind.GRANTED, predicate=_is_named_alice)

    def test_rules_are_immutable(self):
        with pytest.raises(FrozenInstanceError):
            GRANTED.kind = RuleKind.DENIED

    def test_labels(self):
        assert GRANTED.label == "granted"
        assert conditional(_is_named_alice).label == "_is_named_alice"
        assert conditional(_is_named_alice, name="alice_only").label == "alice_only"
        assert "alice_only" in repr(conditional(_is_named_alice, name="alice_only"))


class TestUserModel:
    """The user value supplied by the authentication layer."""

    def test_roles_default_empty(self):
        assert User(id="x").roles == []

    def test_roles_coerced_from_strings(self):
        user = User(id="x", roles=["admin", "read OnlyWithDataObject"])
        assert user.roles == [Role.ADMIN, Role.READ_ONLY_WITH_DATA_OBJECT]

    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError):
            User(id="x", roles=["superuser"])
