"""Tests for the fluent rule builder and RuleSet."""

import dataclasses

import pytest

from content_schema import SchemaError
from content_schema.models.rules import (
    EMPTY_RULES,
    Constraint,
    ConstraintKind,
    Rule,
    RuleSet,
    Severity,
    as_rule_set,
)


def _noop(value, context):
    return True


class TestRuleBuilder:
    """Constraint accumulation and severity attachment."""

    def test_defaults_to_error_without_message(self):
        rules = Rule().required().min(1).build()
        assert [c.severity for c in rules.constraints] == [Severity.ERROR, Severity.ERROR]
        assert all(c.message is None for c in rules.constraints)

    def test_trailing_severity_applies_to_whole_unmarked_chain(self):
        rules = Rule().required().min(5).max(50).warning("Between 5 and 50.").build()
        assert rules.kinds() == (ConstraintKind.REQUIRED, ConstraintKind.MIN, ConstraintKind.MAX)
        assert all(c.severity == Severity.WARNING for c in rules.constraints)
        assert all(c.message == "Between 5 and 50." for c in rules.constraints)

    def test_each_severity_call_covers_its_own_group(self):
        rules = Rule().min(0).warning("low").max(5).error("high").build()
        low, high = rules.constraints
        assert (low.kind, low.severity, low.message) == (ConstraintKind.MIN, Severity.WARNING, "low")
        assert (high.kind, high.severity, high.message) == (ConstraintKind.MAX, Severity.ERROR, "high")

    def test_repeated_severity_call_last_wins(self):
        rules = Rule().min(0).warning("first").error("second").build()
        (constraint,) = rules.constraints
        assert constraint.severity == Severity.ERROR
        assert constraint.message == "second"

    def test_severity_without_message_keeps_severity_only(self):
        rules = Rule().email().warning().build()
        assert rules.constraints[0].severity == Severity.WARNING
        assert rules.constraints[0].message is None

    def test_severity_before_any_constraint_rejected(self):
        with pytest.raises(SchemaError):
            Rule().warning("nothing to attach to")

    def test_last_custom_wins(self):
        def first(value, context):
            return "first"

        def second(value, context):
            return "second"

        rules = Rule().custom(first).min(0).custom(second).build()
        assert len(rules.customs) == 1
        assert rules.custom.argument is second
        assert rules.kinds() == (ConstraintKind.MIN, ConstraintKind.CUSTOM)

    def test_membership_values_frozen_to_tuple(self):
        rules = Rule().one_of(["a", "b"]).build()
        assert rules.constraints[0].argument == ("a", "b")

    @pytest.mark.parametrize("bound", [True, None, [1]])
    def test_invalid_bounds_rejected(self, bound):
        with pytest.raises(SchemaError):
            Rule().min(bound)

    def test_empty_membership_rejected(self):
        with pytest.raises(SchemaError):
            Rule().one_of([])

    def test_custom_requires_callable(self):
        with pytest.raises(SchemaError):
            Rule().custom("not callable")

    def test_build_is_repeatable(self):
        builder = Rule().required().max(3)
        assert builder.build() == builder.build()


class TestRuleSet:
    """Read views over an immutable constraint tuple."""

    def test_builtins_exclude_required_and_custom(self):
        rules = Rule().required().custom(_noop).max(3).email().build()
        assert [c.kind for c in rules.builtins] == [ConstraintKind.MAX, ConstraintKind.EMAIL]
        assert rules.required.kind == ConstraintKind.REQUIRED

    def test_rule_set_is_frozen(self):
        rules = Rule().required().build()
        with pytest.raises(dataclasses.FrozenInstanceError):
            rules.constraints = ()

    def test_as_rule_set_accepts_builder_rule_set_and_none(self):
        built = Rule().required().build()
        assert as_rule_set(None) is EMPTY_RULES
        assert as_rule_set(built) is built
        assert as_rule_set(Rule().required()) == built

    def test_as_rule_set_rejects_other_values(self):
        with pytest.raises(SchemaError):
            as_rule_set(["required"])

    def test_hand_built_rule_set_may_hold_two_customs(self):
        rules = RuleSet(
            constraints=(
                Constraint(ConstraintKind.CUSTOM, argument=_noop),
                Constraint(ConstraintKind.CUSTOM, argument=_noop),
            )
        )
        assert len(rules.customs) == 2
        assert len(rules) == 2
