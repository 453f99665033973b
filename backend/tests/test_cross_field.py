"""Tests for cross-field validation."""

import pytest

from formforge.validation.cross_field import CrossFieldValidator
from formforge.validation.types import CROSS_FIELD_KEY, CrossFieldRule, CrossFieldType


@pytest.fixture
def validator():
    return CrossFieldValidator()


def rule(data: dict) -> CrossFieldRule:
    return CrossFieldRule.from_dict(data)


def run(validator, rules, data):
    errors: dict[str, list[str]] = {}
    passed = validator.validate(rules, data, errors)
    return passed, errors


class TestMatches:
    def test_all_equal(self, validator):
        r = rule({"type": "matches", "fields": ["a", "b", "c"]})
        passed, errors = run(validator, [r], {"a": "x", "b": "x", "c": "x"})
        assert passed
        assert errors == {}

    def test_one_divergent_value_reports_once(self, validator):
        r = rule({"type": "matches", "fields": ["a", "b", "c"], "message": "Values differ"})
        passed, errors = run(validator, [r], {"a": "x", "b": "x", "c": "y"})
        assert not passed
        assert errors == {CROSS_FIELD_KEY: ["Values differ"]}

    def test_strict_equality(self, validator):
        r = rule({"type": "matches", "fields": ["a", "b"]})
        passed, _ = run(validator, [r], {"a": "1", "b": 1})
        assert not passed

    def test_missing_fields(self, validator):
        r = rule({"type": "matches", "fields": ["a", "b"]})
        assert run(validator, [r], {})[0]
        assert not run(validator, [r], {"a": "x"})[0]

    @pytest.mark.parametrize("fields", [[], ["a"]])
    def test_fewer_than_two_fields_pass(self, validator, fields):
        r = rule({"type": "matches", "fields": fields})
        assert run(validator, [r], {"a": "x"})[0]

    def test_default_message(self, validator):
        r = rule({"type": "matches", "fields": ["a", "b"]})
        _, errors = run(validator, [r], {"a": 1, "b": 2})
        assert errors == {CROSS_FIELD_KEY: ["Cross-field validation failed"]}


class TestSum:
    def test_exact_sum(self, validator):
        r = rule({"type": "sum", "fields": ["a", "b"], "sum": 100})
        assert run(validator, [r], {"a": "60", "b": 40})[0]
        assert not run(validator, [r], {"a": 60, "b": 30})[0]

    def test_tolerance(self, validator):
        r = rule({"type": "sum", "fields": ["a", "b"], "params": {"sum": 1, "tolerance": 0.01}})
        assert run(validator, [r], {"a": 0.333, "b": 0.66})[0]

    def test_missing_and_non_numeric_count_as_zero(self, validator):
        r = rule({"type": "sum", "fields": ["a", "b", "c"], "sum": 5})
        assert run(validator, [r], {"a": 5, "b": "n/a"})[0]

    def test_default_target_is_zero(self, validator):
        r = rule({"type": "sum", "fields": ["a"]})
        assert run(validator, [r], {})[0]
        assert not run(validator, [r], {"a": 1})[0]


class TestAtLeastOne:
    def test_one_filled(self, validator):
        r = rule({"type": "at_least_one", "fields": ["email", "phone"]})
        assert run(validator, [r], {"email": "", "phone": "555"})[0]

    def test_none_filled(self, validator):
        r = rule({"type": "at_least_one", "fields": ["email", "phone"], "message": "Give a contact"})
        passed, errors = run(validator, [r], {"email": "", "phone": None})
        assert not passed
        assert errors == {CROSS_FIELD_KEY: ["Give a contact"]}

    def test_no_fields_fails(self, validator):
        r = rule({"type": "at_least_one", "fields": []})
        assert not run(validator, [r], {"a": "x"})[0]


class TestRuleHandling:
    def test_unknown_type_passes(self, validator):
        r = rule({"type": "greater_than", "fields": ["a", "b"]})
        assert r.type is None
        assert r.raw_type == "greater_than"
        assert run(validator, [r], {"a": 1, "b": 2})[0]

    def test_failures_accumulate(self, validator):
        rules = [
            rule({"type": "matches", "fields": ["a", "b"], "message": "first"}),
            rule({"type": "at_least_one", "fields": ["c"], "message": "second"}),
        ]
        _, errors = run(validator, rules, {"a": 1, "b": 2})
        assert errors == {CROSS_FIELD_KEY: ["first", "second"]}

    def test_inline_params_override_nested(self):
        r = rule({"type": "sum", "fields": ["a"], "sum": 10, "params": {"sum": 5}})
        assert r.type is CrossFieldType.SUM
        assert r.params["sum"] == 10

    def test_single_field_string(self):
        r = rule({"type": "at_least_one", "fields": "a"})
        assert r.fields == ["a"]

    def test_non_scalar_field_entries_dropped(self, validator):
        r = rule({"type": "at_least_one", "fields": [["a"], "b", {"c": 1}, 3]})
        assert r.fields == ["b", "3"]
        assert run(validator, [r], {"b": "x"})[0]

    def test_non_list_fields_wrapped(self):
        assert rule({"type": "sum", "fields": 5}).fields == ["5"]
        assert rule({"type": "sum", "fields": {"a": 1}}).fields == []

    def test_raising_check_fails_rule_only(self, validator, caplog):
        r = CrossFieldRule(type=CrossFieldType.AT_LEAST_ONE, fields=[["a"]], params={"message": "none"})
        ok = rule({"type": "matches", "fields": ["a", "b"]})
        passed, errors = run(validator, [r, ok], {"a": 1, "b": 1})
        assert not passed
        assert errors == {CROSS_FIELD_KEY: ["none"]}
        assert "raised" in caplog.text
