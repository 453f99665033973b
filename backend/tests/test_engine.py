"""Tests for the validation engine and submission orchestration."""

import pytest

from formforge.config import EngineConfig
from formforge.validation.engine import FieldState, ValidationEngine
from formforge.validation.field_validator import REQUIRED_MESSAGE, type_mismatch_message
from formforge.validation.types import CROSS_FIELD_KEY, FormSchema


@pytest.fixture
def engine():
    engine = ValidationEngine()
    yield engine
    engine.close()


@pytest.fixture
def contact_schema():
    return {
        "fields": [
            {"field_id": "email", "field_type": "email", "required": True},
            {"field_id": "phone", "field_type": "phone", "validation_rules": {"min_length": 10}},
        ]
    }


@pytest.fixture
def gated_schema():
    return {
        "fields": [
            {"field_id": "A", "field_type": "select", "required": True},
            {
                "field_id": "B",
                "field_type": "text",
                "required": True,
                "conditional_logic": {"field": "A", "operator": "equals", "value": "yes"},
            },
        ]
    }


class TestScenarios:
    def test_invalid_contact(self, engine, contact_schema):
        result = engine.validate(contact_schema, {"email": "bad", "phone": "12345"})

        assert not result.valid
        assert result.errors == {
            "email": [type_mismatch_message("email")],
            "phone": ["Minimum length is 10 characters"],
        }

    def test_valid_contact(self, engine, contact_schema):
        result = engine.validate(contact_schema, {"email": "a@example.com", "phone": "5551234567"})
        assert result.valid
        assert result.errors == {}

    def test_gate_false_skips_field(self, engine, gated_schema):
        result = engine.validate(gated_schema, {"A": "no"})
        assert result.valid

    def test_gate_true_validates_field(self, engine, gated_schema):
        result = engine.validate(gated_schema, {"A": "yes"})
        assert result.errors == {"B": [REQUIRED_MESSAGE]}

    def test_to_dict(self, engine, contact_schema):
        result = engine.validate(contact_schema, {"email": ""})
        assert result.to_dict() == {"valid": False, "errors": {"email": [REQUIRED_MESSAGE]}}


class TestProperties:
    @pytest.mark.parametrize(
        "data",
        [{}, {"email": "bad"}, {"email": "a@example.com"}, {"email": "a@example.com", "phone": "1"}],
    )
    def test_errors_empty_iff_valid(self, engine, contact_schema, data):
        result = engine.validate(contact_schema, data)
        assert result.valid == (not result.errors)

    def test_idempotent(self, engine, contact_schema):
        data = {"email": "bad", "phone": "12345"}
        first = engine.validate(contact_schema, data)
        second = engine.validate(contact_schema, data)
        assert first == second

    def test_input_is_not_mutated(self, engine, contact_schema):
        data = {"email": "bad"}
        engine.validate(contact_schema, data)
        assert data == {"email": "bad"}

    def test_none_data_treated_as_empty(self, engine, contact_schema):
        result = engine.validate(contact_schema, None)
        assert result.errors == {"email": [REQUIRED_MESSAGE]}

    def test_unknown_rule_is_permissive(self, engine):
        schema = {"fields": [{"field_id": "x", "validation_rules": {"future_rule_v9": 3}}]}
        assert engine.validate(schema, {"x": "anything"}).valid

    def test_unknown_operator_validates_field(self, engine):
        schema = {
            "fields": [
                {
                    "field_id": "x",
                    "required": True,
                    "conditional_logic": {"field": "y", "operator": "fuzzy", "value": 1},
                }
            ]
        }
        assert engine.validate(schema, {}).errors == {"x": [REQUIRED_MESSAGE]}

    def test_empty_schema(self, engine):
        assert engine.validate({"fields": []}, {"stray": 1}).valid


class TestCrossFieldIntegration:
    def test_cross_field_runs_after_field_failures(self, engine):
        schema = {
            "fields": [
                {"field_id": "password", "required": True, "validation_rules": {"min_length": 8}},
                {"field_id": "confirm", "required": True},
            ],
            "cross_field_rules": [
                {"type": "matches", "fields": ["password", "confirm"], "message": "Passwords differ"}
            ],
        }
        result = engine.validate(schema, {"password": "short", "confirm": "other"})

        assert result.errors == {
            "password": ["Minimum length is 8 characters"],
            CROSS_FIELD_KEY: ["Passwords differ"],
        }

    def test_cross_field_sees_skipped_fields(self, engine):
        schema = {
            "fields": [
                {"field_id": "mode"},
                {
                    "field_id": "detail",
                    "conditional_logic": {"field": "mode", "operator": "equals", "value": "on"},
                },
            ],
            "cross_field_rules": [{"type": "at_least_one", "fields": ["detail"]}],
        }
        result = engine.validate(schema, {"mode": "off", "detail": "present"})
        assert result.valid


class TestReport:
    def test_field_states(self, engine, gated_schema):
        report = engine.validate_with_report(gated_schema, {"A": "no"})
        assert report.field_states == {"A": FieldState.PASSED, "B": FieldState.SKIPPED}
        assert report.skipped_fields == ["B"]
        assert report.cross_field_passed

    def test_failed_state(self, engine, gated_schema):
        report = engine.validate_with_report(gated_schema, {})
        assert report.field_states["A"] is FieldState.FAILED

    def test_accepts_form_schema(self, engine, gated_schema):
        schema = FormSchema.from_dict(gated_schema)
        assert engine.validate(schema, {"A": "no"}).valid


class TestExtension:
    def test_add_custom_validator(self, engine):
        engine.add_custom_validator(
            "even", lambda value, param, all_values: int(value) % 2 == 0, "Value must be even"
        )
        schema = {"fields": [{"field_id": "n", "validation_rules": {"even": True}}]}

        assert engine.validate(schema, {"n": "4"}).valid
        assert engine.validate(schema, {"n": "3"}).errors == {"n": ["Value must be even"]}

    def test_custom_message_uses_param(self, engine):
        engine.add_custom_validator(
            "divisible_by",
            lambda value, param, all_values: int(value) % int(param) == 0,
            "Value must be divisible by {param}",
        )
        schema = {"fields": [{"field_id": "n", "validation_rules": {"divisible_by": 7}}]}
        assert engine.validate(schema, {"n": 10}).errors == {"n": ["Value must be divisible by 7"]}

    def test_default_custom_message(self, engine):
        engine.add_custom_validator("nope", lambda value, param, all_values: False)
        schema = {"fields": [{"field_id": "n", "validation_rules": {"nope": True}}]}
        assert engine.validate(schema, {"n": "x"}).errors == {"n": ["Validation failed"]}

    def test_decorator(self, engine):
        @engine.rule("uppercase", "Must be upper case")
        def uppercase(value, param, all_values):
            return str(value).isupper()

        schema = {"fields": [{"field_id": "code", "validation_rules": ["uppercase"]}]}
        assert engine.validate(schema, {"code": "ABC"}).valid
        assert engine.validate(schema, {"code": "abc"}).errors == {"code": ["Must be upper case"]}
        assert uppercase("X", None, {})

    def test_custom_rule_can_override_builtin(self, engine):
        engine.add_custom_validator(
            "email", lambda value, param, all_values: str(value).endswith("@corp.com"), "Corporate email only"
        )
        schema = {"fields": [{"field_id": "e", "validation_rules": {"email": True}}]}
        assert engine.validate(schema, {"e": "a@gmail.com"}).errors == {"e": ["Corporate email only"]}

    def test_custom_validator_exception_reported(self, engine):
        engine.add_custom_validator("boom", lambda value, param, all_values: 1 / 0, "Never shown")
        schema = {"fields": [{"field_id": "n", "validation_rules": {"boom": True}}]}
        assert engine.validate(schema, {"n": "x"}).errors == {"n": ["Validation failed"]}

    def test_engines_do_not_share_rules(self, engine):
        engine.add_custom_validator("only_here", lambda value, param, all_values: False)
        other = ValidationEngine()
        schema = {"fields": [{"field_id": "n", "validation_rules": {"only_here": True}}]}

        assert not engine.validate(schema, {"n": "x"}).valid
        assert other.validate(schema, {"n": "x"}).valid


class TestStrictMode:
    def test_unknown_rule_fails_closed(self):
        engine = ValidationEngine(EngineConfig(strict=True))
        schema = {"fields": [{"field_id": "x", "validation_rules": {"future_rule_v9": 3}}]}

        result = engine.validate(schema, {"x": "anything"})
        assert result.errors == {"x": ["Unknown validation rule: future_rule_v9"]}


class TestSingleField:
    def test_validate_field(self, engine):
        errors = {}
        passed = engine.validate_field(
            {"field_id": "age", "field_type": "number", "validation_rules": {"min_value": 18}},
            "16",
            errors=errors,
        )
        assert not passed
        assert errors == {"age": ["Minimum value is 18"]}


class TestMalformedSchemas:
    def test_unhashable_condition_field_gates_open(self, engine):
        schema = {
            "fields": [
                {
                    "field_id": "b",
                    "required": True,
                    "conditional_logic": {"field": ["a"], "operator": "equals", "value": "x"},
                }
            ]
        }
        result = engine.validate(schema, {})
        assert result.errors == {"b": [REQUIRED_MESSAGE]}

    def test_malformed_cross_field_rule_does_not_abort(self, engine):
        schema = {
            "fields": [{"field_id": "b"}],
            "cross_field_rules": [{"type": "at_least_one", "fields": [["a"], "b"]}],
        }
        assert engine.validate(schema, {"b": "x"}).valid
