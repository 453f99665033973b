"""Validation engine and submission orchestration.

This module provides:
1. SubmissionValidator: walks a schema's fields, gates each with its
   conditional logic, validates the active ones, then runs the cross-field
   rules once
2. ValidationEngine: owns the rule registry and the extension API

Each field moves through a small state machine::

    NOT_EVALUATED -> SKIPPED             (condition false)
    NOT_EVALUATED -> EVALUATED           (condition true)
    EVALUATED     -> PASSED | FAILED

Cross-field rules run after every field reaches SKIPPED, PASSED or FAILED.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from formforge.config import EngineConfig
from formforge.validation.conditions import evaluate_condition
from formforge.validation.cross_field import CrossFieldValidator
from formforge.validation.field_validator import GENERIC_RULE_MESSAGE, FieldValidator
from formforge.validation.registry import RuleRegistry
from formforge.validation.rules import register_builtin_rules
from formforge.validation.types import FieldSchema, FormSchema, RuleValidator, ValidationResult
from formforge.validation.uniqueness import ExistenceChecker, UniqueRule

logger = logging.getLogger(__name__)


class FieldState(Enum):
    """Where a field ended up during submission validation."""

    NOT_EVALUATED = "not_evaluated"
    SKIPPED = "skipped"
    EVALUATED = "evaluated"
    PASSED = "passed"
    FAILED = "failed"


@dataclass
class SubmissionReport:
    """Full outcome of validating a submission.

    Attributes:
        result: The public ValidationResult
        field_states: Final state of each schema field, in schema order
        cross_field_passed: False if any cross-field rule failed
    """

    result: ValidationResult
    field_states: dict[str, FieldState] = field(default_factory=dict)
    cross_field_passed: bool = True

    @property
    def skipped_fields(self) -> list[str]:
        return [f for f, state in self.field_states.items() if state is FieldState.SKIPPED]


class SubmissionValidator:
    """Orchestrates validation of one submission against one schema."""

    def __init__(
        self,
        field_validator: FieldValidator,
        cross_field_validator: CrossFieldValidator | None = None,
        strict: bool = False,
    ):
        self.field_validator = field_validator
        self.cross_field_validator = cross_field_validator or CrossFieldValidator()
        self.strict = strict

    def run(self, schema: FormSchema, data: Mapping[str, Any]) -> SubmissionReport:
        """Validate ``data`` against ``schema``.

        Never raises for invalid data or unknown configuration; every
        problem is reported in the result.
        """
        values = dict(data)
        errors: dict[str, list[str]] = {}
        states = {f.field_id: FieldState.NOT_EVALUATED for f in schema.fields}

        for field_schema in schema.fields:
            if not evaluate_condition(field_schema.conditional_logic, values, strict=self.strict):
                states[field_schema.field_id] = FieldState.SKIPPED
                continue

            states[field_schema.field_id] = FieldState.EVALUATED
            passed = self.field_validator.validate_field(
                field_schema,
                values.get(field_schema.field_id),
                values,
                errors,
            )
            states[field_schema.field_id] = FieldState.PASSED if passed else FieldState.FAILED

        cross_field_passed = self.cross_field_validator.validate(
            schema.cross_field_rules, values, errors
        )

        return SubmissionReport(
            result=ValidationResult(valid=not errors, errors=errors),
            field_states=states,
            cross_field_passed=cross_field_passed,
        )


class ValidationEngine:
    """Validation context owning a rule registry.

    Construct one engine at start-up, register custom rules, then share it
    across requests. Registration after traffic starts is safe: the
    registry publishes a new rule table on every write.

    Example:
        engine = ValidationEngine()
        engine.add_custom_validator(
            "nz_ird",
            lambda value, param, all_values: len(str(value)) in (8, 9),
            "Please enter a valid IRD number",
        )
        result = engine.validate(schema, {"ird": "49091850"})
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        existence_checker: ExistenceChecker | None = None,
    ):
        self.config = config or EngineConfig()
        self.registry = RuleRegistry()
        self.unique_rule = UniqueRule(existence_checker, timeout=self.config.unique_timeout)
        register_builtin_rules(self.registry, self.unique_rule)

        self.field_validator = FieldValidator(self.registry, strict=self.config.strict)
        self.submission_validator = SubmissionValidator(
            self.field_validator,
            CrossFieldValidator(),
            strict=self.config.strict,
        )

    # -------------------------------------------------------------------------
    # Extension API
    # -------------------------------------------------------------------------

    def add_custom_validator(
        self,
        name: str,
        validator: RuleValidator | Callable[..., Any],
        message_template: str = "",
    ) -> None:
        """Register a custom rule, replacing any rule with the same name.

        Args:
            name: Rule name referenced from ``validation_rules``
            validator: Callable ``(value, param, all_values) -> bool``
            message_template: Failure message; defaults to "Validation failed"
        """
        self.registry.register(name, message_template or GENERIC_RULE_MESSAGE, validator)
        logger.debug("Registered custom validation rule '%s'", name)

    def rule(self, name: str, message_template: str = "") -> Callable[[Callable], Callable]:
        """Decorator form of add_custom_validator.

        Usage:
            @engine.rule("even", "Value must be even")
            def even(value, param, all_values):
                return int(value) % 2 == 0
        """

        def decorator(fn: Callable) -> Callable:
            self.add_custom_validator(name, fn, message_template)
            return fn

        return decorator

    def set_existence_checker(self, checker: ExistenceChecker | None) -> None:
        """Attach the collaborator used by the ``unique`` rule."""
        self.unique_rule.checker = checker

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(
        self,
        schema: FormSchema | dict[str, Any],
        data: Mapping[str, Any] | None,
    ) -> ValidationResult:
        """Validate a submission and return its ValidationResult."""
        return self.validate_with_report(schema, data).result

    def validate_with_report(
        self,
        schema: FormSchema | dict[str, Any],
        data: Mapping[str, Any] | None,
    ) -> SubmissionReport:
        """Validate a submission and return per-field states as well."""
        if isinstance(schema, dict):
            schema = FormSchema.from_dict(schema)
        return self.submission_validator.run(schema, data or {})

    def validate_field(
        self,
        schema: FieldSchema | dict[str, Any],
        value: Any,
        all_values: Mapping[str, Any] | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> bool:
        """Validate a single field outside a full submission.

        Messages are appended to ``errors`` when one is given.
        """
        if isinstance(schema, dict):
            schema = FieldSchema.from_dict(schema)
        return self.field_validator.validate_field(
            schema,
            value,
            dict(all_values or {}),
            errors if errors is not None else {},
        )

    def close(self) -> None:
        """Release the uniqueness worker threads."""
        self.unique_rule.shutdown()
