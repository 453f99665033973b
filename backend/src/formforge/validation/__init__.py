"""FormForge validation engine.

Validates form submissions against declarative schemas in four steps:
- Conditional gating: fields whose ``conditional_logic`` is false are skipped
- Field rules: required-ness plus ``validation_rules`` in authored order
- Field type checks: the intrinsic check for each ``field_type``
- Cross-field rules: matches, sum and at_least_one over the whole submission

Usage:
    from formforge.validation import ValidationEngine

    engine = ValidationEngine()
    result = engine.validate(schema, data)
    if not result.valid:
        print(result.errors)
"""

from formforge.validation.conditions import evaluate_condition
from formforge.validation.cross_field import CrossFieldValidator
from formforge.validation.engine import (
    FieldState,
    SubmissionReport,
    SubmissionValidator,
    ValidationEngine,
)
from formforge.validation.errors import (
    FormForgeError,
    SchemaLoadError,
    TemplateNotFoundError,
)
from formforge.validation.field_types import FIELD_TYPES, FieldType, is_known_field_type
from formforge.validation.field_validator import FieldValidator
from formforge.validation.registry import NOT_FOUND, RuleRegistry
from formforge.validation.rules import register_builtin_rules
from formforge.validation.submission import completion_rate, normalize_submission
from formforge.validation.types import (
    CROSS_FIELD_KEY,
    Condition,
    CrossFieldRule,
    CrossFieldType,
    FieldSchema,
    FormSchema,
    Operator,
    RuleDefinition,
    RuleValidator,
    ValidationResult,
)
from formforge.validation.uniqueness import ExistenceChecker, UniqueRule

__all__ = [
    # Types
    "CROSS_FIELD_KEY",
    "Condition",
    "CrossFieldRule",
    "CrossFieldType",
    "FieldSchema",
    "FormSchema",
    "Operator",
    "RuleDefinition",
    "RuleValidator",
    "ValidationResult",
    # Errors
    "FormForgeError",
    "SchemaLoadError",
    "TemplateNotFoundError",
    # Registry
    "NOT_FOUND",
    "RuleRegistry",
    "register_builtin_rules",
    # Field types
    "FIELD_TYPES",
    "FieldType",
    "is_known_field_type",
    # Validators
    "CrossFieldValidator",
    "FieldValidator",
    "evaluate_condition",
    # Engine
    "FieldState",
    "SubmissionReport",
    "SubmissionValidator",
    "ValidationEngine",
    # Uniqueness
    "ExistenceChecker",
    "UniqueRule",
    # Submission utilities
    "completion_rate",
    "normalize_submission",
]
