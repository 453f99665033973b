"""Per-field validation.

A field is checked in a fixed order and only its first violation is
reported:
1. Required check
2. Declared ``validation_rules`` in authored order
3. The type-intrinsic check for its ``field_type``
"""

import logging
from dataclasses import dataclass
from typing import Any

from formforge.validation.coercion import is_empty
from formforge.validation.field_types import check_field_type
from formforge.validation.messages import format_message
from formforge.validation.registry import NOT_FOUND, RuleRegistry
from formforge.validation.types import FieldSchema

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = "This field is required"
GENERIC_RULE_MESSAGE = "Validation failed"
UNKNOWN_RULE_MESSAGE = "Unknown validation rule: {rule}"


def type_mismatch_message(field_type: str) -> str:
    return f"Invalid value for field type '{field_type}'"


def add_error(errors: dict[str, list[str]], key: str, message: str) -> None:
    errors.setdefault(key, []).append(message)


@dataclass
class FieldValidator:
    """Validates a single field's value against its schema.

    Attributes:
        registry: Rules available to ``validation_rules``
        strict: Report unknown rule names instead of skipping them
    """

    registry: RuleRegistry
    strict: bool = False

    def validate_field(
        self,
        schema: FieldSchema,
        value: Any,
        all_values: dict[str, Any],
        errors: dict[str, list[str]],
    ) -> bool:
        """Validate one field, appending at most one message to ``errors``.

        Returns:
            True if the field passed
        """
        message = self.first_violation(schema, value, all_values)
        if message is None:
            return True
        add_error(errors, schema.field_id, message)
        return False

    def first_violation(
        self,
        schema: FieldSchema,
        value: Any,
        all_values: dict[str, Any],
    ) -> str | None:
        """Return the message for the first failed check, or None if all pass."""
        # Required check
        if schema.required and is_empty(value):
            return REQUIRED_MESSAGE

        # Optional and empty: nothing else applies
        if is_empty(value):
            return None

        for rule_name, param in schema.validation_rules.items():
            message = self._check_rule(schema, rule_name, value, param, all_values)
            if message is not None:
                return message

        try:
            type_ok = check_field_type(schema.field_type, value, schema)
        except Exception:
            logger.exception(
                "Type check for field '%s' (%s) raised", schema.field_id, schema.field_type
            )
            return GENERIC_RULE_MESSAGE
        if not type_ok:
            return type_mismatch_message(schema.field_type)

        return None

    def _check_rule(
        self,
        schema: FieldSchema,
        rule_name: str,
        value: Any,
        param: Any,
        all_values: dict[str, Any],
    ) -> str | None:
        definition = self.registry.lookup(rule_name)
        if definition is NOT_FOUND:
            if self.strict:
                return UNKNOWN_RULE_MESSAGE.format(rule=rule_name)
            logger.debug(
                "Unknown validation rule '%s' on field '%s', skipping",
                rule_name,
                schema.field_id,
            )
            return None

        try:
            passed = definition.validator(value, param, all_values)
        except Exception:
            # A raising validator fails this field only
            logger.exception(
                "Validation rule '%s' raised on field '%s'", rule_name, schema.field_id
            )
            return GENERIC_RULE_MESSAGE

        if passed:
            return None
        return format_message(definition.message_template, param)
