"""Core types for the FormForge validation engine.

This module defines the shapes that flow through the engine:
- FieldSchema / FormSchema: the externally-authored form definition
- Condition / Operator: conditional activation of a field
- CrossFieldRule: invariants spanning several fields
- RuleDefinition / RuleValidator: the pluggable rule contract
- ValidationResult: the aggregated outcome of a submission

The JSON key names used by ``from_dict`` (``field_id``, ``field_type``,
``required``, ``validation_rules``, ``field_options``, ``conditional_logic``,
``cross_field_rules``) are a stable contract with schema authors.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

CROSS_FIELD_KEY = "cross_field"


class Operator(Enum):
    """Comparison operators understood by conditional logic.

    Several spellings map to the same operator (``equals`` and ``==``).
    """

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"

    @classmethod
    def parse(cls, raw: Any) -> "Operator | None":
        """Resolve an operator spelling, or None if it is not recognized."""
        if isinstance(raw, Operator):
            return raw
        if not isinstance(raw, str):
            return None
        alias = _OPERATOR_ALIASES.get(raw)
        if alias is not None:
            return alias
        try:
            return cls(raw)
        except ValueError:
            return None


_OPERATOR_ALIASES: dict[str, Operator] = {
    "==": Operator.EQUALS,
    "!=": Operator.NOT_EQUALS,
}


@dataclass(frozen=True)
class Condition:
    """A single predicate gating whether a field is validated.

    Attributes:
        field: field_id of the submitted value to test (None if missing)
        operator: Parsed operator, or None when the spelling is unknown
        value: Literal to compare against
        raw_operator: The operator exactly as authored, kept for diagnostics
    """

    field: str | None
    operator: Operator | None
    value: Any = ""
    raw_operator: str | None = None

    @property
    def is_permissive(self) -> bool:
        """True when the condition cannot be evaluated and defaults to true."""
        return not self.field or self.operator is None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Condition":
        """Create a Condition from its JSON shape.

        A missing operator defaults to ``equals``; a missing value to ``""``.
        A ``field`` that is not a string leaves the condition permissive.
        """
        raw_field = data.get("field")
        raw_operator = data.get("operator", "equals")
        return cls(
            field=raw_field if isinstance(raw_field, str) and raw_field else None,
            operator=Operator.parse(raw_operator),
            value=data.get("value", ""),
            raw_operator=raw_operator if isinstance(raw_operator, str) else None,
        )


class CrossFieldType(Enum):
    """Kinds of schema-level invariants."""

    MATCHES = "matches"
    SUM = "sum"
    AT_LEAST_ONE = "at_least_one"


@dataclass
class CrossFieldRule:
    """An invariant spanning several fields.

    Attributes:
        type: The rule kind, or None when the authored type is unknown
        fields: field_ids the rule applies to
        params: Extra parameters (``message``, ``sum``, ``tolerance``)
        raw_type: The type exactly as authored
    """

    type: CrossFieldType | None
    fields: list[str] = field(default_factory=list)
    params: dict[str, Any] = field(default_factory=dict)
    raw_type: str = ""

    @property
    def message(self) -> str:
        return self.params.get("message") or "Cross-field validation failed"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CrossFieldRule":
        """Create a CrossFieldRule from its JSON shape.

        Parameters may be nested under ``params`` or given inline next to
        ``type`` and ``fields``; inline keys win.
        """
        raw_type = str(data.get("type", ""))
        try:
            rule_type: CrossFieldType | None = CrossFieldType(raw_type)
        except ValueError:
            rule_type = None

        fields = data.get("fields", [])
        if not isinstance(fields, (list, tuple)):
            fields = [fields]
        # Only scalar entries name a field
        field_ids = [
            str(field_id)
            for field_id in fields
            if isinstance(field_id, (str, int, float)) and not isinstance(field_id, bool)
        ]

        params = dict(data.get("params") or {})
        for key, value in data.items():
            if key not in ("type", "fields", "params"):
                params[key] = value

        return cls(type=rule_type, fields=field_ids, params=params, raw_type=raw_type)


@dataclass
class FieldSchema:
    """Declarative description of one form input.

    ``validation_rules`` keeps the authored order; rules run in that order.
    """

    field_id: str
    field_type: str = "text"
    required: bool = False
    validation_rules: dict[str, Any] = field(default_factory=dict)
    conditional_logic: Condition | None = None
    field_options: dict[str, Any] = field(default_factory=dict)
    label: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FieldSchema":
        condition = data.get("conditional_logic")
        rules = data.get("validation_rules") or {}
        if isinstance(rules, str):
            rules = [rules]
        if isinstance(rules, list):
            # Bare rule names in a list take ``True`` as their parameter
            rules = {str(name): True for name in rules}
        elif not isinstance(rules, dict):
            rules = {}

        return cls(
            field_id=str(data["field_id"]),
            field_type=str(data.get("field_type") or "text"),
            required=bool(data.get("required", False)),
            validation_rules=dict(rules),
            conditional_logic=Condition.from_dict(condition)
            if isinstance(condition, dict) and condition
            else None,
            field_options=dict(data.get("field_options") or {}),
            label=data.get("label"),
        )


@dataclass
class FormSchema:
    """An ordered list of fields plus the cross-field invariants."""

    fields: list[FieldSchema] = field(default_factory=list)
    cross_field_rules: list[CrossFieldRule] = field(default_factory=list)
    title: str | None = None

    def get_field(self, field_id: str) -> FieldSchema | None:
        for schema_field in self.fields:
            if schema_field.field_id == field_id:
                return schema_field
        return None

    @property
    def field_ids(self) -> list[str]:
        return [f.field_id for f in self.fields]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormSchema":
        return cls(
            fields=[FieldSchema.from_dict(f) for f in data.get("fields") or []],
            cross_field_rules=[
                CrossFieldRule.from_dict(r) for r in data.get("cross_field_rules") or []
            ],
            title=data.get("title"),
        )


class RuleValidator(Protocol):
    """Protocol every rule implementation satisfies.

    Validators are pure: they return False for invalid values and never
    perform I/O (the ``unique`` rule delegates to a bounded collaborator).
    """

    def __call__(self, value: Any, param: Any, all_values: dict[str, Any]) -> bool:
        ...


@dataclass(frozen=True)
class RuleDefinition:
    """A named rule: the message shown on failure and its predicate."""

    message_template: str
    validator: RuleValidator


@dataclass
class ValidationResult:
    """Result of validating a submission.

    Attributes:
        valid: True iff ``errors`` is empty
        errors: Messages keyed by field_id, or ``"cross_field"``
    """

    valid: bool
    errors: dict[str, list[str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": {key: list(messages) for key, messages in self.errors.items()},
        }
