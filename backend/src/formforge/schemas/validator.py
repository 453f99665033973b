"""
schemas/validator.py: check form schema documents before they are used.

Two passes run over a parsed document:
1. Structural: JSON Schema (Draft 2020-12) against ``form.schema.json``
2. Semantic: duplicate field ids, dangling references, cross-field arity,
   and unknown rule names, operators and field types

Unknown names are warnings, not errors: the engine passes them at
validation time, so a document using them still works. ``strict=True``
escalates warnings to errors.

Usage:
    from formforge.schemas.validator import validate_schema_file

    issues = validate_schema_file(Path("forms/contact.yaml"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

from formforge.validation.field_types import is_known_field_type
from formforge.validation.registry import RuleRegistry
from formforge.validation.rules import register_builtin_rules
from formforge.validation.types import CrossFieldType, Operator

logger = logging.getLogger(__name__)

_SCHEMAS_DIR = Path(__file__).parent
FORM_SCHEMA_NAME = "form.schema.json"


@dataclass
class SchemaIssue:
    """A single finding for a form schema document."""

    source: str
    message: str
    path: str = ""           # location within the document, e.g. "fields[2]/conditional_logic"
    severity: str = "error"  # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.source}{loc}: {self.message}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_json_schema(name: str) -> dict[str, Any]:
    with (_SCHEMAS_DIR / name).open() as fh:
        return json.load(fh)


def _build_validator() -> Draft202012Validator:
    schema = _load_json_schema(FORM_SCHEMA_NAME)
    registry = Registry().with_resource(
        schema["$id"], Resource(contents=schema, specification=DRAFT202012)
    )
    return Draft202012Validator(schema, registry=registry)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _default_rule_registry() -> RuleRegistry:
    registry = RuleRegistry()
    register_builtin_rules(registry)
    return registry


def _semantic_issues(
    doc: dict[str, Any],
    source: str,
    rules: RuleRegistry,
) -> list[SchemaIssue]:
    issues: list[SchemaIssue] = []

    def warn(message: str, path: str) -> None:
        issues.append(SchemaIssue(source=source, message=message, path=path, severity="warning"))

    fields = [f for f in doc.get("fields") or [] if isinstance(f, dict)]
    field_ids = {str(f["field_id"]) for f in fields if f.get("field_id")}

    seen: set[str] = set()
    for index, field_doc in enumerate(fields):
        path = f"fields[{index}]"
        field_id = field_doc.get("field_id")
        if not field_id:
            continue
        field_id = str(field_id)

        if field_id in seen:
            issues.append(
                SchemaIssue(source=source, message=f"Duplicate field_id '{field_id}'", path=path)
            )
        seen.add(field_id)

        field_type = field_doc.get("field_type")
        if isinstance(field_type, str) and not is_known_field_type(field_type):
            warn(f"Unknown field_type '{field_type}'", f"{path}/field_type")

        declared = field_doc.get("validation_rules") or {}
        if not isinstance(declared, (dict, list)):
            declared = []
        for name in declared:
            if str(name) not in rules:
                warn(f"Unknown validation rule '{name}'", f"{path}/validation_rules")

        condition = field_doc.get("conditional_logic")
        if isinstance(condition, dict) and condition:
            target = condition.get("field")
            if target and target not in field_ids:
                warn(f"Condition references unknown field '{target}'", f"{path}/conditional_logic")
            if Operator.parse(condition.get("operator", "equals")) is None:
                warn(
                    f"Unknown condition operator '{condition.get('operator')}'",
                    f"{path}/conditional_logic",
                )

    for index, rule in enumerate(doc.get("cross_field_rules") or []):
        if not isinstance(rule, dict):
            continue
        path = f"cross_field_rules[{index}]"
        rule_fields = rule.get("fields") or []
        if isinstance(rule_fields, str):
            rule_fields = [rule_fields]

        try:
            rule_type = CrossFieldType(rule.get("type"))
        except ValueError:
            warn(f"Unknown cross-field rule type '{rule.get('type')}'", f"{path}/type")
            continue

        for name in rule_fields:
            if name not in field_ids:
                warn(f"Cross-field rule references unknown field '{name}'", f"{path}/fields")

        if rule_type is CrossFieldType.MATCHES and len(rule_fields) < 2:
            warn("'matches' needs at least two fields and always passes", f"{path}/fields")
        if rule_type is CrossFieldType.AT_LEAST_ONE and not rule_fields:
            issues.append(
                SchemaIssue(
                    source=source,
                    message="'at_least_one' without fields always fails",
                    path=f"{path}/fields",
                )
            )

    return issues


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_schema_document(
    doc: Any,
    source: str = "<dict>",
    *,
    strict: bool = False,
    rules: RuleRegistry | None = None,
) -> list[SchemaIssue]:
    """
    Validate an already-parsed schema document.

    Args:
        doc:    The parsed document.
        source: Name used in issues (usually the file path).
        strict: Escalate warnings to errors.
        rules:  Registry used to recognise rule names. Built-ins if omitted.

    Returns:
        A list of :class:`SchemaIssue` objects (empty on success).
    """
    if doc is None:
        return [SchemaIssue(source=source, message="Document is empty")]

    validator = _build_validator()
    issues = [
        SchemaIssue(source=source, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(doc), key=lambda e: list(e.path))
    ]

    if isinstance(doc, dict):
        issues.extend(_semantic_issues(doc, source, rules or _default_rule_registry()))

    if strict:
        for issue in issues:
            if issue.severity == "warning":
                issue.severity = "error"

    logger.debug("Checked schema %s: %d issue(s)", source, len(issues))
    return issues


def validate_schema_file(
    path: Path,
    *,
    strict: bool = False,
    rules: RuleRegistry | None = None,
) -> list[SchemaIssue]:
    """
    Validate a single YAML or JSON schema file.

    Unreadable or unparseable files are reported as issues, never raised.
    """
    try:
        with path.open() as fh:
            doc = yaml.safe_load(fh)
    except OSError as exc:
        return [SchemaIssue(source=str(path), message=f"Cannot read file: {exc}")]
    except yaml.YAMLError as exc:
        return [SchemaIssue(source=str(path), message=f"YAML parse error: {exc}")]

    return validate_schema_document(doc, str(path), strict=strict, rules=rules)


def has_errors(issues: list[SchemaIssue]) -> bool:
    return any(issue.severity == "error" for issue in issues)
