"""Submission utilities used around validation.

- completion_rate: how much of a form was filled in
- normalize_submission: coerce raw submitted values by field type
"""

from typing import Any

from formforge.validation.coercion import is_empty, is_numeric
from formforge.validation.types import FormSchema


def completion_rate(schema: FormSchema, data: dict[str, Any]) -> float:
    """Percentage of schema fields with a non-empty value, rounded to 2 places.

    A schema without fields has a completion rate of 0.0.
    """
    if not schema.fields:
        return 0.0

    completed = sum(1 for f in schema.fields if not is_empty(data.get(f.field_id)))
    return round(completed / len(schema.fields) * 100, 2)


def normalize_submission(schema: FormSchema, data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` restricted to schema fields, coerced by type.

    - ``number`` and ``range`` values that are numeric strings become floats
    - ``checkbox`` values become lists
    Values the schema does not declare are dropped.
    """
    normalized: dict[str, Any] = {}

    for field_schema in schema.fields:
        if field_schema.field_id not in data:
            continue
        value = data[field_schema.field_id]

        if field_schema.field_type in ("number", "range"):
            if isinstance(value, str) and is_numeric(value):
                value = float(value)
        elif field_schema.field_type == "checkbox":
            if value is None:
                value = []
            elif not isinstance(value, list):
                value = [value]

        normalized[field_schema.field_id] = value

    return normalized
