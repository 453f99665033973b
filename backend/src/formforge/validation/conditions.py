"""Conditional logic evaluation.

A field's ``conditional_logic`` decides whether the field is validated at
all. Evaluation is a pure function of the condition and the submitted values.

Conditions that cannot be evaluated (no ``field``, unknown operator) are
permissive: they evaluate to true so the field is still validated.
"""

import logging
from typing import Any, Callable

from formforge.validation.coercion import is_empty, is_numeric, to_number, to_text
from formforge.validation.types import Condition, Operator

logger = logging.getLogger(__name__)


def loose_equals(left: Any, right: Any) -> bool:
    """Equality that treats a numeric string and its number as equal.

    ``"5" == 5`` and ``"5.0" == 5`` hold; None equals the empty string;
    booleans compare by truthiness against strings and numbers.
    """
    if left is None or right is None:
        other = right if left is None else left
        return other is None or other == "" or other is False

    if isinstance(left, bool) or isinstance(right, bool):
        flag, other = (left, right) if isinstance(left, bool) else (right, left)
        if isinstance(other, str):
            return flag == (other not in ("", "0"))
        return flag == bool(other)

    if is_numeric(left) and is_numeric(right):
        return to_number(left) == to_number(right)

    if isinstance(left, (list, tuple, dict)) or isinstance(right, (list, tuple, dict)):
        return left == right

    return to_text(left) == to_text(right)


def _compare(left: Any, right: Any) -> tuple[Any, Any]:
    """Pick numeric comparison when both sides are numbers, else lexical."""
    if is_numeric(left) and is_numeric(right):
        return to_number(left), to_number(right)
    return to_text(left), to_text(right)


def _contains(haystack: Any, needle: Any) -> bool:
    """Substring test; multi-select values (lists) test membership instead."""
    if isinstance(haystack, (list, tuple, set)):
        return any(loose_equals(item, needle) for item in haystack)
    return to_text(needle) in to_text(haystack)


def _greater_than(left: Any, right: Any) -> bool:
    a, b = _compare(left, right)
    return a > b


def _less_than(left: Any, right: Any) -> bool:
    a, b = _compare(left, right)
    return a < b


OPERATOR_FUNCTIONS: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQUALS: loose_equals,
    Operator.NOT_EQUALS: lambda a, b: not loose_equals(a, b),
    Operator.CONTAINS: _contains,
    Operator.NOT_CONTAINS: lambda a, b: not _contains(a, b),
    Operator.STARTS_WITH: lambda a, b: to_text(a).startswith(to_text(b)),
    Operator.ENDS_WITH: lambda a, b: to_text(a).endswith(to_text(b)),
    Operator.GREATER_THAN: _greater_than,
    Operator.LESS_THAN: _less_than,
    Operator.IS_EMPTY: lambda a, b: is_empty(a),
    Operator.IS_NOT_EMPTY: lambda a, b: not is_empty(a),
}


def evaluate_condition(
    condition: Condition | dict[str, Any] | None,
    data: dict[str, Any],
    *,
    strict: bool = False,
) -> bool:
    """Evaluate a condition against submitted values.

    Args:
        condition: A Condition or its raw JSON mapping; None means "always"
        data: The submitted values, keyed by field_id
        strict: Treat an unevaluable condition as true (the field is validated)
            and log it at warning level instead of debug

    Returns:
        True if the gated field should be validated
    """
    if condition is None:
        return True
    if isinstance(condition, dict):
        if not condition:
            return True
        condition = Condition.from_dict(condition)

    if condition.is_permissive:
        log = logger.warning if strict else logger.debug
        log(
            "Condition on field %r with operator %r cannot be evaluated, defaulting to true",
            condition.field,
            condition.raw_operator,
        )
        return True

    operator_fn = OPERATOR_FUNCTIONS[condition.operator]
    actual = None
    try:
        actual = data.get(condition.field)
        return bool(operator_fn(actual, condition.value))
    except TypeError:
        logger.debug(
            "Condition on field %r could not compare %s with %s, defaulting to true",
            condition.field,
            type(actual).__name__,
            type(condition.value).__name__,
        )
        return True
