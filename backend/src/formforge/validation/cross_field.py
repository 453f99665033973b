"""Cross-field validation.

Schema-level invariants that span several fields:
- matches: every listed field holds the same value
- sum: listed fields add up to a target within a tolerance
- at_least_one: at least one listed field is filled in

All failures are reported under the ``"cross_field"`` key.
"""

import logging
from typing import Any, Callable

from formforge.validation.coercion import is_empty, to_number
from formforge.validation.field_validator import add_error
from formforge.validation.types import CROSS_FIELD_KEY, CrossFieldRule, CrossFieldType

logger = logging.getLogger(__name__)

_MISSING = object()


def fields_match(rule: CrossFieldRule, data: dict[str, Any]) -> bool:
    """Every listed field must hold an identical value.

    Equality is strict (``"1"`` does not match ``1``); a field that was not
    submitted only matches other fields that were not submitted either.
    Fewer than two fields pass vacuously.
    """
    if len(rule.fields) < 2:
        return True

    values = [data.get(field_id, _MISSING) for field_id in rule.fields]
    first = values[0]
    for other in values[1:]:
        if first is _MISSING or other is _MISSING:
            if first is not other:
                return False
            continue
        if type(first) is not type(other) or first != other:
            return False
    return True


def fields_sum(rule: CrossFieldRule, data: dict[str, Any]) -> bool:
    """The listed fields must sum to ``sum`` within ``tolerance``.

    Missing or non-numeric values count as 0.
    """
    target = to_number(rule.params.get("sum", 0)) or 0.0
    tolerance = abs(to_number(rule.params.get("tolerance", 0)) or 0.0)

    actual = 0.0
    for field_id in rule.fields:
        actual += to_number(data.get(field_id)) or 0.0

    return abs(actual - target) <= tolerance


def at_least_one(rule: CrossFieldRule, data: dict[str, Any]) -> bool:
    """At least one listed field must be non-empty; an empty list fails."""
    return any(not is_empty(data.get(field_id)) for field_id in rule.fields)


CROSS_FIELD_CHECKS: dict[CrossFieldType, Callable[[CrossFieldRule, dict[str, Any]], bool]] = {
    CrossFieldType.MATCHES: fields_match,
    CrossFieldType.SUM: fields_sum,
    CrossFieldType.AT_LEAST_ONE: at_least_one,
}


class CrossFieldValidator:
    """Runs every cross-field rule of a schema once over the whole submission."""

    def validate(
        self,
        rules: list[CrossFieldRule],
        data: dict[str, Any],
        errors: dict[str, list[str]],
    ) -> bool:
        """Check all rules, appending one message per failed rule.

        Returns:
            True if every rule passed
        """
        all_passed = True
        for rule in rules:
            if not self.check(rule, data):
                add_error(errors, CROSS_FIELD_KEY, rule.message)
                all_passed = False
        return all_passed

    def check(self, rule: CrossFieldRule, data: dict[str, Any]) -> bool:
        if rule.type is None:
            logger.debug("Unknown cross-field rule type '%s', skipping", rule.raw_type)
            return True
        try:
            return CROSS_FIELD_CHECKS[rule.type](rule, data)
        except Exception:
            # A raising check fails this rule only
            logger.exception("Cross-field rule '%s' on %r raised", rule.raw_type, rule.fields)
            return False
