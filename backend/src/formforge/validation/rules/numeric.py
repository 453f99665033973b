"""Numeric and amount rules.

Bounds that cannot be read as numbers are treated as misconfiguration and
pass; submitted values that are not numeric fail.
"""

import re
from typing import Any

from formforge.validation.coercion import INTEGER_PATTERN, is_numeric, to_number

CURRENCY_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$")


def validate_numeric(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    return is_numeric(value)


def validate_integer(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return value.is_integer()
    if isinstance(value, str):
        return INTEGER_PATTERN.match(value) is not None
    return False


def validate_decimal(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    return is_numeric(value)


def validate_min_value(value: Any, param: Any, all_values: dict | None = None) -> bool:
    bound = to_number(param)
    if bound is None:
        return True
    number = to_number(value)
    return number is not None and number >= bound


def validate_max_value(value: Any, param: Any, all_values: dict | None = None) -> bool:
    bound = to_number(param)
    if bound is None:
        return True
    number = to_number(value)
    return number is not None and number <= bound


def range_bounds(param: Any) -> tuple[float, float] | None:
    """Read ``[low, high]`` or ``{"min": low, "max": high}`` into floats."""
    if isinstance(param, dict):
        low, high = param.get("min"), param.get("max")
    elif isinstance(param, (list, tuple)) and len(param) == 2:
        low, high = param
    else:
        return None

    low_number, high_number = to_number(low), to_number(high)
    if low_number is None or high_number is None:
        return None
    return low_number, high_number


def validate_range(value: Any, param: Any, all_values: dict | None = None) -> bool:
    bounds = range_bounds(param)
    if bounds is None:
        return False
    number = to_number(value)
    return number is not None and bounds[0] <= number <= bounds[1]


def validate_currency(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    """A non-negative amount with at most two decimal places."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return False
    text = value if isinstance(value, str) else repr(value)
    return CURRENCY_PATTERN.match(text) is not None


def validate_percentage(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    number = to_number(value)
    return number is not None and 0 <= number <= 100
