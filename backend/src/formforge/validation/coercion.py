"""Value helpers shared by rules, conditions and cross-field checks."""

import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

# Optional sign, digits with an optional fraction (or a bare fraction), and an
# optional exponent, surrounded by optional whitespace.
NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

INTEGER_PATTERN = re.compile(r"^\s*[+-]?(0|[1-9]\d*)\s*$")


def is_empty(value: Any) -> bool:
    """Return True for None, an empty string, or an empty collection.

    Whitespace-only strings and zero are not empty.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def is_numeric(value: Any) -> bool:
    """Return True if the value is a number or a numeric string."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, Decimal)):
        return True
    if isinstance(value, float):
        return value == value and value not in (float("inf"), float("-inf"))
    if isinstance(value, str):
        return NUMERIC_PATTERN.match(value) is not None
    return False


def to_number(value: Any) -> float | None:
    """Convert a number or numeric string to float, or None if it is not numeric."""
    if not is_numeric(value):
        return None
    return float(value)


def to_text(value: Any) -> str:
    """String form of a submitted value, with None as the empty string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def get_key(value: Any, key: str) -> Any:
    """Read a key from a mapping-shaped value, or None."""
    if isinstance(value, Mapping):
        return value.get(key)
    return None
