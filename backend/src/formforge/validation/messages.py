"""Failure message formatting.

Rule templates reference their parameter in one of three ways:
- ``{param}`` for a scalar parameter ("Minimum length is {param} characters")
- ``{key}`` for each key of a mapping parameter ("between {min} and {max}")
- ``{param1}``, ``{param2}``, ... for the items of a list parameter

Placeholders that have no matching value are left untouched.
"""

import re
from typing import Any

PLACEHOLDER = re.compile(r"\{(?P<name>\w+)\}")


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple, set)):
        return ", ".join(_stringify(v) for v in value)
    return str(value)


def placeholder_values(param: Any) -> dict[str, str]:
    """Build the placeholder → text mapping for a rule parameter."""
    values: dict[str, str] = {}
    if isinstance(param, dict):
        # Positional names follow the mapping's order so a two-bound
        # template reads the same for [1, 5] and {"min": 1, "max": 5}
        for index, item in enumerate(param.values(), start=1):
            values[f"param{index}"] = _stringify(item)
        values.update({str(key): _stringify(value) for key, value in param.items()})
        return values

    if isinstance(param, (list, tuple)):
        for index, item in enumerate(param, start=1):
            values[f"param{index}"] = _stringify(item)
        values["param"] = _stringify(param)
    elif param is not None:
        values["param"] = _stringify(param)
    return values


def format_message(template: str, param: Any) -> str:
    """Substitute a rule parameter into its message template."""
    values = placeholder_values(param)
    if not values:
        return template

    def replace(match: re.Match) -> str:
        return values.get(match.group("name"), match.group(0))

    return PLACEHOLDER.sub(replace, template)
