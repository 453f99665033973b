"""Text, contact and cross-reference rules."""

import re
from typing import Any
from urllib.parse import urlsplit

from formforge.validation.coercion import is_empty, to_number

# Email: Basic RFC 5322 compliant pattern
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)*\.[a-zA-Z]{2,}$"
)

URL_SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*$")

POSTAL_CODE_PATTERN = re.compile(r"^[A-Z0-9\s\-]{3,10}$", re.IGNORECASE)

_REGEX_DELIMITERS = "/#~!@%|"

# Trailing flags of a delimited pattern such as /^abc$/i
_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def _length(value: Any) -> int:
    if isinstance(value, (list, tuple, set, dict)):
        return len(value)
    if isinstance(value, str):
        return len(value)
    return len(str(value))


def _limit(param: Any) -> int | None:
    number = to_number(param)
    if number is None:
        return None
    return int(number)


def validate_required(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    return not is_empty(value)


def validate_email(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.match(value) is not None


def validate_url(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    if not isinstance(value, str) or not value or any(c.isspace() for c in value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme and URL_SCHEME_PATTERN.match(parts.scheme) and parts.netloc)


def validate_min_length(value: Any, param: Any, all_values: dict | None = None) -> bool:
    limit = _limit(param)
    if limit is None:
        return True
    return _length(value) >= limit


def validate_max_length(value: Any, param: Any, all_values: dict | None = None) -> bool:
    limit = _limit(param)
    if limit is None:
        return True
    return _length(value) <= limit


def validate_exact_length(value: Any, param: Any, all_values: dict | None = None) -> bool:
    limit = _limit(param)
    if limit is None:
        return True
    return _length(value) == limit


def validate_phone(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    """Accept 10 to 15 digits once punctuation and spaces are removed."""
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        return False
    digits = re.sub(r"\D", "", str(value))
    return 10 <= len(digits) <= 15


def validate_postal_code(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        return False
    return POSTAL_CODE_PATTERN.match(str(value)) is not None


def compile_pattern(param: Any) -> re.Pattern | None:
    """Compile a bare or delimited (``/pattern/flags``) regex, or None if invalid."""
    if not isinstance(param, str) or not param:
        return None

    pattern = param
    flags = 0
    delimiter = param[0]
    if len(param) > 2 and delimiter in _REGEX_DELIMITERS:
        end = param.rfind(delimiter)
        trailing = param[end + 1:]
        if end > 0 and all(c in _REGEX_FLAGS for c in trailing):
            pattern = param[1:end]
            for flag in trailing:
                flags |= _REGEX_FLAGS[flag]

    try:
        return re.compile(pattern, flags)
    except re.error:
        return None


def validate_regex(value: Any, param: Any, all_values: dict | None = None) -> bool:
    compiled = compile_pattern(param)
    if compiled is None or isinstance(value, (dict, list)):
        return False
    return compiled.search(str(value)) is not None


def validate_matches(value: Any, param: Any, all_values: dict | None = None) -> bool:
    """The value must equal the value submitted for the field named by ``param``.

    Equality is strict: ``"1"`` does not match ``1``.
    """
    all_values = all_values or {}
    if not isinstance(param, str) or param not in all_values:
        return False
    other = all_values[param]
    return type(value) is type(other) and value == other


def validate_password_strength(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    """At least 8 characters with an upper-case letter, a lower-case letter and a digit.

    A mapping parameter may raise the minimum (``min_length``) or require a
    symbol (``special: true``).
    """
    if not isinstance(value, str):
        return False

    min_length = 8
    require_special = False
    if isinstance(param, dict):
        min_length = _limit(param.get("min_length")) or min_length
        require_special = bool(param.get("special", False))

    if len(value) < min_length:
        return False
    if not (re.search(r"[A-Z]", value) and re.search(r"[a-z]", value) and re.search(r"[0-9]", value)):
        return False
    if require_special and not re.search(r"[^A-Za-z0-9]", value):
        return False
    return True
