"""Date, time and timezone rules."""

from datetime import date, datetime, time, timezone
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser

# Date format tokens as written by schema authors (PHP style) → strptime
_FORMAT_TOKENS = {
    "d": "%d",
    "j": "%d",
    "m": "%m",
    "n": "%m",
    "Y": "%Y",
    "y": "%y",
    "H": "%H",
    "G": "%H",
    "h": "%I",
    "g": "%I",
    "i": "%M",
    "s": "%S",
    "A": "%p",
    "a": "%p",
    "M": "%b",
    "F": "%B",
    "D": "%a",
    "l": "%A",
}


def parse_date(value: Any) -> datetime | None:
    """Parse a submitted date or datetime.

    ISO 8601 is tried first; free-form input falls back to dateutil.
    Returns None when the value is not a date.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        return None


def to_strptime_format(param: str) -> str:
    """Translate a PHP-style date format; formats containing ``%`` pass through."""
    if "%" in param:
        return param

    result = []
    escaped = False
    for char in param:
        if escaped:
            result.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            result.append(_FORMAT_TOKENS.get(char, char))
    return "".join(result)


def _now_for(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        return datetime.now(timezone.utc)
    return datetime.now()


def validate_date(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    return parse_date(value) is not None


def validate_date_format(value: Any, param: Any, all_values: dict | None = None) -> bool:
    if not isinstance(param, str) or not param:
        return True
    if not isinstance(value, str):
        return False
    try:
        datetime.strptime(value, to_strptime_format(param))
    except ValueError:
        return False
    return True


def validate_future_date(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    moment = parse_date(value)
    return moment is not None and moment > _now_for(moment)


def validate_past_date(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    moment = parse_date(value)
    return moment is not None and moment < _now_for(moment)


def validate_timezone(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    """An IANA timezone name such as ``Europe/Paris`` or ``UTC``."""
    if not isinstance(value, str) or not value:
        return False
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True
