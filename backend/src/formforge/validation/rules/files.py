"""File upload rules.

Uploaded files arrive as descriptors, at minimum::

    {"name": "plan.pdf", "size": 20480, "mime_type": "application/pdf",
     "temp_storage_handle": "..."}

Image descriptors may also carry ``width`` and ``height``. The engine never
opens the stored file; every check reads the descriptor only.
"""

import re
from collections.abc import Mapping
from pathlib import PurePosixPath
from typing import Any

from formforge.validation.coercion import is_empty, to_number

SIZE_PATTERN = re.compile(r"^\s*(?P<amount>\d+(\.\d+)?)\s*(?P<unit>[KMGT]?B?)\s*$", re.IGNORECASE)

_SIZE_UNITS = {
    "": 1,
    "B": 1,
    "K": 1024,
    "KB": 1024,
    "M": 1024**2,
    "MB": 1024**2,
    "G": 1024**3,
    "GB": 1024**3,
    "T": 1024**4,
    "TB": 1024**4,
}

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "webp", "tif", "tiff", "svg"})


def parse_size(param: Any) -> float | None:
    """Read a size limit in bytes from ``20480`` or a string like ``"2MB"``."""
    number = to_number(param)
    if number is not None:
        return number
    if not isinstance(param, str):
        return None
    match = SIZE_PATTERN.match(param)
    if match is None:
        return None
    return float(match.group("amount")) * _SIZE_UNITS[match.group("unit").upper()]


def file_extension(descriptor: Any) -> str:
    if not isinstance(descriptor, Mapping):
        return ""
    name = descriptor.get("name") or ""
    return PurePosixPath(str(name)).suffix.lstrip(".").lower()


def type_allowed(descriptor: Mapping, allowed: Any) -> bool:
    """Match a descriptor against allowed extensions or MIME types.

    Entries containing ``/`` are MIME types (``image/*`` matches any image);
    anything else is an extension, with or without a leading dot.
    """
    if isinstance(allowed, str):
        allowed = [part.strip() for part in allowed.split(",")]
    extension = file_extension(descriptor)
    mime_type = str(descriptor.get("mime_type") or "").lower()

    for entry in allowed or []:
        entry = str(entry).strip().lower()
        if "/" in entry:
            if entry.endswith("/*") and mime_type.startswith(entry[:-1]):
                return True
            if mime_type == entry:
                return True
        elif entry.lstrip(".") == extension and extension:
            return True
    return False


def is_image(descriptor: Mapping) -> bool:
    mime_type = str(descriptor.get("mime_type") or "").lower()
    if mime_type:
        return mime_type.startswith("image/")
    return file_extension(descriptor) in IMAGE_EXTENSIONS


def dimension_bounds(param: Any) -> tuple[float, float]:
    if isinstance(param, Mapping):
        width, height = param.get("min_width", 0), param.get("min_height", 0)
    elif isinstance(param, (list, tuple)):
        width = param[0] if len(param) > 0 else 0
        height = param[1] if len(param) > 1 else 0
    else:
        width = height = 0
    return to_number(width) or 0, to_number(height) or 0


def meets_dimensions(descriptor: Mapping, min_width: float, min_height: float) -> bool:
    width = to_number(descriptor.get("width"))
    height = to_number(descriptor.get("height"))
    if width is None or height is None:
        return False
    return width >= min_width and height >= min_height


def validate_file_required(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    return not is_empty(value)


def validate_file_type(value: Any, param: Any, all_values: dict | None = None) -> bool:
    if not isinstance(value, Mapping):
        return False
    return type_allowed(value, param)


def validate_file_size(value: Any, param: Any, all_values: dict | None = None) -> bool:
    if not isinstance(value, Mapping) or value.get("size") is None:
        return False
    limit = parse_size(param)
    size = to_number(value.get("size"))
    if limit is None:
        return True
    return size is not None and size <= limit


def validate_image_dimensions(value: Any, param: Any, all_values: dict | None = None) -> bool:
    if not isinstance(value, Mapping):
        return False
    min_width, min_height = dimension_bounds(param)
    return meets_dimensions(value, min_width, min_height)
