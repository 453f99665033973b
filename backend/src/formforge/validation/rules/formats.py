"""Structured-format and network rules: JSON, XML, base64, colors, addresses, coordinates."""

import base64
import binascii
import ipaddress
import json
import re
import xml.etree.ElementTree as ElementTree
from collections.abc import Mapping
from typing import Any

from formforge.validation.coercion import to_number

HEX_COLOR_PATTERN = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
MAC_ADDRESS_PATTERN = re.compile(r"^([0-9A-Fa-f]{2}[:-]){5}([0-9A-Fa-f]{2})$")


def validate_json(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    """A JSON document; already-decoded mappings and lists are accepted as-is."""
    if isinstance(value, (dict, list)):
        return True
    if not isinstance(value, str):
        return False
    try:
        json.loads(value)
    except ValueError:
        return False
    return True


def validate_xml(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        ElementTree.fromstring(value)
    except ElementTree.ParseError:
        return False
    return True


def validate_base64(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    if not isinstance(value, str):
        return False
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def validate_hex_color(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    return isinstance(value, str) and HEX_COLOR_PATTERN.match(value) is not None


def validate_ip_address(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    """An IPv4 or IPv6 address; a parameter of ``4`` or ``6`` restricts the version."""
    if not isinstance(value, str):
        return False
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return False
    version = to_number(param)
    if version in (4, 6):
        return address.version == version
    return True


def validate_mac_address(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    return isinstance(value, str) and MAC_ADDRESS_PATTERN.match(value) is not None


def coordinate_pair(value: Any) -> tuple[float, float] | None:
    """Read ``{"lat": .., "lng": ..}`` or a two-item sequence into floats."""
    if isinstance(value, Mapping):
        if "lat" not in value or "lng" not in value:
            return None
        lat, lng = value["lat"], value["lng"]
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        lat, lng = value
    else:
        return None

    lat_number, lng_number = to_number(lat), to_number(lng)
    if lat_number is None or lng_number is None:
        return None
    return lat_number, lng_number


def validate_coordinates(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    pair = coordinate_pair(value)
    if pair is None:
        return False
    lat, lng = pair
    return -90 <= lat <= 90 and -180 <= lng <= 180
