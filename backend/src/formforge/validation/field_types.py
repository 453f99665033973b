"""Field type registry with type-intrinsic checks.

Every ``field_type`` tag a schema may use is listed here with its category.
Some types carry a semantic check that runs after the declared rules pass,
independently of which rules the author declared.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from formforge.validation.coercion import to_number
from formforge.validation.rules import dates, files, formats, numeric, text
from formforge.validation.types import FieldSchema

TypeCheck = Callable[[Any, FieldSchema], bool]


@dataclass
class FieldType:
    name: str
    category: str
    label: str
    supports: list[str] = field(default_factory=list)


def _check_file_upload(value: Any, schema: FieldSchema) -> bool:
    """Files must be descriptors matching ``accepted_types`` and ``max_size``."""
    descriptors = value if isinstance(value, list) else [value]
    options = schema.field_options

    max_files = to_number(options.get("max_files"))
    if max_files is not None and len(descriptors) > max_files:
        return False

    for descriptor in descriptors:
        if not isinstance(descriptor, Mapping):
            return False
        if "accepted_types" in options and not files.type_allowed(
            descriptor, options["accepted_types"]
        ):
            return False
        if "max_size" in options:
            limit = files.parse_size(options["max_size"])
            size = to_number(descriptor.get("size")) or 0
            if limit is not None and size > limit:
                return False
    return True


def _check_image(value: Any, schema: FieldSchema) -> bool:
    if not isinstance(value, Mapping) or not files.is_image(value):
        return False
    options = schema.field_options
    if "min_width" in options or "min_height" in options:
        min_width = to_number(options.get("min_width")) or 0
        min_height = to_number(options.get("min_height")) or 0
        return files.meets_dimensions(value, min_width, min_height)
    return True


def _plain(check: Callable[..., bool]) -> TypeCheck:
    return lambda value, schema: check(value)


TYPE_CHECKS: dict[str, TypeCheck] = {
    "email": _plain(text.validate_email),
    "url": _plain(text.validate_url),
    "number": _plain(numeric.validate_numeric),
    "range": _plain(numeric.validate_numeric),
    "date": _plain(dates.validate_date),
    "phone": _plain(text.validate_phone),
    "file_upload": _check_file_upload,
    "file_upload_preview": _check_file_upload,
    "image": _check_image,
    "coordinates": _plain(formats.validate_coordinates),
    "gps_coordinates": _plain(formats.validate_coordinates),
    "json": _plain(formats.validate_json),
    "xml": _plain(formats.validate_xml),
}


def check_field_type(field_type: str, value: Any, schema: FieldSchema) -> bool:
    """Run the type-intrinsic check for ``field_type``; types without one pass."""
    check = TYPE_CHECKS.get(field_type)
    if check is None:
        return True
    return check(value, schema)


def _types(category: str, entries: dict[str, tuple[str, list[str]]]) -> dict[str, FieldType]:
    return {
        name: FieldType(name=name, category=category, label=label, supports=supports)
        for name, (label, supports) in entries.items()
    }


# Built-in field types
FIELD_TYPES: dict[str, FieldType] = {
    **_types("basic", {
        "text": ("Text", ["validation"]),
        "textarea": ("Text Area", ["validation"]),
        "email": ("Email", ["validation"]),
        "url": ("URL", ["validation"]),
        "number": ("Number", ["validation", "min_max"]),
        "range": ("Range Slider", ["validation", "min_max"]),
        "phone": ("Phone", ["validation", "masking"]),
        "select": ("Select", ["options"]),
        "radio": ("Radio Buttons", ["options"]),
        "checkbox": ("Checkbox", ["options", "multiple"]),
        "hidden": ("Hidden", []),
        "rich_text": ("Rich Text Editor", ["formatting", "links", "images", "validation"]),
        "masked_input": ("Masked Input", ["masking", "validation", "formatting"]),
        "autocomplete": ("Auto-complete", ["api_integration", "caching", "validation"]),
        "password_strength": ("Password Strength", ["strength_indicator", "requirements", "validation"]),
        "json": ("JSON", ["validation"]),
        "xml": ("XML", ["validation"]),
    }),
    **_types("datetime", {
        "date": ("Date", ["validation", "formatting"]),
        "datetime": ("Date & Time", ["validation", "formatting"]),
        "date_range": ("Date Range Picker", ["range_selection", "validation", "formatting"]),
        "time_zone": ("Time Zone Selector", ["timezone_conversion", "auto_detection"]),
        "duration": ("Duration Picker", ["time_calculation", "formatting", "validation"]),
        "recurring_date": ("Recurring Date", ["recurrence_patterns", "calendar_integration"]),
    }),
    **_types("location", {
        "address_autocomplete": ("Address Autocomplete", ["geocoding", "validation"]),
        "coordinates": ("Coordinates", ["validation"]),
        "gps_coordinates": ("GPS Coordinates", ["geolocation", "map_integration", "validation"]),
        "map_selection": ("Map Selection", ["interactive_map", "area_selection", "geofencing"]),
        "geofence": ("Geofence Selector", ["polygon_drawing", "area_calculation", "validation"]),
    }),
    **_types("data", {
        "matrix_rating": ("Matrix/Rating Grid", ["multi_row", "multi_column", "validation"]),
        "dynamic_table": ("Dynamic Table", ["add_remove_rows", "validation", "export"]),
        "file_upload": ("File Upload", ["validation", "multiple_files"]),
        "file_upload_preview": ("File Upload with Preview", ["preview", "validation", "multiple_files"]),
        "image": ("Image Upload", ["preview", "validation", "dimensions"]),
        "bulk_import": ("Bulk Data Import", ["csv_import", "excel_import", "validation"]),
    }),
    **_types("relationship", {
        "entity_lookup": ("Entity Lookup", ["api_search", "linking", "validation"]),
        "dependent_dropdown": ("Dependent Dropdown", ["cascading", "validation"]),
        "multi_select_search": ("Multi-select with Search", ["search_filter", "tagging", "validation"]),
        "reference_field": ("Reference Field", ["external_data", "linking", "validation"]),
    }),
    **_types("smart", {
        "ai_autofill": ("AI-Powered Autofill", ["ai_suggestions", "validation"]),
        "ocr_extraction": ("OCR Text Extraction", ["text_extraction", "validation"]),
        "voice_input": ("Voice-to-Text", ["speech_recognition", "validation"]),
        "barcode_scanner": ("Barcode/QR Scanner", ["camera_access", "validation"]),
    }),
    **_types("security", {
        "captcha": ("CAPTCHA Integration", ["multiple_providers", "validation"]),
        "document_verification": ("Document Verification", ["ocr", "validation"]),
        "signature_capture": ("Signature Capture", ["digital_signature", "validation"]),
        "biometric_auth": ("Biometric Authentication", ["fingerprint", "validation"]),
    }),
    **_types("calculation", {
        "formula_field": ("Formula Field", ["mathematical", "conditional", "validation"]),
        "conditional_calculation": ("Conditional Calculation", ["if_then_else", "complex_logic"]),
        "currency_converter": ("Currency Converter", ["multiple_currencies", "validation"]),
        "unit_converter": ("Unit Converter", ["length", "weight", "temperature"]),
    }),
    **_types("presentation", {
        "progress_indicator": ("Progress Indicator", ["multi_step", "navigation"]),
        "collapsible_section": ("Collapsible Section", ["expand_collapse", "conditional_display"]),
        "tabbed_interface": ("Tabbed Interface", ["tab_navigation", "conditional_tabs"]),
        "wizard_interface": ("Wizard Interface", ["step_by_step", "progress_tracking"]),
    }),
}


def is_known_field_type(field_type: str) -> bool:
    return field_type in FIELD_TYPES
