"""Built-in validation rules for FormForge.

This module registers the built-in catalogue with a RuleRegistry.
ValidationEngine calls register_builtin_rules() when it is constructed.

Categories:
- Text: required, email, url, lengths, regex, matches, unique, password_strength
- Numeric: numeric, integer, decimal, min/max value, range, currency, percentage
- Date: date, date_format, future_date, past_date, timezone
- Contact & location: phone, postal_code, coordinates
- Files: file_required, file_type, file_size, image_dimensions
- Identifiers: credit_card, iban, swift, tax_id, isbn, ssn, passport, license_plate
- Formats: json, xml, base64, hex_color, ip_address, mac_address
"""

from formforge.validation.registry import RuleRegistry
from formforge.validation.rules import dates, files, formats, identifiers, numeric, text
from formforge.validation.uniqueness import UniqueRule


def register_builtin_rules(registry: RuleRegistry, unique_rule: UniqueRule | None = None) -> None:
    """Register every built-in rule with the given registry.

    Args:
        registry: Registry to populate
        unique_rule: Validator for ``unique``; defaults to a pass-through
    """
    _register_text_rules(registry, unique_rule or UniqueRule())
    _register_numeric_rules(registry)
    _register_date_rules(registry)
    _register_contact_rules(registry)
    _register_file_rules(registry)
    _register_identifier_rules(registry)
    _register_format_rules(registry)
    registry.mark_builtins()


# -----------------------------------------------------------------------------
# Text Rules
# -----------------------------------------------------------------------------


def _register_text_rules(registry: RuleRegistry, unique_rule: UniqueRule) -> None:
    registry.register("required", "This field is required", text.validate_required)
    registry.register("email", "Please enter a valid email address", text.validate_email)
    registry.register("email_format", "Please enter a valid email address", text.validate_email)
    registry.register("url", "Please enter a valid URL", text.validate_url)
    registry.register(
        "min_length", "Minimum length is {param} characters", text.validate_min_length
    )
    registry.register(
        "max_length", "Maximum length is {param} characters", text.validate_max_length
    )
    registry.register(
        "exact_length", "Length must be exactly {param} characters", text.validate_exact_length
    )
    registry.register("regex", "Invalid format", text.validate_regex)
    registry.register("matches", "Fields do not match", text.validate_matches)
    registry.register("unique", "This value must be unique", unique_rule)
    registry.register(
        "password_strength",
        "Password does not meet strength requirements",
        text.validate_password_strength,
    )


# -----------------------------------------------------------------------------
# Numeric Rules
# -----------------------------------------------------------------------------


def _register_numeric_rules(registry: RuleRegistry) -> None:
    registry.register("numeric", "Please enter a valid number", numeric.validate_numeric)
    registry.register("integer", "Please enter a valid integer", numeric.validate_integer)
    registry.register("decimal", "Please enter a valid decimal number", numeric.validate_decimal)
    registry.register("min_value", "Minimum value is {param}", numeric.validate_min_value)
    registry.register("max_value", "Maximum value is {param}", numeric.validate_max_value)
    registry.register(
        "range", "Value must be between {param1} and {param2}", numeric.validate_range
    )
    registry.register(
        "currency", "Please enter a valid currency amount", numeric.validate_currency
    )
    registry.register(
        "percentage", "Please enter a valid percentage (0-100)", numeric.validate_percentage
    )


# -----------------------------------------------------------------------------
# Date Rules
# -----------------------------------------------------------------------------


def _register_date_rules(registry: RuleRegistry) -> None:
    registry.register("date", "Please enter a valid date", dates.validate_date)
    registry.register("date_format", "Date must be in format {param}", dates.validate_date_format)
    registry.register("future_date", "Date must be in the future", dates.validate_future_date)
    registry.register("past_date", "Date must be in the past", dates.validate_past_date)
    registry.register("timezone", "Please select a valid timezone", dates.validate_timezone)


# -----------------------------------------------------------------------------
# Contact & Location Rules
# -----------------------------------------------------------------------------


def _register_contact_rules(registry: RuleRegistry) -> None:
    registry.register("phone", "Please enter a valid phone number", text.validate_phone)
    registry.register(
        "postal_code", "Please enter a valid postal code", text.validate_postal_code
    )
    registry.register(
        "coordinates", "Please enter valid GPS coordinates", formats.validate_coordinates
    )


# -----------------------------------------------------------------------------
# File Rules
# -----------------------------------------------------------------------------


def _register_file_rules(registry: RuleRegistry) -> None:
    registry.register("file_required", "File is required", files.validate_file_required)
    registry.register(
        "file_type", "Invalid file type. Allowed types: {param}", files.validate_file_type
    )
    registry.register(
        "file_size", "File size must be less than {param}", files.validate_file_size
    )
    registry.register(
        "image_dimensions",
        "Image dimensions must be at least {param1}x{param2}",
        files.validate_image_dimensions,
    )


# -----------------------------------------------------------------------------
# Identifier Rules
# -----------------------------------------------------------------------------


def _register_identifier_rules(registry: RuleRegistry) -> None:
    registry.register(
        "credit_card", "Please enter a valid credit card number", identifiers.validate_credit_card
    )
    registry.register("iban", "Please enter a valid IBAN", identifiers.validate_iban)
    registry.register("swift", "Please enter a valid SWIFT code", identifiers.validate_swift)
    registry.register("tax_id", "Please enter a valid tax ID", identifiers.validate_tax_id)
    registry.register("isbn", "Please enter a valid ISBN", identifiers.validate_isbn)
    registry.register(
        "ssn", "Please enter a valid Social Security Number", identifiers.validate_ssn
    )
    registry.register(
        "passport", "Please enter a valid passport number", identifiers.validate_passport
    )
    registry.register(
        "license_plate",
        "Please enter a valid license plate number",
        identifiers.validate_license_plate,
    )


# -----------------------------------------------------------------------------
# Format Rules
# -----------------------------------------------------------------------------


def _register_format_rules(registry: RuleRegistry) -> None:
    registry.register("json", "Invalid JSON format", formats.validate_json)
    registry.register("xml", "Invalid XML format", formats.validate_xml)
    registry.register("base64", "Invalid base64 format", formats.validate_base64)
    registry.register("hex_color", "Please enter a valid hex color code", formats.validate_hex_color)
    registry.register("ip_address", "Please enter a valid IP address", formats.validate_ip_address)
    registry.register(
        "mac_address", "Please enter a valid MAC address", formats.validate_mac_address
    )
