"""Identifier rules: payment cards, bank codes, ISBNs and official documents.

Checksummed identifiers (payment cards, ISBNs) are verified arithmetically;
the rest are format checks.
"""

import re
from typing import Any

CARD_PATTERN = re.compile(r"^\d{13,19}$")
IBAN_PATTERN = re.compile(r"^[A-Z]{2}\d{2}[A-Z0-9]{11,30}$")
SWIFT_PATTERN = re.compile(r"^[A-Z]{6}[A-Z0-9]{2}([A-Z0-9]{3})?$")
TAX_ID_PATTERN = re.compile(r"^[A-Z0-9\-]{8,15}$", re.IGNORECASE)
ISBN_PATTERN = re.compile(r"^(\d{9}[\dX]|\d{13})$")
SSN_PATTERN = re.compile(r"^\d{3}-\d{2}-\d{4}$")
PASSPORT_PATTERN = re.compile(r"^[A-Z0-9]{6,9}$", re.IGNORECASE)
LICENSE_PLATE_PATTERN = re.compile(r"^[A-Z0-9\-\s]{1,10}$", re.IGNORECASE)


def _text(value: Any) -> str | None:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return None
    return str(value)


def luhn_valid(digits: str) -> bool:
    """Luhn (mod 10) checksum over a string of digits."""
    total = 0
    for index, char in enumerate(reversed(digits)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def isbn10_valid(isbn: str) -> bool:
    total = sum(int(isbn[i]) * (10 - i) for i in range(9))
    check = (11 - total % 11) % 11
    expected = "X" if check == 10 else str(check)
    return isbn[9] == expected


def isbn13_valid(isbn: str) -> bool:
    total = sum(int(isbn[i]) * (1 if i % 2 == 0 else 3) for i in range(12))
    check = (10 - total % 10) % 10
    return int(isbn[12]) == check


def validate_credit_card(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    text = _text(value)
    if text is None:
        return False
    digits = re.sub(r"[\s\-]", "", text)
    return CARD_PATTERN.match(digits) is not None and luhn_valid(digits)


def validate_iban(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    text = _text(value)
    if text is None:
        return False
    return IBAN_PATTERN.match(text.replace(" ", "").upper()) is not None


def validate_swift(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    text = _text(value)
    return text is not None and SWIFT_PATTERN.match(text.upper()) is not None


def validate_tax_id(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    text = _text(value)
    return text is not None and TAX_ID_PATTERN.match(text) is not None


def validate_isbn(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    """ISBN-10 or ISBN-13 with a valid check digit; hyphens and spaces are ignored."""
    text = _text(value)
    if text is None:
        return False
    isbn = re.sub(r"[-\s]", "", text).upper()
    if ISBN_PATTERN.match(isbn) is None:
        return False
    if len(isbn) == 10:
        return isbn10_valid(isbn)
    return isbn13_valid(isbn)


def validate_ssn(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    text = _text(value)
    return text is not None and SSN_PATTERN.match(text) is not None


def validate_passport(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    text = _text(value)
    return text is not None and PASSPORT_PATTERN.match(text) is not None


def validate_license_plate(value: Any, param: Any = None, all_values: dict | None = None) -> bool:
    text = _text(value)
    return text is not None and LICENSE_PLATE_PATTERN.match(text) is not None
