"""Tests for the built-in rule implementations."""

import pytest

from formforge.validation.rules import dates, files, formats, identifiers, numeric, text


class TestTextRules:
    @pytest.mark.parametrize("value", ["user@example.com", "first.last+tag@mail.co.uk"])
    def test_email_valid(self, value):
        assert text.validate_email(value)

    @pytest.mark.parametrize("value", ["bad", "a@b", "@example.com", "user@", 42])
    def test_email_invalid(self, value):
        assert not text.validate_email(value)

    def test_url(self):
        assert text.validate_url("https://example.com/path?q=1")
        assert not text.validate_url("example.com")
        assert not text.validate_url("http://")
        assert not text.validate_url("https://exa mple.com")

    def test_min_length(self):
        assert text.validate_min_length("abcde", 5)
        assert not text.validate_min_length("abc", 5)

    def test_max_length(self):
        assert text.validate_max_length("abc", "3")
        assert not text.validate_max_length("abcd", 3)

    def test_exact_length(self):
        assert text.validate_exact_length("12345", 5)
        assert not text.validate_exact_length("1234", 5)

    def test_length_rules_pass_on_unusable_param(self):
        assert text.validate_min_length("a", "lots")
        assert text.validate_max_length("a" * 50, None)

    def test_length_of_list_counts_items(self):
        assert text.validate_min_length(["a", "b"], 2)

    def test_phone(self):
        assert text.validate_phone("(555) 123-4567")
        assert text.validate_phone("+44 20 7946 0958")
        assert not text.validate_phone("12345")
        assert not text.validate_phone("1" * 16)

    def test_postal_code(self):
        assert text.validate_postal_code("SW1A 1AA")
        assert text.validate_postal_code("90210")
        assert not text.validate_postal_code("12")

    def test_regex_bare_pattern(self):
        assert text.validate_regex("123", r"^\d{3}$")
        assert not text.validate_regex("12a", r"^\d{3}$")

    def test_regex_delimited_with_flags(self):
        assert text.validate_regex("ABC", "/^abc$/i")
        assert not text.validate_regex("ABC", "/^abc$/")

    def test_regex_invalid_pattern_fails(self):
        assert not text.validate_regex("anything", "(")

    def test_matches_strict_equality(self):
        assert text.validate_matches("secret", "password", {"password": "secret"})
        assert not text.validate_matches("secret", "password", {"password": "other"})
        assert not text.validate_matches("1", "pin", {"pin": 1})

    def test_matches_missing_other_field(self):
        assert not text.validate_matches("secret", "password", {})

    def test_password_strength(self):
        assert text.validate_password_strength("Passw0rd")
        assert not text.validate_password_strength("password")
        assert not text.validate_password_strength("Pa55")

    def test_password_strength_options(self):
        assert not text.validate_password_strength("Passw0rd", {"special": True})
        assert text.validate_password_strength("Passw0rd!", {"special": True})
        assert not text.validate_password_strength("Passw0rd!", {"min_length": 12})


class TestNumericRules:
    @pytest.mark.parametrize("value", [5, 2.5, "42", "-3.14", "1e3"])
    def test_numeric_valid(self, value):
        assert numeric.validate_numeric(value)

    @pytest.mark.parametrize("value", ["abc", True, None, "1,000", float("nan")])
    def test_numeric_invalid(self, value):
        assert not numeric.validate_numeric(value)

    def test_integer(self):
        assert numeric.validate_integer("42")
        assert numeric.validate_integer(4.0)
        assert not numeric.validate_integer("4.2")
        assert not numeric.validate_integer(True)

    def test_min_value(self):
        assert numeric.validate_min_value("5", 5)
        assert not numeric.validate_min_value("4", 5)
        assert not numeric.validate_min_value("abc", 5)

    def test_max_value(self):
        assert numeric.validate_max_value(10, "10")
        assert not numeric.validate_max_value(10.5, 10)

    def test_bound_that_is_not_a_number_passes(self):
        assert numeric.validate_min_value("4", "five")

    def test_range_list_and_mapping(self):
        assert numeric.validate_range("5", [1, 10])
        assert numeric.validate_range(1, {"min": 1, "max": 10})
        assert not numeric.validate_range(11, [1, 10])

    def test_range_with_bad_param_fails(self):
        assert not numeric.validate_range(5, "1-10")

    def test_currency(self):
        assert numeric.validate_currency("10.50")
        assert numeric.validate_currency(10)
        assert not numeric.validate_currency("10.505")
        assert not numeric.validate_currency("-1")

    def test_percentage(self):
        assert numeric.validate_percentage("0")
        assert numeric.validate_percentage(100)
        assert not numeric.validate_percentage(101)


class TestDateRules:
    def test_date(self):
        assert dates.validate_date("2024-03-15")
        assert dates.validate_date("2024-03-15T10:30:00")
        assert dates.validate_date("March 5, 2024")
        assert not dates.validate_date("not a date")
        assert not dates.validate_date(20240315)

    def test_date_format_php_tokens(self):
        assert dates.validate_date_format("2024-03-15", "Y-m-d")
        assert not dates.validate_date_format("15/03/2024", "Y-m-d")

    def test_date_format_strptime(self):
        assert dates.validate_date_format("15/03/2024", "%d/%m/%Y")

    def test_to_strptime_format(self):
        assert dates.to_strptime_format("d/m/Y H:i") == "%d/%m/%Y %H:%M"

    def test_future_and_past(self):
        assert dates.validate_future_date("2999-01-01")
        assert not dates.validate_future_date("2000-01-01")
        assert dates.validate_past_date("2000-01-01")
        assert not dates.validate_past_date("2999-01-01")

    def test_timezone_aware_future_date(self):
        assert dates.validate_future_date("2999-01-01T00:00:00+02:00")

    def test_timezone(self):
        assert dates.validate_timezone("Europe/Paris")
        assert dates.validate_timezone("UTC")
        assert not dates.validate_timezone("Mars/Olympus_Mons")
        assert not dates.validate_timezone("")


class TestFileRules:
    @pytest.fixture
    def pdf(self):
        return {"name": "plan.PDF", "size": 2048, "mime_type": "application/pdf"}

    @pytest.fixture
    def photo(self):
        return {"name": "photo.png", "size": 1024, "mime_type": "image/png", "width": 800, "height": 600}

    def test_file_type_by_extension(self, pdf):
        assert files.validate_file_type(pdf, ["pdf", "doc"])
        assert files.validate_file_type(pdf, [".pdf"])
        assert not files.validate_file_type(pdf, ["doc"])

    def test_file_type_by_mime(self, photo, pdf):
        assert files.validate_file_type(photo, ["image/*"])
        assert files.validate_file_type(pdf, "application/pdf")
        assert not files.validate_file_type(pdf, ["image/*"])

    def test_file_size(self, pdf):
        assert files.validate_file_size(pdf, 4096)
        assert not files.validate_file_size(pdf, 1024)
        assert files.validate_file_size(pdf, "2KB")

    def test_parse_size(self):
        assert files.parse_size("2MB") == 2 * 1024 * 1024
        assert files.parse_size(500) == 500
        assert files.parse_size("huge") is None

    def test_image_dimensions(self, photo):
        assert files.validate_image_dimensions(photo, [640, 480])
        assert files.validate_image_dimensions(photo, {"min_width": 800, "min_height": 600})
        assert not files.validate_image_dimensions(photo, [1024, 768])

    def test_image_dimensions_need_width_and_height(self, pdf):
        assert not files.validate_image_dimensions(pdf, [1, 1])

    def test_file_required(self, pdf):
        assert files.validate_file_required(pdf)
        assert not files.validate_file_required(None)
        assert not files.validate_file_required([])


class TestIdentifierRules:
    def test_credit_card_luhn(self):
        assert identifiers.validate_credit_card("4111111111111111")
        assert not identifiers.validate_credit_card("4111111111111112")

    def test_credit_card_separators(self):
        assert identifiers.validate_credit_card("4111 1111 1111 1111")
        assert identifiers.validate_credit_card("4111-1111-1111-1111")

    def test_isbn10(self):
        assert identifiers.validate_isbn("0306406152")
        assert not identifiers.validate_isbn("0306406153")
        assert identifiers.validate_isbn("0-306-40615-2")

    def test_isbn10_with_x_check_digit(self):
        assert identifiers.validate_isbn("080442957X")

    def test_isbn13(self):
        assert identifiers.validate_isbn("9780306406157")
        assert not identifiers.validate_isbn("9780306406158")

    def test_iban(self):
        assert identifiers.validate_iban("GB82 WEST 1234 5698 7654 32")
        assert not identifiers.validate_iban("GB82")

    def test_swift(self):
        assert identifiers.validate_swift("DEUTDEFF")
        assert identifiers.validate_swift("DEUTDEFF500")
        assert not identifiers.validate_swift("DEU")

    def test_ssn(self):
        assert identifiers.validate_ssn("123-45-6789")
        assert not identifiers.validate_ssn("123456789")

    def test_document_numbers(self):
        assert identifiers.validate_passport("X1234567")
        assert not identifiers.validate_passport("X1")
        assert identifiers.validate_tax_id("12-3456789")
        assert identifiers.validate_license_plate("ABC 123")


class TestFormatRules:
    def test_json(self):
        assert formats.validate_json('{"a": 1}')
        assert formats.validate_json({"already": "decoded"})
        assert not formats.validate_json("{a:1}")

    def test_xml(self):
        assert formats.validate_xml("<a><b/></a>")
        assert not formats.validate_xml("<a>")

    def test_base64(self):
        assert formats.validate_base64("aGVsbG8=")
        assert not formats.validate_base64("not base64!")

    def test_hex_color(self):
        assert formats.validate_hex_color("#fff")
        assert formats.validate_hex_color("#A1B2C3")
        assert not formats.validate_hex_color("fff")

    def test_ip_address(self):
        assert formats.validate_ip_address("192.168.0.1")
        assert formats.validate_ip_address("::1", 6)
        assert not formats.validate_ip_address("::1", 4)
        assert not formats.validate_ip_address("999.1.1.1")

    def test_mac_address(self):
        assert formats.validate_mac_address("00:1A:2B:3C:4D:5E")
        assert not formats.validate_mac_address("00:1A:2B")

    def test_coordinates(self):
        assert formats.validate_coordinates({"lat": 45.5, "lng": -73.5})
        assert formats.validate_coordinates(["45.5", "-73.5"])
        assert not formats.validate_coordinates({"lat": 45, "lng": 200})
        assert not formats.validate_coordinates("45.5,-73.5")
