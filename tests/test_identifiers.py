"""
Tests for Thai mobile number and national ID validation.
"""

import pytest

from promptqr.services.identifiers import (
    IdentifierKind,
    InvalidIdentifierError,
    classify_identifier,
    format_proxy_value,
    is_valid_national_id,
    is_valid_phone_number,
    require_identifier,
)


class TestPhoneNumber:
    @pytest.mark.parametrize("phone", ["0812345678", "0912345678", "0612345678", "081-234-5678", "081 234 5678"])
    def test_accepts_mobile_numbers(self, phone):
        assert is_valid_phone_number(phone)

    def test_rejects_landline_prefix(self):
        assert not is_valid_phone_number("0712345678")
        assert not is_valid_phone_number("0212345678")

    def test_rejects_wrong_length(self):
        assert not is_valid_phone_number("081234567")
        assert not is_valid_phone_number("08123456789")

    def test_rejects_missing_trunk_zero(self):
        assert not is_valid_phone_number("66812345678")
        assert not is_valid_phone_number("+66812345678")

    def test_rejects_non_digits(self):
        assert not is_valid_phone_number("08123456a8")
        assert not is_valid_phone_number("")


class TestNationalId:
    @pytest.mark.parametrize("national_id", ["1234567890121", "1101700230708"])
    def test_accepts_valid_checksum(self, national_id):
        assert is_valid_national_id(national_id)

    def test_rejects_check_digit_mismatch(self):
        assert not is_valid_national_id("1234567890122")
        assert not is_valid_national_id("1101700230705")

    @pytest.mark.parametrize("value", ["123456789012", "12345678901211", ""])
    def test_rejects_wrong_length(self, value):
        assert not is_valid_national_id(value)

    @pytest.mark.parametrize("value", ["12345678901a1", "1234567890 21", "1-34567890121", "１234567890121"])
    def test_rejects_non_ascii_digits(self, value):
        assert not is_valid_national_id(value)


class TestClassification:
    def test_phone_checked_first(self):
        assert classify_identifier("0812345678") is IdentifierKind.PHONE

    def test_national_id(self):
        assert classify_identifier("1234567890121") is IdentifierKind.NATIONAL_ID

    def test_whitespace_is_ignored(self):
        assert classify_identifier(" 1234 5678 90121 ") is IdentifierKind.NATIONAL_ID

    @pytest.mark.parametrize("value", ["", "   ", "0712345678", "1234567890122", "hello"])
    def test_everything_else_is_invalid(self, value):
        assert classify_identifier(value) is IdentifierKind.INVALID

    def test_require_identifier_returns_compacted_value(self):
        assert require_identifier("081 234 5678") == ("0812345678", IdentifierKind.PHONE)

    def test_require_identifier_raises(self):
        with pytest.raises(InvalidIdentifierError):
            require_identifier("0712345678")


class TestProxyValue:
    def test_phone_gets_country_code(self):
        assert format_proxy_value("0812345678") == "0066812345678"
        assert format_proxy_value("081-234-5678") == "0066812345678"

    def test_national_id_is_unchanged(self):
        assert format_proxy_value("1234567890121") == "1234567890121"

    def test_other_values_only_cleaned(self):
        assert format_proxy_value("07-1234 5678") == "0712345678"
