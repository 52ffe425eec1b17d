"""
Tests for candidate validators.

Each validator must be total: False for anything it cannot confirm,
never an exception.
"""

import pytest

from reportguard.detection.validators import (
    has_digit,
    luhn_check,
    validate_bank_account_uk,
    validate_email_domain,
    validate_iban,
    validate_ipv4,
    validate_mac_address,
    validate_ni_number,
)


class TestLuhnCheck:
    """Tests for credit card checksum validation."""

    @pytest.mark.parametrize("number", [
        "4111111111111111",
        "4111 1111 1111 1111",
        "4111-1111-1111-1111",
        "5500000000000004",
        "378282246310005",
    ])
    def test_valid_numbers(self, number):
        """Known test card numbers pass."""
        assert luhn_check(number) is True

    def test_bad_checksum(self):
        """A single changed digit fails the checksum."""
        assert luhn_check("4111 1111 1111 1112") is False

    @pytest.mark.parametrize("number", ["411111111111", "41111111111111111111"])
    def test_length_bounds(self, number):
        """Digit counts outside 13-19 fail."""
        assert luhn_check(number) is False

    def test_non_ascii_digits_rejected(self):
        """Unicode digits are not treated as card digits."""
        assert luhn_check("٤111111111111111") is False

    @pytest.mark.parametrize("value", [None, 4111111111111111, "", "abcd efgh ijkl mnop"])
    def test_malformed_input(self, value):
        """Non-strings and non-digits return False."""
        assert luhn_check(value) is False


class TestNINumber:
    """Tests for UK National Insurance number validation."""

    def test_valid(self):
        """Ordinary prefixes pass, ignoring case and spaces."""
        assert validate_ni_number("AB123456C") is True
        assert validate_ni_number("ab 12 34 56 c") is True

    @pytest.mark.parametrize("value", ["BG123456A", "GB123456A", "ZZ123456A", "NK123456A"])
    def test_reserved_prefixes(self, value):
        """Administrative prefixes are rejected."""
        assert validate_ni_number(value) is False

    @pytest.mark.parametrize("value", ["DA123456A", "QA123456A", "AO123456A", "AV123456A"])
    def test_invalid_letters(self, value):
        """Disallowed first and second letters are rejected."""
        assert validate_ni_number(value) is False

    def test_malformed_input(self):
        """Short or non-string input returns False."""
        assert validate_ni_number("A") is False
        assert validate_ni_number(None) is False


class TestIPv4:
    """Tests for dotted-quad validation."""

    @pytest.mark.parametrize("value", ["192.168.1.1", "0.0.0.0", "255.255.255.255", "10.0.0.1"])
    def test_valid(self, value):
        """Canonical addresses pass."""
        assert validate_ipv4(value) is True

    @pytest.mark.parametrize("value", [
        "999.1.1.1",
        "256.0.0.1",
        "01.2.3.4",
        "1.2.3",
        "1.2.3.4.5",
        "1..2.3",
        "a.b.c.d",
    ])
    def test_invalid(self, value):
        """Out-of-range, non-canonical and wrong-shape addresses fail."""
        assert validate_ipv4(value) is False

    def test_non_string(self):
        """Non-string input returns False."""
        assert validate_ipv4(19216811) is False


class TestEmailDomain:
    """Tests for email suffix allow-listing."""

    @pytest.mark.parametrize("value", [
        "john.doe@example.com",
        "someone@uni.ac.uk",
        "x@company.CO.UK",
        "a@b@example.org",
    ])
    def test_allowed(self, value):
        """Allowed suffixes pass, checked after the last @."""
        assert validate_email_domain(value) is True

    @pytest.mark.parametrize("value", [
        "user@example.comx",
        "user@example.invalid",
        "user@localhost",
        "no-at-sign.com",
        "user@",
    ])
    def test_rejected(self, value):
        """Unknown suffixes and malformed addresses fail."""
        assert validate_email_domain(value) is False

    def test_non_string(self):
        """Non-string input returns False."""
        assert validate_email_domain(None) is False


class TestIBAN:
    """Tests for IBAN checksum validation."""

    def test_valid(self):
        """A well-formed UK IBAN passes with or without spaces."""
        assert validate_iban("GB82WEST12345698765432") is True
        assert validate_iban("GB82 WEST 1234 5698 7654 32") is True

    def test_bad_checksum(self):
        """Changed check digits fail."""
        assert validate_iban("GB83WEST12345698765432") is False

    def test_wrong_country_length(self):
        """A known country with the wrong length fails."""
        assert validate_iban("GB82WEST1234569876543") is False

    def test_malformed(self):
        """Wrong structure and non-strings fail."""
        assert validate_iban("1234567890123456") is False
        assert validate_iban("GB82") is False
        assert validate_iban(None) is False


class TestMacAddress:
    """Tests for MAC separator consistency."""

    def test_consistent_separators(self):
        """Colon-only and hyphen-only forms pass."""
        assert validate_mac_address("00:1A:2B:3C:4D:5E") is True
        assert validate_mac_address("00-1A-2B-3C-4D-5E") is True

    def test_mixed_separators(self):
        """Mixed separators fail."""
        assert validate_mac_address("00:1A-2B:3C:4D:5E") is False


class TestBankAccountUK:
    """Tests for UK account number validation."""

    @pytest.mark.parametrize("value", ["31926819", "00012345", "19991332"])
    def test_valid(self, value):
        """Eight digits that are not a yyyymmdd date pass."""
        assert validate_bank_account_uk(value) is True

    @pytest.mark.parametrize("value", ["20240115", "19991231", "1234567", "1234567a", "１２３４５６７８", None])
    def test_invalid(self, value):
        """Compact dates, wrong lengths, non-ASCII digits and non-strings fail."""
        assert validate_bank_account_uk(value) is False


class TestHasDigit:
    """Tests for the digit requirement on reference codes."""

    def test_values(self):
        """Only values with an ASCII digit pass."""
        assert has_digit("INC-20931") is True
        assert has_digit("AB-CD-EF") is False
        assert has_digit(None) is False
