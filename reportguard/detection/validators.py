"""
Validators for matched PII candidates.

Every validator is pure and total: it returns False for anything it
cannot confirm, including malformed or non-string input, and never raises.
"""

import re

from .constants import (
    ALLOWED_EMAIL_SUFFIXES,
    IBAN_LENGTHS,
    NI_INVALID_FIRST_LETTERS,
    NI_INVALID_PREFIXES,
    NI_INVALID_SECOND_LETTERS,
)

_CARD_SEPARATORS = re.compile(r"[\s-]")
_IBAN_STRUCTURE = re.compile(r"^[A-Z]{2}\d{2}[A-Z0-9]+$")


def luhn_check(number: str) -> bool:
    """
    Validate a card number with the Luhn algorithm.

    Spaces and hyphens are stripped first. Anything left that is not an
    ASCII digit, or a digit count outside 13-19, fails.
    """
    if not isinstance(number, str):
        return False

    digits = _CARD_SEPARATORS.sub("", number)
    if not 13 <= len(digits) <= 19:
        return False
    if not all("0" <= c <= "9" for c in digits):
        return False

    total = 0
    for i, char in enumerate(reversed(digits)):
        digit = ord(char) - 48
        if i % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit

    return total % 10 == 0


def validate_ni_number(value: str) -> bool:
    """
    Validate a UK National Insurance number prefix.

    Case- and whitespace-insensitive. Rejects the reserved prefixes
    BG GB NK KN TN NT ZZ, a first letter in DFIQUV and a second letter
    in DFOQUV.
    """
    if not isinstance(value, str):
        return False

    normalized = "".join(value.split()).upper()
    if len(normalized) < 2:
        return False

    if normalized[:2] in NI_INVALID_PREFIXES:
        return False
    if normalized[0] in NI_INVALID_FIRST_LETTERS:
        return False
    if normalized[1] in NI_INVALID_SECOND_LETTERS:
        return False

    return True


def validate_ipv4(value: str) -> bool:
    """
    Validate a dotted-quad IPv4 address.

    Exactly four octets, each in canonical base-10 form (no leading
    zeros, so "01" fails but "0" passes) and within 0-255.
    """
    if not isinstance(value, str):
        return False

    octets = value.split(".")
    if len(octets) != 4:
        return False

    for octet in octets:
        if not octet or len(octet) > 3:
            return False
        if not all("0" <= c <= "9" for c in octet):
            return False
        num = int(octet)
        if num > 255 or str(num) != octet:
            return False

    return True


def validate_email_domain(value: str) -> bool:
    """
    Check the domain (after the last @) ends with an allowed suffix.

    Matching is case-insensitive and on label boundaries, so
    "example.co.uk" passes via "co.uk" and "example.comx" fails.
    """
    if not isinstance(value, str) or "@" not in value:
        return False

    domain = value.rsplit("@", 1)[1].lower()
    if not domain or "." not in domain:
        return False

    return any(domain.endswith("." + suffix) for suffix in ALLOWED_EMAIL_SUFFIXES)


def validate_iban(value: str) -> bool:
    """
    Validate an IBAN.

    Checks the per-country length where the country is known, the basic
    structure (2 letters, 2 check digits, alphanumerics) and the ISO 7064
    mod-97 checksum.
    """
    if not isinstance(value, str):
        return False

    cleaned = "".join(value.split()).upper()
    if not 15 <= len(cleaned) <= 34:
        return False
    if not _IBAN_STRUCTURE.match(cleaned):
        return False

    expected = IBAN_LENGTHS.get(cleaned[:2])
    if expected is not None and len(cleaned) != expected:
        return False

    # Move first 4 chars to end and convert letters (A=10 ... Z=35)
    rearranged = cleaned[4:] + cleaned[:4]
    numeric = "".join(str(int(c, 36)) for c in rearranged)

    return int(numeric) % 97 == 1


def validate_mac_address(value: str) -> bool:
    """Reject MAC addresses that mix ':' and '-' separators."""
    if not isinstance(value, str):
        return False
    return not (":" in value and "-" in value)


_COMPACT_DATE = re.compile(r"^(?:19|20)\d{2}(?:0[1-9]|1[0-2])(?:0[1-9]|[12]\d|3[01])$")


def validate_bank_account_uk(value: str) -> bool:
    """
    Validate a UK bank account number.

    Exactly eight ASCII digits that do not read as a yyyymmdd date, so
    compact dates like "20240115" are left for the date rules.
    """
    if not isinstance(value, str):
        return False
    if len(value) != 8 or not all("0" <= c <= "9" for c in value):
        return False
    return not _COMPACT_DATE.match(value)


def has_digit(value: str) -> bool:
    """True if the value contains at least one ASCII digit."""
    if not isinstance(value, str):
        return False
    return any("0" <= c <= "9" for c in value)
