"""Rule definitions for PII recognition in free-text reports."""

import re
from typing import List, Tuple

from .constants import (
    COMMON_FIRST_NAMES,
    NAME_BUSINESS_INDICATORS,
    NAME_CONTEXT_WINDOW,
    NAME_EXCLUSIONS,
    NAME_TITLE_INDICATORS,
    PRIORITY_ADDRESS,
    PRIORITY_CATCH_ALL,
    PRIORITY_DATE,
    PRIORITY_DATE_OF_BIRTH,
    PRIORITY_FINANCIAL,
    PRIORITY_GOVERNMENT_ID,
    PRIORITY_LOCATION,
    PRIORITY_NAME,
    PRIORITY_NETWORK,
    PRIORITY_PHONE_INTL,
    PRIORITY_PHONE_UK_LANDLINE,
    PRIORITY_PHONE_UK_MOBILE,
    PRIORITY_PHONE_US,
    PRIORITY_POSTCODE,
    PRIORITY_STRUCTURED_ID,
    PRIORITY_URL,
)
from .pattern_registry import PatternRegistry, create_rule_adder
from .types import PatternRule, Severity
from .validators import (
    has_digit,
    luhn_check,
    validate_bank_account_uk,
    validate_email_domain,
    validate_iban,
    validate_ipv4,
    validate_mac_address,
    validate_ni_number,
)

# RULE DEFINITIONS

# Rules are declared in the order they should win ties at equal priority.
# PatternRegistry sorts by descending priority with a stable sort.

RULES: List[PatternRule] = []

_add = create_rule_adder(RULES)

_PLACE_PREPOSITION = re.compile(r"\b(?:at|in|near|from|to)\s*$", re.IGNORECASE)


def _name_in_context(text: str, start: int, end: int) -> bool:
    """
    Context heuristic for capitalised word pairs.

    Drops known non-names, business phrases and place-like usages
    ("in New Town"). Keeps pairs after a title or personal indicator,
    and otherwise only pairs whose first word is a common first name.
    """
    full_name = text[start:end]
    if full_name in NAME_EXCLUSIONS:
        return False

    before = text[max(0, start - NAME_CONTEXT_WINDOW):start].lower()
    after = text[end:end + NAME_CONTEXT_WINDOW].lower()
    context = f"{before} {after}"
    lowered = full_name.lower()

    if any(word in lowered or word in context for word in NAME_BUSINESS_INDICATORS):
        return False

    if _PLACE_PREPOSITION.search(before):
        return False

    if any(indicator in before for indicator in NAME_TITLE_INDICATORS):
        return True

    first = lowered.split()[0]
    return first in COMMON_FIRST_NAMES


# === Structured identifiers (priority 100) ===
# Local part and domain are length-bounded to keep scanning linear
_add(r'\b[A-Za-z0-9._%+-]{1,64}@[A-Za-z0-9.-]{1,255}\.[A-Za-z]{2,}\b', 'EMAIL',
     PRIORITY_STRUCTURED_ID, Severity.HIGH, validator=validate_email_domain)
# Labeled staff identifiers; the value must contain a digit so ordinary
# words like "employee" or "identity" are not taken as IDs
_add(r'\b(?:EMP|EMPL|ID|Employee\s*ID|Staff\s*ID|Personnel)[:\s#-]{0,5}(?=[A-Z]{0,11}\d)([A-Z0-9]{4,12})\b',
     'EMPLOYEE_ID', PRIORITY_STRUCTURED_ID, Severity.HIGH, flags=re.IGNORECASE)
_add(r'\b\d{3}-\d{2}-\d{4}\b', 'SSN', PRIORITY_STRUCTURED_ID, Severity.HIGH)
_add(r'\b[A-CEGHJ-PR-TW-Z][A-CEGHJ-NPR-TW-Z]\s?\d{2}\s?\d{2}\s?\d{2}\s?[A-D]\b', 'NI_NUMBER',
     PRIORITY_STRUCTURED_ID, Severity.HIGH, validator=validate_ni_number, flags=re.IGNORECASE)
_add(r'\b(?:\d{4}[\s-]?){3}\d{4}\b', 'CREDIT_CARD',
     PRIORITY_STRUCTURED_ID, Severity.HIGH, validator=luhn_check)
_add(r'\b[A-Z]{2}\d{2}\s?(?:[A-Z0-9]{4}\s?){2,7}[A-Z0-9]{1,4}\b', 'IBAN',
     PRIORITY_STRUCTURED_ID, Severity.HIGH, validator=validate_iban)
# Case tracking IDs issued on submission: WB- plus 8 uppercase alphanumerics
_add(r'\bWB-[A-Z0-9]{8}\b', 'CASE_TRACKING_ID', PRIORITY_STRUCTURED_ID, Severity.MEDIUM)

# === Phone numbers ===
_add(r'\b(?:0|\+?44\s?)7\d{3}\s?\d{6}\b', 'PHONE_UK_MOBILE',
     PRIORITY_PHONE_UK_MOBILE, Severity.HIGH)
_add(r'\b0\d{2,4}\s?\d{3,4}\s?\d{3,4}\b', 'PHONE_UK_LANDLINE',
     PRIORITY_PHONE_UK_LANDLINE, Severity.HIGH)
_add(r'\b(?:\+?1[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}\b', 'PHONE_US',
     PRIORITY_PHONE_US, Severity.HIGH)
# "+" country code, then up to three digit groups
_add(r'(?<![\w+])\+\d{1,3}[\s.-]?\(?\d{1,4}\)?[\s.-]?\d{1,4}[\s.-]?\d{1,9}\b', 'PHONE_INTL',
     PRIORITY_PHONE_INTL, Severity.HIGH)

# === Government IDs ===
_add(r'\b[0-9]{9}[A-Z]{3}\b', 'PASSPORT_UK', PRIORITY_GOVERNMENT_ID, Severity.HIGH)
_add(r'\b[A-Z]{1,2}\d{7,9}\b', 'PASSPORT_US', PRIORITY_GOVERNMENT_ID, Severity.HIGH)
_add(r'\b[A-Z]{5}\d{6}[A-Z]{2}\d[A-Z]{2}\b', 'DRIVERS_LICENSE_UK',
     PRIORITY_GOVERNMENT_ID, Severity.HIGH)

# === Addresses ===
# House number, street word, then a postcode within the same sentence.
# Gaps are bounded to keep backtracking linear on long reports.
_add(r'\b\d+[\w\s,]{0,60}?\b(?:Street|Road|Avenue|Lane|Drive|Close|Way|Court|Place|Square'
     r'|Gardens|Terrace|Hill|Park|Crescent)\b[^.!?\n]{0,60}?\b[A-Z]{1,2}\d{1,2}[A-Z]?\s?\d[A-Z]{2}\b',
     'UK_ADDRESS', PRIORITY_ADDRESS, Severity.MEDIUM, flags=re.IGNORECASE)
_add(r'\b[A-Z]{1,2}\d{1,2}[A-Z]?\s?\d[A-Z]{2}\b', 'POSTCODE_UK',
     PRIORITY_POSTCODE, Severity.MEDIUM, flags=re.IGNORECASE)

# === Financial ===
# Digit runs glued to a hyphen belong to reference codes, not accounts
_add(r'(?<![\w-])\d{8}\b', 'BANK_ACCOUNT_UK',
     PRIORITY_FINANCIAL, Severity.HIGH, validator=validate_bank_account_uk)
_add(r'\b\d{2}-\d{2}-\d{2}\b', 'SORT_CODE_UK', PRIORITY_FINANCIAL, Severity.MEDIUM)

# === Location ===
_add(r'(?<![\w-])\d{5}(?:-\d{4})?\b', 'POSTCODE_US', PRIORITY_LOCATION, Severity.LOW)

# === Network ===
_add(r'\b(?:\d{1,3}\.){3}\d{1,3}\b', 'IP_ADDRESS',
     PRIORITY_NETWORK, Severity.MEDIUM, validator=validate_ipv4)
_add(r'\b(?:[A-F0-9]{1,4}:){7}[A-F0-9]{1,4}\b', 'IPV6_ADDRESS',
     PRIORITY_NETWORK, Severity.MEDIUM, flags=re.IGNORECASE)
_add(r'\b(?:[0-9A-Fa-f]{2}[:-]){5}[0-9A-Fa-f]{2}\b', 'MAC_ADDRESS',
     PRIORITY_NETWORK, Severity.LOW, validator=validate_mac_address)

# === Dates ===
# yyyy-mm-dd / yyyy/mm/dd and dd-mm-yyyy / dd/mm/yyyy
_add(r'\b(?:(?:19|20)\d{2}[-/](?:0?[1-9]|1[0-2])[-/](?:0?[1-9]|[12]\d|3[01])'
     r'|(?:0?[1-9]|[12]\d|3[01])[-/](?:0?[1-9]|1[0-2])[-/](?:19|20)\d{2})\b',
     'DATE', PRIORITY_DATE, Severity.LOW)
# Labeled birth dates in any d/m/y order; only the date itself is redacted
_add(r'\b(?:DOB|Date of Birth|Born)[\s:]{1,10}(\d{1,2}[-/]\d{1,2}[-/]\d{2,4})\b', 'DATE_OF_BIRTH',
     PRIORITY_DATE_OF_BIRTH, Severity.MEDIUM, group=1, flags=re.IGNORECASE)

# === URLs ===
# Links carrying an address or credentials before the host
_add(r'\bhttps?://[^\s@]{0,2048}@\S{0,2048}', 'URL_WITH_EMAIL', PRIORITY_URL, Severity.MEDIUM)

# === Names ===
_add(r'\b[A-Z][a-z]{2,}\s+[A-Z][a-z]{2,}\b', 'NAME',
     PRIORITY_NAME, Severity.MEDIUM, context_filter=_name_in_context)

# === Catch-all ===
# Uppercase reference codes such as "INC-20931" or "HR-2024-07"
_add(r'\b[A-Z]{2,}(?:-[A-Z0-9]{2,})+\b', 'REFERENCE_CODE',
     PRIORITY_CATCH_ALL, Severity.LOW, validator=has_digit)


DEFAULT_REGISTRY = PatternRegistry(RULES)


def all_rules() -> Tuple[PatternRule, ...]:
    """Default rules, highest priority first, ties in declaration order."""
    return DEFAULT_REGISTRY.all_rules()
