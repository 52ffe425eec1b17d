"""
Central constants for reportguard detection.

All magic numbers, timeouts, and word lists defined here.
Import from this module rather than hardcoding values.
"""

__all__ = [
    # Reactive
    "DEFAULT_DEBOUNCE_MS",
    "MAX_DETECTOR_WORKERS",
    # Remote
    "DEFAULT_CONFIDENCE_THRESHOLD",
    "DEFAULT_REMOTE_TIMEOUT",
    "REMOTE_DETECT_PATH",
    "REMOTE_DEFAULT_SEVERITY",
    "REMOTE_DEFAULT_CONFIDENCE",
    # Size limits
    "MAX_TEXT_LENGTH",
    # Rule priorities
    "PRIORITY_STRUCTURED_ID",
    "PRIORITY_PHONE_UK_MOBILE",
    "PRIORITY_PHONE_UK_LANDLINE",
    "PRIORITY_PHONE_US",
    "PRIORITY_PHONE_INTL",
    "PRIORITY_GOVERNMENT_ID",
    "PRIORITY_ADDRESS",
    "PRIORITY_POSTCODE",
    "PRIORITY_FINANCIAL",
    "PRIORITY_LOCATION",
    "PRIORITY_NETWORK",
    "PRIORITY_DATE",
    "PRIORITY_DATE_OF_BIRTH",
    "PRIORITY_URL",
    "PRIORITY_NAME",
    "PRIORITY_CATCH_ALL",
    # Validators
    "ALLOWED_EMAIL_SUFFIXES",
    "NI_INVALID_PREFIXES",
    "NI_INVALID_FIRST_LETTERS",
    "NI_INVALID_SECOND_LETTERS",
    "IBAN_LENGTHS",
    # Name heuristic
    "NAME_EXCLUSIONS",
    "NAME_BUSINESS_INDICATORS",
    "NAME_TITLE_INDICATORS",
    "COMMON_FIRST_NAMES",
    "NAME_CONTEXT_WINDOW",
    # Display
    "TYPE_LABELS",
]

# --- REACTIVE ---
DEFAULT_DEBOUNCE_MS = 500
MAX_DETECTOR_WORKERS = 4  # Shared pool for background detection calls

# --- REMOTE ---
DEFAULT_CONFIDENCE_THRESHOLD = 0.4
DEFAULT_REMOTE_TIMEOUT = 10.0  # seconds, transport level only
REMOTE_DETECT_PATH = "/v1/ai-detect"
REMOTE_DEFAULT_SEVERITY = "medium"
REMOTE_DEFAULT_CONFIDENCE = 1.0

# --- SIZE LIMITS ---
MAX_TEXT_LENGTH = 10 * 1024 * 1024  # 10MB stdin cap for the CLI

# --- RULE PRIORITIES (higher wins) ---
PRIORITY_STRUCTURED_ID = 100
PRIORITY_PHONE_UK_MOBILE = 90
PRIORITY_PHONE_UK_LANDLINE = 89
PRIORITY_PHONE_US = 88
PRIORITY_PHONE_INTL = 85
PRIORITY_GOVERNMENT_ID = 80
PRIORITY_ADDRESS = 75
PRIORITY_POSTCODE = 70
PRIORITY_FINANCIAL = 70
PRIORITY_LOCATION = 60
PRIORITY_NETWORK = 60
PRIORITY_DATE = 50
PRIORITY_DATE_OF_BIRTH = 49
PRIORITY_URL = 40
PRIORITY_NAME = 20
PRIORITY_CATCH_ALL = 10

# --- VALIDATORS ---
ALLOWED_EMAIL_SUFFIXES = (
    "com", "org", "net", "edu", "gov", "co.uk", "ac.uk", "io", "ai", "app",
    "dev", "tech", "uk", "us", "ca", "eu", "de", "fr", "es", "it", "nl",
    "au", "nz", "jp", "cn", "in", "br", "mx",
)

NI_INVALID_PREFIXES = frozenset(["BG", "GB", "NK", "KN", "TN", "NT", "ZZ"])
NI_INVALID_FIRST_LETTERS = frozenset("DFIQUV")
NI_INVALID_SECOND_LETTERS = frozenset("DFOQUV")

# Expected IBAN length per country; unknown countries only get the
# structural and mod-97 checks.
IBAN_LENGTHS = {
    "GB": 22, "DE": 22, "FR": 27, "IT": 27, "ES": 24, "NL": 18, "BE": 16,
    "IE": 22, "PT": 25, "AT": 20, "CH": 21, "SE": 24, "DK": 18, "NO": 15,
}

# --- NAME HEURISTIC ---
NAME_EXCLUSIONS = frozenset([
    "United Kingdom", "New York", "San Francisco", "Los Angeles",
    "Data Protection", "Human Resources", "Chief Executive",
    "United States", "European Union", "Dear Sir", "Dear Madam",
    "Client Services", "Team Lead", "Senior Account", "Account Manager",
    "Hiring Friends", "Fraudulent Expenses", "Expense Report",
    "Financial Misconduct", "Workplace Behaviour",
    "Policy Violation", "Internal Audit", "Compliance Issue",
])

NAME_BUSINESS_INDICATORS = (
    "report", "expense", "fraud", "misconduct", "violation", "policy",
    "hiring", "recruitment", "process", "procedure", "system", "department",
)

NAME_TITLE_INDICATORS = (
    "my", "i am", "mr.", "mrs.", "ms.", "dr.", "professor", "manager",
    "supervisor",
)

COMMON_FIRST_NAMES = frozenset([
    "john", "jane", "michael", "sarah", "david", "emily", "james", "mary",
    "robert", "lisa",
])

NAME_CONTEXT_WINDOW = 30  # chars inspected either side of a name candidate

# --- DISPLAY ---
TYPE_LABELS = {
    "NAME": "Person Name",
    "EMAIL": "Email Address",
    "EMPLOYEE_ID": "Employee ID",
    "PHONE_UK_MOBILE": "UK Mobile",
    "PHONE_UK_LANDLINE": "UK Landline",
    "PHONE_US": "US Phone",
    "PHONE_INTL": "International Phone",
    "SSN": "Social Security Number",
    "NI_NUMBER": "National Insurance",
    "CREDIT_CARD": "Credit Card",
    "IBAN": "IBAN",
    "CASE_TRACKING_ID": "Case Tracking ID",
    "PASSPORT_UK": "UK Passport",
    "PASSPORT_US": "US Passport",
    "DRIVERS_LICENSE_UK": "UK Driving Licence",
    "BANK_ACCOUNT_UK": "UK Bank Account",
    "UK_ADDRESS": "UK Address",
    "POSTCODE_UK": "UK Postcode",
    "SORT_CODE_UK": "UK Sort Code",
    "POSTCODE_US": "US ZIP Code",
    "IP_ADDRESS": "IP Address",
    "IPV6_ADDRESS": "IPv6 Address",
    "MAC_ADDRESS": "MAC Address",
    "DATE": "Date",
    "DATE_OF_BIRTH": "Date of Birth",
    "URL_WITH_EMAIL": "URL with Email",
    "REFERENCE_CODE": "Reference Code",
}
