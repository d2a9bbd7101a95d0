"""Fixed specialty catalogue and bot visibility flag values."""

import re

# Specialty code -> billing (CUPS) code. A row's billing code must always
# match its specialty code through this table.
SPECIALTY_BILLING_CODES: dict[str, str] = {
    "016": "890201",
    "022": "890203",
    "062": "890262",
    "036": "890206",
}

SPECIALTY_LABELS: dict[str, str] = {
    "016": "Medicina General",
    "022": "Odontología",
    "062": "Medicina Laboral",
    "036": "Nutrición",
}

# Values written to specialty_assignments.visibility
VISIBILITY_ACTIVE_VALUE = "SI"
VISIBILITY_INACTIVE_VALUE = "NO"

# Values exposed through the API
ACTIVE = "active"
INACTIVE = "inactive"

_ACTIVE_SPELLINGS = frozenset({"SI", "ACTIVE"})

CONTRACT_CODE_PATTERN = re.compile(r"^[A-Z0-9]{3,10}$")


def billing_code_for(specialty_code: str) -> str | None:
    """Billing code for a specialty, or None if the specialty is unknown."""
    return SPECIALTY_BILLING_CODES.get(specialty_code)


def is_active_flag(raw: str | None) -> bool:
    """Interpret a stored visibility value, tolerating legacy spellings."""
    if raw is None:
        return False
    return raw.strip().upper() in _ACTIVE_SPELLINGS


def storage_value(active: bool) -> str:
    """Canonical stored visibility value."""
    return VISIBILITY_ACTIVE_VALUE if active else VISIBILITY_INACTIVE_VALUE


def normalize_contract_code(raw: str | None) -> str:
    """Trim and upper-case a contract code. The result may be empty."""
    return (raw or "").strip().upper()


def is_valid_contract_code(code: str) -> bool:
    """Check a normalized, non-empty contract code."""
    return bool(CONTRACT_CODE_PATTERN.match(code))
