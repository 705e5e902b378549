# ABOUTME: Pure postal-code resolvers that need no network access.
# ABOUTME: Covers Canada validation, France departments, Sweden valkretsar, Australia states and EU codes.

import re
from typing import Optional

from ..constants import AUSTRALIA_POSTCODE_RANGES, EU_MEMBER_STATES, SWEDEN_POSTAL_TO_VALKRETS
from ..exceptions import (
    InvalidFormat,
    InvalidMemberState,
    MissingParameter,
    UnmappedPostalPrefix,
    UnmappedPostcode,
)

CANADIAN_POSTAL_PATTERN = re.compile(r'^[A-Z]\d[A-Z]\d[A-Z]\d$')
FIVE_DIGITS = re.compile(r'^\d{5}$')
FOUR_DIGITS = re.compile(r'^\d{4}$')

CORSICA_SPLIT = 20200


def compact(value: Optional[str]) -> str:
    """Remove all whitespace from a postal code."""
    return re.sub(r'\s', '', value or '')


def require(value: Optional[str], label: str) -> str:
    if not value or not value.strip():
        raise MissingParameter(f"Missing {label} parameter")
    return value


def validate_canadian_postal_code(postal: Optional[str]) -> str:
    """Return the normalized postal code (``K1A0A6``) or raise InvalidFormat."""
    cleaned = compact(require(postal, 'postal')).upper()
    if not CANADIAN_POSTAL_PATTERN.match(cleaned):
        raise InvalidFormat('Invalid format.')
    return cleaned


def validate_five_digit_postal(postal: Optional[str], country_label: str) -> str:
    cleaned = compact(require(postal, 'postal'))
    if not FIVE_DIGITS.match(cleaned):
        raise InvalidFormat(f'Invalid {country_label} postal code format')
    return cleaned


def french_department(postal: Optional[str]) -> str:
    """
    Map a French postal code to its department code.

    Corsica ("20xxx") splits into 2A below 20200 and 2B from 20200 up;
    overseas codes ("97xxx") keep a three-digit department.
    """
    cleaned = validate_five_digit_postal(postal, 'French')
    department = cleaned[:2]
    if department == '20':
        return '2A' if int(cleaned) < CORSICA_SPLIT else '2B'
    if cleaned.startswith('97'):
        return cleaned[:3]
    return department


def swedish_valkrets(postal: Optional[str]) -> str:
    cleaned = validate_five_digit_postal(postal, 'Swedish')
    valkrets = SWEDEN_POSTAL_TO_VALKRETS.get(cleaned[:2])
    if not valkrets:
        raise UnmappedPostalPrefix()
    return valkrets


def validate_australian_postcode(postcode: Optional[str]) -> str:
    cleaned = require(postcode, 'postal').strip()
    if not FOUR_DIGITS.match(cleaned):
        raise InvalidFormat('Invalid Australian postcode format')
    return cleaned


def australian_state(postcode: Optional[str]) -> str:
    """Map a four-digit postcode to the state label used by OpenAustralia."""
    code = int(validate_australian_postcode(postcode))
    for state, ranges in AUSTRALIA_POSTCODE_RANGES:
        if any(low <= code <= high for low, high in ranges):
            return state
    raise UnmappedPostcode()


def eu_member_state(code: Optional[str]) -> str:
    if not code or not code.strip():
        raise MissingParameter('Missing memberState parameter')
    normalized = code.strip().upper()
    if normalized not in EU_MEMBER_STATES:
        raise InvalidMemberState()
    return normalized
