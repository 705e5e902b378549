# ABOUTME: Network-backed locators turning addresses and postcodes into administrative units.
# ABOUTME: Geocodio for US districts, postcodes.io for UK constituencies, OpenPLZ for German localities.

import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from ..exceptions import AddressNotFound, InvalidPostcode, MissingParameter
from .http import fetch_json
from .postal import compact, validate_five_digit_postal

logger = logging.getLogger('reps.services')


@dataclass(frozen=True)
class CongressionalDistrict:
    state: str
    district: int
    formatted_address: str = ''


class CongressionalDistrictGeocoder:
    """
    Geocode a US street address to a state and congressional district.

    Requires GEOCODIO_API_KEY. Results are not cached: addresses are
    personal data and are never persisted.
    """

    GEOCODIO_ENDPOINT = 'https://api.geocod.io/v1.7/geocode'

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key or getattr(settings, 'GEOCODIO_API_KEY', '')

    def locate(self, address: str) -> CongressionalDistrict:
        address = (address or '').strip()
        if not address:
            raise MissingParameter('Address is required')
        if not self.api_key:
            raise ImproperlyConfigured('GEOCODIO_API_KEY is not set')

        payload = fetch_json(self.GEOCODIO_ENDPOINT, params={
            'q': address,
            'fields': 'cd',
            'api_key': self.api_key,
        }) or {}

        results = payload.get('results') or []
        if not results:
            raise AddressNotFound()

        location = results[0]
        districts = (location.get('fields') or {}).get('congressional_districts') or []
        state = (location.get('address_components') or {}).get('state')
        if not districts or not state:
            raise AddressNotFound()

        try:
            district_number = int(districts[0].get('district_number'))
        except (TypeError, ValueError):
            raise AddressNotFound()

        return CongressionalDistrict(
            state=state,
            district=district_number,
            formatted_address=location.get('formatted_address') or '',
        )


class ConstituencyPostcodeLookup:
    """Resolve a UK postcode to its Westminster constituency via postcodes.io."""

    POSTCODES_ENDPOINT = 'https://api.postcodes.io/postcodes'

    def constituency(self, postcode: Optional[str]) -> str:
        cleaned = compact(postcode).upper()
        if not cleaned:
            raise MissingParameter('Missing postal parameter')

        payload = fetch_json(f"{self.POSTCODES_ENDPOINT}/{cleaned}", allow_not_found=True) or {}
        constituency = (payload.get('result') or {}).get('parliamentary_constituency')
        if not constituency:
            raise InvalidPostcode('Invalid UK Postcode.')
        return constituency


def strip_municipality_suffix(name: Optional[str]) -> str:
    """
    Drop the descriptive part after a comma.

    "Hamburg, Freie und Hansestadt" -> "Hamburg"
    "München, Landeshauptstadt" -> "München"
    """
    return (name or '').split(',')[0].strip()


class LocalityLookup:
    """Resolve a German Postleitzahl to a locality name via OpenPLZ."""

    OPENPLZ_ENDPOINT = 'https://openplzapi.org/de/Localities'

    def locality(self, postal: Optional[str]) -> str:
        cleaned = validate_five_digit_postal(postal, 'German')
        localities = fetch_json(self.OPENPLZ_ENDPOINT, params={'postalCode': cleaned}) or []
        if not localities:
            raise InvalidPostcode('Invalid German postal code.')

        first = localities[0]
        raw_name = (first.get('municipality') or {}).get('name') or first.get('name')
        name = strip_municipality_suffix(raw_name)
        if not name:
            raise InvalidPostcode('Could not determine city from postal code.')
        logger.debug("Resolved PLZ %s to locality %s", cleaned, name)
        return name
