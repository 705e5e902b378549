# ABOUTME: Canada lookup: validated postal code -> federal MP via Open North's Represent API.
# ABOUTME: Format is checked before any network call is made.

from typing import Any, Dict, List, Optional

from ...exceptions import NoMatchFound, NotFound
from ...records import Locator, Representative
from ..http import fetch_json
from ..postal import validate_canadian_postal_code
from .base import DirectoryAdapter, LocatorResolver

REPRESENT_POSTCODE_URL = 'https://represent.opennorth.ca/postcodes/{postal}/'

# Represent returns matches under either key depending on how the code was located.
RESULT_KEYS = ('representatives_centroid', 'representatives_concordance')


class CanadaResolver(LocatorResolver[str]):
    def resolve(self, locator: Locator) -> str:
        return validate_canadian_postal_code(locator.postal)


class CanadaDirectory(DirectoryAdapter[str]):
    country = 'CA'

    def representatives(self, postal: str) -> List[Representative]:
        payload = fetch_json(REPRESENT_POSTCODE_URL.format(postal=postal), allow_not_found=True)
        if payload is None:
            raise NotFound('Location not found.')

        member = self._find_mp(payload)
        if not member:
            raise NoMatchFound('No MP found.')

        return [Representative(
            name=member.get('name') or '',
            district=member.get('district_name') or '',
            email=member.get('email') or '',
            photo=member.get('photo_url') or '',
            country='CA',
            title='Member of Parliament',
            type='mp',
            party=member.get('party_name') or None,
        )]

    @staticmethod
    def _find_mp(payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for key in RESULT_KEYS:
            for candidate in payload.get(key) or []:
                if candidate.get('elected_office') == 'MP':
                    return candidate
        return None
