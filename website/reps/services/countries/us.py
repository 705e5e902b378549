# ABOUTME: United States lookup: street address -> congressional district -> senators and House member.
# ABOUTME: Legislators come from the unitedstates/congress-legislators bulk dataset.

import logging
from typing import Any, Dict, List, Optional

from ...records import Locator, Representative
from ..geocoding import CongressionalDistrict, CongressionalDistrictGeocoder
from ..http import BULK_TIMEOUT, fetch_json
from .base import DirectoryAdapter, LocatorResolver

logger = logging.getLogger('reps.services')

LEGISLATORS_URL = 'https://unitedstates.github.io/congress-legislators/legislators-current.json'
PHOTO_TEMPLATE = 'https://unitedstates.github.io/images/congress/225x275/{bioguide}.jpg'


class USResolver(LocatorResolver[CongressionalDistrict]):
    def __init__(self, geocoder: Optional[CongressionalDistrictGeocoder] = None):
        self.geocoder = geocoder or CongressionalDistrictGeocoder()

    def resolve(self, locator: Locator) -> CongressionalDistrict:
        return self.geocoder.locate(locator.full_address())


class USDirectory(DirectoryAdapter[CongressionalDistrict]):
    country = 'US'

    def representatives(self, unit: CongressionalDistrict) -> List[Representative]:
        legislators = fetch_json(LEGISLATORS_URL, timeout=BULK_TIMEOUT) or []

        senators = []
        house_member = None
        for legislator in legislators:
            term = self._latest_term(legislator)
            if not term or term.get('state') != unit.state:
                continue
            if term.get('type') == 'sen':
                senators.append(self._to_representative(legislator, term, 'sen', unit))
            elif term.get('type') == 'rep' and house_member is None and self._same_district(term, unit):
                house_member = self._to_representative(legislator, term, 'rep', unit)

        logger.debug(
            "US %s-%s: %d senators, house member %s",
            unit.state, unit.district, len(senators), 'found' if house_member else 'missing',
        )
        return senators + ([house_member] if house_member else [])

    @staticmethod
    def _latest_term(legislator: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        terms = legislator.get('terms') or []
        return terms[-1] if terms else None

    @staticmethod
    def _same_district(term: Dict[str, Any], unit: CongressionalDistrict) -> bool:
        try:
            return int(term.get('district')) == unit.district
        except (TypeError, ValueError):
            return False

    @staticmethod
    def _to_representative(legislator: Dict[str, Any], term: Dict[str, Any], rep_type: str,
                           unit: CongressionalDistrict) -> Representative:
        name = legislator.get('name') or {}
        bioguide = (legislator.get('id') or {}).get('bioguide') or ''
        if rep_type == 'sen':
            district = f"{term.get('state')} (Senator)"
        else:
            district = f"{term.get('state')}-{term.get('district')}"
        return Representative(
            name=f"{name.get('first', '')} {name.get('last', '')}",
            district=district,
            # The dataset publishes contact forms, not addresses.
            email='',
            photo=PHOTO_TEMPLATE.format(bioguide=bioguide) if bioguide else '',
            country='US',
            title='Senator' if rep_type == 'sen' else 'Representative',
            type=rep_type,
            bioguide_id=bioguide or None,
            contact_form=term.get('contact_form'),
            formatted_address=unit.formatted_address or None,
        )
