# ABOUTME: United Kingdom lookup: postcode -> Westminster constituency -> sitting MP.
# ABOUTME: Uses postcodes.io and the UK Parliament Members API.

from typing import List, Optional

from ...exceptions import NoSittingMember
from ...records import Locator, Representative
from ..geocoding import ConstituencyPostcodeLookup
from ..http import fetch_json
from .base import DirectoryAdapter, LocatorResolver

MEMBERS_SEARCH_URL = 'https://members-api.parliament.uk/api/Location/Constituency/Search'


class UKResolver(LocatorResolver[str]):
    def __init__(self, postcodes: Optional[ConstituencyPostcodeLookup] = None):
        self.postcodes = postcodes or ConstituencyPostcodeLookup()

    def resolve(self, locator: Locator) -> str:
        return self.postcodes.constituency(locator.postal)


class UKDirectory(DirectoryAdapter[str]):
    country = 'UK'

    def representatives(self, constituency: str) -> List[Representative]:
        payload = fetch_json(MEMBERS_SEARCH_URL, params={'searchText': constituency}) or {}
        items = payload.get('items') or []
        member = None
        if items:
            representation = ((items[0].get('value') or {}).get('currentRepresentation') or {})
            member = (representation.get('member') or {}).get('value')
        if not member:
            raise NoSittingMember()

        return [Representative(
            name=member.get('nameDisplayAs') or '',
            district=constituency,
            email='',
            photo=member.get('thumbnailUrl') or '',
            country='UK',
            title='Member of Parliament',
            type='mp',
            party=((member.get('latestParty') or {}).get('name')),
        )]
