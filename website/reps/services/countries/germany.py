# ABOUTME: Germany lookup: PLZ -> locality -> Bundestag constituencies -> mandate holders.
# ABOUTME: Emails follow the firstname.lastname@bundestag.de pattern; photos come from Wikidata.

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from ...constants import GERMANY_MAX_CONSTITUENCIES, dotted_email
from ...exceptions import NoElectoralDistrict, UpstreamUnavailable
from ...records import Locator, Representative
from ..abgeordnetenwatch_api_client import AbgeordnetenwatchAPI
from ..geocoding import LocalityLookup
from ..http import fetch_json
from ..parallel import map_concurrently
from .base import DirectoryAdapter, LocatorResolver

logger = logging.getLogger('reps.services')


@dataclass
class BundestagConstituencies:
    period_id: int
    locality: str
    constituencies: List[Dict[str, Any]] = field(default_factory=list)


class GermanyResolver(LocatorResolver[BundestagConstituencies]):
    """
    Resolve a Postleitzahl to the Bundestag constituencies of its locality.

    Constituencies are found by label search on the locality name. When the
    full name matches nothing ("Frankfurt am Main"), the first word is tried
    before giving up.
    """

    def __init__(self, localities: Optional[LocalityLookup] = None):
        self.localities = localities or LocalityLookup()

    def resolve(self, locator: Locator) -> BundestagConstituencies:
        city = self.localities.locality(locator.postal)

        period = AbgeordnetenwatchAPI.current_period()
        period_label = period['label'] or self._period_label(period['id'])

        constituencies = self._matching_constituencies(city, period_label)
        if not constituencies:
            first_word = city.split(' ')[0]
            if first_word != city:
                logger.info("No constituency for %s, retrying with %s", city, first_word)
                constituencies = self._matching_constituencies(first_word, period_label)

        if not constituencies:
            raise NoElectoralDistrict(f"No electoral districts found for {city}.")

        return BundestagConstituencies(period_id=period['id'], locality=city, constituencies=constituencies)

    @staticmethod
    def _period_label(period_id: int) -> str:
        try:
            return AbgeordnetenwatchAPI.get_parliament_period(period_id).get('label') or ''
        except UpstreamUnavailable:
            logger.warning("Could not fetch period label, using all constituencies", exc_info=True)
            return ''

    @staticmethod
    def _matching_constituencies(name: str, period_label: str) -> List[Dict[str, Any]]:
        found = AbgeordnetenwatchAPI.search_constituencies(name)
        if period_label:
            found = [c for c in found if period_label in (c.get('label') or '')]
        return found


class WikidataPhotoResolver:
    """Resolve a Wikidata item's image claim (P18) to a Wikimedia Commons URL."""

    WIKIDATA_API = 'https://www.wikidata.org/w/api.php'
    COMMONS_BASE = 'https://upload.wikimedia.org/wikipedia/commons'

    def photo_url(self, qid: Optional[str]) -> str:
        if not qid:
            return ''
        try:
            payload = fetch_json(self.WIKIDATA_API, params={
                'action': 'wbgetclaims',
                'property': 'P18',
                'entity': qid,
                'format': 'json',
            }) or {}
            claims = (payload.get('claims') or {}).get('P18') or []
            if not claims:
                return ''
            filename = claims[0]['mainsnak']['datavalue']['value']
        except Exception:
            logger.warning("Could not fetch Wikidata photo for %s", qid, exc_info=True)
            return ''
        return self.commons_url(filename)

    @classmethod
    def commons_url(cls, filename: str) -> str:
        encoded = filename.replace(' ', '_')
        digest = hashlib.md5(encoded.encode('utf-8')).hexdigest()
        path = quote(encoded, safe="!*'()")
        return f"{cls.COMMONS_BASE}/{digest[0]}/{digest[:2]}/{path}"


class GermanyDirectory(DirectoryAdapter[BundestagConstituencies]):
    country = 'DE'
    EMAIL_DOMAIN = 'bundestag.de'

    def __init__(self, photos: Optional[WikidataPhotoResolver] = None):
        self.photos = photos or WikidataPhotoResolver()

    def representatives(self, unit: BundestagConstituencies) -> List[Representative]:
        targets = unit.constituencies[:GERMANY_MAX_CONSTITUENCIES]
        per_constituency = map_concurrently(
            lambda constituency: self._constituency_members(unit.period_id, constituency),
            targets,
        )

        unique: Dict[str, Representative] = {}
        for members in per_constituency:
            for member in members:
                unique.setdefault(member.name, member)
        return list(unique.values())

    def _constituency_members(self, period_id: int, constituency: Dict[str, Any]) -> List[Representative]:
        mandates = AbgeordnetenwatchAPI.get_constituency_mandates(period_id, constituency['id'])
        district = constituency.get('label') or ''
        members = map_concurrently(lambda mandate: self._member(mandate, district), mandates)
        return [member for member in members if member is not None]

    def _member(self, mandate: Dict[str, Any], district: str) -> Optional[Representative]:
        politician = mandate.get('politician') or {}
        name = politician.get('label')
        if not name:
            return None

        email = ''
        photo = ''
        details = self._politician_details(politician.get('id'))
        if details:
            email = dotted_email(
                details.get('first_name'), details.get('last_name'), self.EMAIL_DOMAIN, transliterate=True,
            )
            photo = self.photos.photo_url(details.get('qid_wikidata'))

        return Representative(
            name=name,
            district=district,
            email=email,
            photo=photo,
            country='DE',
            title='MdB',
            type='mp',
            contact_form=politician.get('abgeordnetenwatch_url'),
            party=self._party(details or politician),
        )

    @staticmethod
    def _politician_details(politician_id: Optional[int]) -> Dict[str, Any]:
        if not politician_id:
            return {}
        try:
            return AbgeordnetenwatchAPI.get_politician(politician_id)
        except Exception:
            logger.warning("Could not fetch details for politician %s", politician_id, exc_info=True)
            return {}

    @staticmethod
    def _party(politician: Dict[str, Any]) -> Optional[str]:
        party = politician.get('party')
        if isinstance(party, dict):
            return party.get('label') or None
        return None
