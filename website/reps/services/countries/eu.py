# ABOUTME: EU lookup: cached MEPs filtered by member state and committee membership, capped at ten.
# ABOUTME: Also scrapes the AFET/DROI/D-IR member pages and parses the Europarl full-list XML for sync.

import logging
import random
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional

from ...constants import EU_COMMITTEE_MAP_MIN_SIZE, EU_COMMITTEE_PAGES, EU_COUNTRY_TO_CODE, EU_MAX_CONTACTS, mep_email
from ...exceptions import CommitteeMapUnavailable, NoMatchFound, UpstreamUnavailable
from ...records import Locator, Representative
from ..cache import CACHE_KEYS, RepresentativeCache
from ..http import BULK_TIMEOUT, fetch_text
from ..parallel import gather, map_concurrently
from ..postal import eu_member_state
from .base import CachedDirectory, LocatorResolver

logger = logging.getLogger('reps.services')

EUROPARL_BASE = 'https://www.europarl.europa.eu'
FULL_LIST_URL = f'{EUROPARL_BASE}/meps/en/full-list/xml'
PHOTO_TEMPLATE = EUROPARL_BASE + '/mepphoto/{mep_id}.jpg'
PROFILE_TEMPLATE = EUROPARL_BASE + '/meps/en/{mep_id}'
FULL_LIST_TIMEOUT = 60
XML_HEADERS = {'Accept': 'application/xml, text/xml'}

MEP_ID_PATTERN = re.compile(r'meps/en/(\d+)')

CommitteeMap = Dict[str, List[str]]


class EUResolver(LocatorResolver[str]):
    def resolve(self, locator: Locator) -> str:
        return eu_member_state(locator.member_state)


class CommitteeMembership:
    """
    Committee membership map (MEP id -> committee codes).

    Reads go through ensure_fresh(), which rebuilds the map by scraping the
    committee pages when the cached copy is missing or implausibly small.
    """

    def __init__(self, cache: Optional[RepresentativeCache] = None):
        self.cache = cache or RepresentativeCache()

    def ensure_fresh(self) -> CommitteeMap:
        existing = self.cache.get_committee_map()
        if existing and len(existing) >= EU_COMMITTEE_MAP_MIN_SIZE:
            return existing

        logger.info("Committee map has %d entries, rebuilding", len(existing or {}))
        rebuilt = self.build()
        if rebuilt:
            self.cache.set_committee_map(rebuilt)
            return rebuilt
        if existing:
            logger.warning("Committee map rebuild returned nothing, keeping %d cached entries", len(existing))
            return existing
        raise CommitteeMapUnavailable()

    @staticmethod
    def build() -> CommitteeMap:
        codes = list(EU_COMMITTEE_PAGES)
        id_lists = map_concurrently(lambda code: member_ids(EU_COMMITTEE_PAGES[code]), codes)

        committee_map: CommitteeMap = {}
        for code, ids in zip(codes, id_lists):
            for mep_id in ids:
                committee_map.setdefault(mep_id, []).append(code)

        logger.info(
            "Committee pages: %s (%d unique MEPs)",
            ', '.join(f"{code}={len(ids)}" for code, ids in zip(codes, id_lists)),
            len(committee_map),
        )
        return committee_map


def member_ids(url: str) -> List[str]:
    """Scrape MEP ids from a committee or delegation member page; a failed page yields none."""
    try:
        html = fetch_text(url)
    except UpstreamUnavailable:
        logger.warning("Failed to fetch committee members from %s", url, exc_info=True)
        return []
    return list(dict.fromkeys(MEP_ID_PATTERN.findall(html)))


class EUDirectory(CachedDirectory[str]):
    country = 'EU'

    def __init__(self, cache: Optional[RepresentativeCache] = None, committees: Optional[CommitteeMembership] = None):
        super().__init__(cache)
        self.committees = committees or CommitteeMembership(self.cache)

    def representatives(self, member_state: str) -> List[Representative]:
        meps, committee_map = gather(
            lambda: self.records(CACHE_KEYS['EU_MEPS']),
            self.committees.ensure_fresh,
        )

        unique: Dict[str, Dict[str, Any]] = {}
        for mep in meps:
            mep_id = mep.get('mep_id')
            if mep.get('member_state') == member_state and mep_id and mep_id in committee_map:
                unique.setdefault(mep_id, mep)

        selected = list(unique.values())
        if len(selected) > EU_MAX_CONTACTS:
            selected = random.sample(selected, EU_MAX_CONTACTS)

        if not selected:
            raise NoMatchFound(f"No MEPs found for {member_state} in AFET, DROI, or Iran Delegation committees")

        return [self._representative(mep, committee_map[mep['mep_id']]) for mep in selected]

    @staticmethod
    def _representative(mep: Dict[str, Any], committees: List[str]) -> Representative:
        return Representative(
            name=mep['name'],
            district=mep.get('district', ''),
            email=mep.get('email', ''),
            photo=mep.get('photo', ''),
            country='EU',
            title='Member of European Parliament',
            type='mep',
            party=mep.get('political_group') or None,
            member_state=mep.get('member_state') or None,
            committee=', '.join(committees) or None,
            contact_form=PROFILE_TEMPLATE.format(mep_id=mep['mep_id']),
        )


# --------------------------------------
# Sync
# --------------------------------------

def fetch_meps() -> List[Dict[str, Any]]:
    xml_data = fetch_text(FULL_LIST_URL, timeout=FULL_LIST_TIMEOUT, headers=XML_HEADERS)
    if not xml_data:
        raise UpstreamUnavailable('Could not fetch EU MEP data')
    meps = parse_full_list(xml_data)
    if not meps:
        raise UpstreamUnavailable('Could not parse any MEP data')
    return meps


def parse_full_list(xml_data: str) -> List[Dict[str, Any]]:
    try:
        root = ET.fromstring(xml_data)
    except ET.ParseError as e:
        raise UpstreamUnavailable(f"Malformed MEP list: {e}") from e

    meps = []
    for node in root.iter('mep'):
        record = transform_mep(node)
        if record:
            meps.append(record)
    return meps


def transform_mep(node: ET.Element) -> Optional[Dict[str, Any]]:
    full_name = (node.findtext('fullName') or '').strip()
    mep_id = (node.findtext('id') or '').strip()
    if not full_name or not mep_id:
        return None

    country = (node.findtext('country') or '').strip()
    return {
        'name': full_name,
        'district': country,
        'email': mep_email(full_name),
        'photo': PHOTO_TEMPLATE.format(mep_id=mep_id),
        'type': 'mep',
        'member_state': EU_COUNTRY_TO_CODE.get(country, ''),
        'political_group': (node.findtext('politicalGroup') or '').strip(),
        'national_party': (node.findtext('nationalPoliticalGroup') or '').strip(),
        'mep_id': mep_id,
    }
