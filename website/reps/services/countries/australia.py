# ABOUTME: Australia lookup: postcode -> state; senators from cache plus a live House call per postcode.
# ABOUTME: Also fetches the OpenAustralia House and Senate datasets for the sync job.

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from tqdm import tqdm

from ...constants import AUSTRALIA_STATES, dotted_email
from ...exceptions import NoMatchFound, UpstreamUnavailable
from ...records import Locator, Representative
from ..cache import CACHE_KEYS
from ..http import BULK_TIMEOUT, fetch_json
from ..parallel import gather
from ..postal import australian_state, validate_australian_postcode
from .base import CachedDirectory, LocatorResolver

logger = logging.getLogger('reps.services')

OPENAUSTRALIA_BASE = 'https://www.openaustralia.org.au'
REPRESENTATIVES_URL = f'{OPENAUSTRALIA_BASE}/api/getRepresentatives'
SENATORS_URL = f'{OPENAUSTRALIA_BASE}/api/getSenators'
EMAIL_DOMAIN = 'aph.gov.au'
SENATE_TIMEOUT = 15


@dataclass(frozen=True)
class AustralianPostcode:
    postcode: str
    state: str


def api_key() -> str:
    key = (getattr(settings, 'OPENAUSTRALIA_API_KEY', '') or '').strip()
    if not key:
        raise ImproperlyConfigured('OPENAUSTRALIA_API_KEY is not set')
    return key


def to_record(member: Dict[str, Any], district: str, rep_type: str, state: Optional[str] = None) -> Dict[str, Any]:
    """Normalize an OpenAustralia person into the cached record shape."""
    photo = member.get('image') or ''
    if photo.startswith('/'):
        photo = f"{OPENAUSTRALIA_BASE}{photo}"
    record = {
        'name': member.get('full_name') or member.get('name') or '',
        'district': district,
        'email': dotted_email(member.get('first_name'), member.get('last_name'), EMAIL_DOMAIN),
        'photo': photo,
        'type': rep_type,
        'person_id': member.get('person_id') or '',
        'phone': member.get('phone') or '',
    }
    if state:
        record['state'] = state
    return record


class AustraliaResolver(LocatorResolver[AustralianPostcode]):
    def resolve(self, locator: Locator) -> AustralianPostcode:
        postcode = validate_australian_postcode(locator.postal)
        return AustralianPostcode(postcode=postcode, state=australian_state(postcode))


class AustraliaDirectory(CachedDirectory[AustralianPostcode]):
    """
    Senators come from the cached Senate dataset filtered by state. House
    members are looked up live for the exact postcode, since the cached House
    list carries no postcode mapping; if that call fails the senators are
    still returned.
    """

    country = 'AU'

    def representatives(self, unit: AustralianPostcode) -> List[Representative]:
        # Cache misses are reported before a missing API key.
        house_cached, senators, house = gather(
            lambda: self.records(CACHE_KEYS['AUSTRALIA_HOUSE']),
            lambda: self.records(CACHE_KEYS['AUSTRALIA_SENATORS']),
            lambda: self._live_house_members(unit.postcode, api_key()),
        )
        logger.debug("AU %s: %d cached House members", unit.postcode, len(house_cached))

        reps = [self._house_representative(member) for member in house]
        reps.extend(
            self._senator(record)
            for record in senators
            if record.get('state') == unit.state
        )
        if not reps:
            raise NoMatchFound('No representatives found for this postcode')
        return reps

    @staticmethod
    def _live_house_members(postcode: str, key: str) -> List[Dict[str, Any]]:
        try:
            members = fetch_json(REPRESENTATIVES_URL, params={'key': key, 'postcode': postcode, 'output': 'js'})
        except UpstreamUnavailable:
            logger.warning("Failed to fetch House MPs for postcode %s", postcode, exc_info=True)
            return []
        return [to_record(m, m.get('constituency') or '', 'mp') for m in members or []]

    @staticmethod
    def _house_representative(record: Dict[str, Any]) -> Representative:
        person_id = record.get('person_id')
        return Representative(
            name=record['name'],
            district=record.get('district', ''),
            email=record.get('email', ''),
            photo=record.get('photo', ''),
            country='AU',
            title='Member of Parliament',
            type='mp',
            phone=record.get('phone') or None,
            contact_form=f"{OPENAUSTRALIA_BASE}/mp/{person_id}" if person_id else None,
        )

    @staticmethod
    def _senator(record: Dict[str, Any]) -> Representative:
        person_id = record.get('person_id')
        return Representative(
            name=record['name'],
            district=record.get('district', ''),
            email=record.get('email', ''),
            photo=record.get('photo', ''),
            country='AU',
            title='Senator',
            type='sen',
            phone=record.get('phone') or None,
            contact_form=f"{OPENAUSTRALIA_BASE}/senator/{person_id}" if person_id else None,
        )


# --------------------------------------
# Sync
# --------------------------------------

def fetch_house_members() -> List[Dict[str, Any]]:
    members = fetch_json(REPRESENTATIVES_URL, params={'key': api_key(), 'output': 'js'}, timeout=BULK_TIMEOUT) or []
    if not members:
        raise UpstreamUnavailable('Could not fetch Australian House representatives')
    return [to_record(m, m.get('constituency') or '', 'mp') for m in members]


def fetch_senators(progress: bool = False) -> List[Dict[str, Any]]:
    """Fetch senators state by state; a failing state is skipped."""
    key = api_key()
    senators: List[Dict[str, Any]] = []
    for state in tqdm(AUSTRALIA_STATES, desc="Australian senators", unit="state", disable=not progress):
        try:
            members = fetch_json(
                SENATORS_URL, params={'key': key, 'state': state, 'output': 'js'}, timeout=SENATE_TIMEOUT,
            ) or []
        except UpstreamUnavailable:
            logger.warning("Failed to fetch senators for %s", state, exc_info=True)
            continue
        senators.extend(to_record(m, state, 'sen', state=state) for m in members)

    if not senators:
        raise UpstreamUnavailable('Could not fetch Australian senators')
    return senators
