# ABOUTME: Sweden lookup from the cached Riksdag member list, filtered by valkrets.
# ABOUTME: Also fetches and transforms the Riksdagen open-data person list for the sync job.

from typing import Any, Dict, List

from ...exceptions import NoMatchFound, UpstreamUnavailable
from ...records import Locator, Representative
from ..cache import CACHE_KEYS
from ..http import BULK_TIMEOUT, fetch_json
from ..postal import swedish_valkrets
from .base import CachedDirectory, LocatorResolver

PERSON_LIST_URL = 'https://data.riksdagen.se/personlista/'
SERVING_STATUS = 'Tjänstgörande riksdagsledamot'
EMAIL_CODE = 'Officiell e-postadress'


class SwedenResolver(LocatorResolver[str]):
    def resolve(self, locator: Locator) -> str:
        return swedish_valkrets(locator.postal)


class SwedenDirectory(CachedDirectory[str]):
    country = 'SE'

    def representatives(self, valkrets: str) -> List[Representative]:
        members = [m for m in self.records(CACHE_KEYS['SWEDEN_MPS']) if m.get('valkrets') == valkrets]
        if not members:
            raise NoMatchFound(f"No MPs found for {valkrets}")
        return [
            Representative(
                name=m['name'],
                district=m.get('district', ''),
                email=m.get('email', ''),
                photo=m.get('photo', ''),
                country='SE',
                title='Riksdagsledamot',
                type='mp',
            )
            for m in members
        ]


# --------------------------------------
# Sync
# --------------------------------------

def fetch_members() -> List[Dict[str, Any]]:
    payload = fetch_json(PERSON_LIST_URL, params={'utformat': 'json', 'rdlstatus': 'tjg'}, timeout=BULK_TIMEOUT) or {}
    persons = (payload.get('personlista') or {}).get('person') or []
    if isinstance(persons, dict):
        persons = [persons]
    if not persons:
        raise UpstreamUnavailable('Could not fetch Swedish MP data')

    return [transform_member(p) for p in persons if p.get('status') == SERVING_STATUS]


def transform_member(person: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'name': f"{person.get('tilltalsnamn', '')} {person.get('efternamn', '')}".strip(),
        'district': person.get('valkrets') or '',
        'email': _official_email(person),
        'photo': person.get('bild_url_192') or '',
        'valkrets': person.get('valkrets') or '',
    }


def _official_email(person: Dict[str, Any]) -> str:
    entries = (person.get('personuppgift') or {}).get('uppgift')
    if isinstance(entries, dict):
        entries = [entries]

    email = ''
    for entry in entries or []:
        if isinstance(entry, dict) and entry.get('kod') == EMAIL_CODE:
            value = entry.get('uppgift')
            if isinstance(value, list):
                value = value[0] if value else ''
            email = value or ''
            break
    # Riksdagen obfuscates addresses as "name[på]riksdagen.se".
    return email.replace('[på]', '@')
