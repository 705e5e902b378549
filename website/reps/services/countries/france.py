# ABOUTME: France lookup from the cached Assemblée nationale deputies, filtered by department.
# ABOUTME: Also fetches and transforms the NosDéputés dataset for the sync job.

import logging
from typing import Any, Dict, List

from ...exceptions import NoMatchFound, UpstreamUnavailable
from ...records import Locator, Representative
from ..cache import CACHE_KEYS
from ..http import BULK_TIMEOUT, fetch_json
from ..postal import french_department
from .base import CachedDirectory, LocatorResolver

logger = logging.getLogger('reps.services')

DEPUTIES_IN_OFFICE_URL = 'https://www.nosdeputes.fr/deputes/enmandat/json'
ALL_DEPUTIES_URL = 'https://www.nosdeputes.fr/deputes/json'
PHOTO_TEMPLATE = 'https://www.assemblee-nationale.fr/dyn/deputes/{id_an}/image'
OFFICIAL_EMAIL_DOMAIN = 'assemblee-nationale.fr'


class FranceResolver(LocatorResolver[str]):
    def resolve(self, locator: Locator) -> str:
        return french_department(locator.postal)


class FranceDirectory(CachedDirectory[str]):
    country = 'FR'

    def representatives(self, department: str) -> List[Representative]:
        deputies = [d for d in self.records(CACHE_KEYS['FRANCE_DEPUTIES']) if d.get('dept_code') == department]
        if not deputies:
            raise NoMatchFound(f"No deputies found for department {department}")
        return [
            Representative(
                name=d['name'],
                district=d.get('district', ''),
                email=d.get('email', ''),
                photo=d.get('photo', ''),
                country='FR',
                title='Député(e)',
                type='mp',
            )
            for d in deputies
        ]


# --------------------------------------
# Sync
# --------------------------------------

def fetch_deputies() -> List[Dict[str, Any]]:
    """Fetch sitting deputies, falling back to the full list when that is empty."""
    deputies: List[Dict[str, Any]] = []
    try:
        deputies = (fetch_json(DEPUTIES_IN_OFFICE_URL, timeout=BULK_TIMEOUT) or {}).get('deputes') or []
    except UpstreamUnavailable:
        logger.warning("NosDéputés en mandat endpoint failed, trying full list", exc_info=True)

    if not deputies:
        deputies = (fetch_json(ALL_DEPUTIES_URL, timeout=BULK_TIMEOUT) or {}).get('deputes') or []

    if not deputies:
        raise UpstreamUnavailable('Could not fetch French deputy data')

    return [transform_deputy(entry.get('depute') or {}) for entry in deputies if entry.get('depute')]


def transform_deputy(deputy: Dict[str, Any]) -> Dict[str, Any]:
    id_an = deputy.get('id_an')
    return {
        'name': deputy.get('nom') or '',
        'district': f"{deputy.get('nom_circo', '')} ({deputy.get('num_circo', '')})",
        'email': _deputy_email(deputy),
        'photo': PHOTO_TEMPLATE.format(id_an=id_an) if id_an else '',
        'dept_code': _department_code(deputy.get('num_deptmt')),
    }


def _deputy_email(deputy: Dict[str, Any]) -> str:
    if deputy.get('email'):
        return deputy['email']
    addresses = [e.get('email') for e in deputy.get('emails') or [] if isinstance(e, dict) and e.get('email')]
    for address in addresses:
        if OFFICIAL_EMAIL_DOMAIN in address:
            return address
    return addresses[0] if addresses else ''


def _department_code(value: Any) -> str:
    code = str(value or '').strip().upper()
    if code.isdigit() and len(code) == 1:
        return code.zfill(2)
    return code
