# ABOUTME: Cache Store for slow-changing legislator datasets and the EU committee map.
# ABOUTME: Wraps Django's cache framework; entries expire after REPS_CACHE_TTL (60 days).

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.core.cache import caches
from django.utils import timezone

from ..exceptions import DataNotCached

logger = logging.getLogger('reps.services')

CACHE_KEYS = {
    'FRANCE_DEPUTIES': 'reps:france:deputies',
    'SWEDEN_MPS': 'reps:sweden:mps',
    'AUSTRALIA_HOUSE': 'reps:australia:house',
    'AUSTRALIA_SENATORS': 'reps:australia:senators',
    'EU_MEPS': 'reps:eu:meps',
    'EU_COMMITTEE_MEMBERS': 'reps:eu:committee_members',
    'LAST_SYNC': 'reps:last_sync',
}

DEFAULT_TTL = 60 * 60 * 24 * 60

# Status summary name -> cache key, in reporting order
DATASET_KEYS = {
    'france': CACHE_KEYS['FRANCE_DEPUTIES'],
    'sweden': CACHE_KEYS['SWEDEN_MPS'],
    'australiaHouse': CACHE_KEYS['AUSTRALIA_HOUSE'],
    'australiaSenators': CACHE_KEYS['AUSTRALIA_SENATORS'],
    'euMeps': CACHE_KEYS['EU_MEPS'],
    'euCommitteeMembers': CACHE_KEYS['EU_COMMITTEE_MEMBERS'],
}


class RepresentativeCache:
    """
    Key-value store for pre-fetched datasets.

    Writes always replace the whole entry and reset its expiry. Reads never
    fall back to the origin: a missing or expired entry raises DataNotCached.
    """

    def __init__(self, alias: Optional[str] = None, ttl: Optional[int] = None):
        self.alias = alias or getattr(settings, 'REPS_CACHE_ALIAS', 'default')
        self.ttl = ttl or getattr(settings, 'REPS_CACHE_TTL', DEFAULT_TTL)

    @property
    def backend(self):
        return caches[self.alias]

    # --------------------------------------
    def get_dataset(self, key: str) -> List[Dict[str, Any]]:
        data = self.backend.get(key)
        if data is None:
            logger.info("Cache miss for %s", key)
            raise DataNotCached(cache_key=key)
        return list(data)

    def set_dataset(self, key: str, records: List[Dict[str, Any]]) -> None:
        self.backend.set(key, list(records), timeout=self.ttl)
        logger.info("Cached %d records under %s", len(records), key)

    # --------------------------------------
    def get_committee_map(self) -> Optional[Dict[str, List[str]]]:
        """Return the MEP id -> committee codes map, or None when absent or malformed."""
        data = self.backend.get(CACHE_KEYS['EU_COMMITTEE_MEMBERS'])
        if not isinstance(data, dict):
            return None
        return data

    def set_committee_map(self, committee_map: Dict[str, List[str]]) -> None:
        self.backend.set(CACHE_KEYS['EU_COMMITTEE_MEMBERS'], dict(committee_map), timeout=self.ttl)
        logger.info("Cached committee memberships for %d MEPs", len(committee_map))

    # --------------------------------------
    def mark_synced(self, when: Optional[datetime] = None) -> str:
        stamp = (when or timezone.now()).isoformat()
        self.backend.set(CACHE_KEYS['LAST_SYNC'], stamp, timeout=self.ttl)
        return stamp

    def last_synced(self) -> Optional[str]:
        return self.backend.get(CACHE_KEYS['LAST_SYNC'])

    def summary(self) -> Dict[str, Any]:
        status: Dict[str, Any] = {'lastSync': self.last_synced()}
        for name, key in DATASET_KEYS.items():
            data = self.backend.get(key)
            status[name] = {
                'cached': data is not None,
                'count': len(data) if data is not None else 0,
            }
        return status
