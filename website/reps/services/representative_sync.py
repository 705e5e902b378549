# ABOUTME: Sync job that refreshes the cached France, Sweden, Australia and EU datasets.
# ABOUTME: Each dataset is fetched and written independently; one failure never blocks the rest.

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from tqdm import tqdm

from .cache import CACHE_KEYS, RepresentativeCache
from .countries import australia, eu, france, sweden

logger = logging.getLogger('reps.services')


class RepresentativeSyncService:
    """
    Refresh the Cache Store from the origin datasets.

    Every dataset entry is overwritten wholesale with a fresh expiry. The
    per-dataset outcome is recorded in ``results`` as ``{success, count}`` or
    ``{success: False, error}``; the last-sync timestamp is always updated.
    """

    # Result name -> (cache key, fetcher taking the progress flag), in sync order
    DATASETS = {
        'france': (CACHE_KEYS['FRANCE_DEPUTIES'], lambda progress: france.fetch_deputies()),
        'sweden': (CACHE_KEYS['SWEDEN_MPS'], lambda progress: sweden.fetch_members()),
        'australiaHouse': (CACHE_KEYS['AUSTRALIA_HOUSE'], lambda progress: australia.fetch_house_members()),
        'australiaSenators': (CACHE_KEYS['AUSTRALIA_SENATORS'], lambda progress: australia.fetch_senators(progress=progress)),
        'euMeps': (CACHE_KEYS['EU_MEPS'], lambda progress: eu.fetch_meps()),
        'euCommitteeMembers': (CACHE_KEYS['EU_COMMITTEE_MEMBERS'], lambda progress: eu.CommitteeMembership.build()),
    }

    def __init__(self, cache: Optional[RepresentativeCache] = None, progress: bool = False):
        self.cache = cache or RepresentativeCache()
        self.progress = progress
        self.results: Dict[str, Dict[str, Any]] = {}

    # --------------------------------------
    @classmethod
    def sync(
        cls,
        datasets: Optional[Iterable[str]] = None,
        cache: Optional[RepresentativeCache] = None,
        progress: bool = False,
    ) -> Dict[str, Any]:
        service = cls(cache=cache, progress=progress)
        synced_at = service._sync(list(datasets) if datasets else list(cls.DATASETS))
        return {'success': True, 'results': service.results, 'syncedAt': synced_at}

    def _sync(self, names: List[str]) -> str:
        unknown = [name for name in names if name not in self.DATASETS]
        if unknown:
            raise ValueError(f"Unknown dataset: {', '.join(unknown)}")

        for name in tqdm(names, desc="Syncing datasets", unit="dataset", disable=not self.progress):
            key, fetcher = self.DATASETS[name]
            self.results[name] = self._sync_dataset(name, key, fetcher)

        synced_at = self.cache.mark_synced()
        succeeded = sum(1 for result in self.results.values() if result['success'])
        logger.info("Sync finished at %s: %d/%d datasets refreshed", synced_at, succeeded, len(self.results))
        return synced_at

    def _sync_dataset(self, name: str, key: str, fetcher: Callable[[bool], Any]) -> Dict[str, Any]:
        logger.info("Syncing %s …", name)
        try:
            data = fetcher(self.progress)
            if key == CACHE_KEYS['EU_COMMITTEE_MEMBERS']:
                if not data:
                    raise ValueError('No committee members found on any committee page')
                self.cache.set_committee_map(data)
            else:
                self.cache.set_dataset(key, data)
        except Exception as e:
            logger.exception("Failed to sync %s", name)
            return {'success': False, 'error': str(e)}
        return {'success': True, 'count': len(data)}
