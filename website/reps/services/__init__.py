# ABOUTME: Service layer for the reps application.
# ABOUTME: Re-exports the lookup, cache and sync services used by views and commands.

from .abgeordnetenwatch_api_client import AbgeordnetenwatchAPI
from .cache import CACHE_KEYS, RepresentativeCache
from .query import RepresentativeQueryService
from .representative_sync import RepresentativeSyncService

__all__ = [
    'AbgeordnetenwatchAPI',
    'CACHE_KEYS',
    'RepresentativeCache',
    'RepresentativeQueryService',
    'RepresentativeSyncService',
]
