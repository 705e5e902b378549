# ABOUTME: Interfaces shared by the per-country resolvers and directory adapters.
# ABOUTME: A CountryLookup pairs one LocatorResolver with one DirectoryAdapter.

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

from ...records import Locator, Representative
from ..cache import RepresentativeCache

Unit = TypeVar('Unit')


class LocatorResolver(ABC, Generic[Unit]):
    """Turns a caller's locator into the administrative unit a directory understands."""

    @abstractmethod
    def resolve(self, locator: Locator) -> Unit:
        raise NotImplementedError


class DirectoryAdapter(ABC, Generic[Unit]):
    """Lists the representatives for an administrative unit."""

    country: str = ''

    @abstractmethod
    def representatives(self, unit: Unit) -> List[Representative]:
        raise NotImplementedError


class CachedDirectory(DirectoryAdapter[Unit]):
    """Directory that only reads pre-synced datasets from the Cache Store."""

    def __init__(self, cache: Optional[RepresentativeCache] = None):
        self.cache = cache or RepresentativeCache()

    def records(self, key: str) -> List[Dict[str, Any]]:
        return self.cache.get_dataset(key)


class CountryLookup:
    def __init__(self, country: str, resolver: LocatorResolver, directory: DirectoryAdapter):
        self.country = country
        self.resolver = resolver
        self.directory = directory

    def lookup(self, locator: Locator) -> List[Representative]:
        unit = self.resolver.resolve(locator)
        return self.directory.representatives(unit)

    def __repr__(self) -> str:
        return f"CountryLookup({self.country})"
