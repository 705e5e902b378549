# ABOUTME: Per-country locator resolvers and directory adapters.
# ABOUTME: Live countries call providers directly; cached ones read the Cache Store.

from .australia import AustraliaDirectory, AustraliaResolver
from .base import CachedDirectory, CountryLookup, DirectoryAdapter, LocatorResolver
from .canada import CanadaDirectory, CanadaResolver
from .eu import CommitteeMembership, EUDirectory, EUResolver
from .france import FranceDirectory, FranceResolver
from .germany import GermanyDirectory, GermanyResolver
from .sweden import SwedenDirectory, SwedenResolver
from .uk import UKDirectory, UKResolver
from .us import USDirectory, USResolver

__all__ = [
    'AustraliaDirectory',
    'AustraliaResolver',
    'CachedDirectory',
    'CanadaDirectory',
    'CanadaResolver',
    'CommitteeMembership',
    'CountryLookup',
    'DirectoryAdapter',
    'EUDirectory',
    'EUResolver',
    'FranceDirectory',
    'FranceResolver',
    'GermanyDirectory',
    'GermanyResolver',
    'LocatorResolver',
    'SwedenDirectory',
    'SwedenResolver',
    'UKDirectory',
    'UKResolver',
    'USDirectory',
    'USResolver',
]
