# ABOUTME: Request-facing lookup: (country, locator) -> validated list of representatives.
# ABOUTME: Dispatches to the country's resolver/directory pair and drops incomplete records.

import logging
from typing import Dict, List, Optional

from ..constants import SUPPORTED_COUNTRIES
from ..exceptions import NoMatchFound, UnsupportedCountry
from ..records import Locator, Representative
from .cache import RepresentativeCache
from .countries import (
    AustraliaDirectory,
    AustraliaResolver,
    CanadaDirectory,
    CanadaResolver,
    CountryLookup,
    EUDirectory,
    EUResolver,
    FranceDirectory,
    FranceResolver,
    GermanyDirectory,
    GermanyResolver,
    SwedenDirectory,
    SwedenResolver,
    UKDirectory,
    UKResolver,
    USDirectory,
    USResolver,
)
from .postal import require

logger = logging.getLogger('reps.services')


def default_lookups(cache: Optional[RepresentativeCache] = None) -> Dict[str, CountryLookup]:
    cache = cache or RepresentativeCache()
    return {
        'CA': CountryLookup('CA', CanadaResolver(), CanadaDirectory()),
        'US': CountryLookup('US', USResolver(), USDirectory()),
        'UK': CountryLookup('UK', UKResolver(), UKDirectory()),
        'DE': CountryLookup('DE', GermanyResolver(), GermanyDirectory()),
        'FR': CountryLookup('FR', FranceResolver(), FranceDirectory(cache)),
        'SE': CountryLookup('SE', SwedenResolver(), SwedenDirectory(cache)),
        'AU': CountryLookup('AU', AustraliaResolver(), AustraliaDirectory(cache)),
        'EU': CountryLookup('EU', EUResolver(), EUDirectory(cache)),
    }


class RepresentativeQueryService:
    """
    Single entry point for representative lookups.

    Validates the country and locator, runs the country's lookup and returns
    only complete records. Every failure surfaces as a
    RepresentativeLookupError subclass carrying its HTTP status.
    """

    def __init__(self, lookups: Optional[Dict[str, CountryLookup]] = None, cache: Optional[RepresentativeCache] = None):
        self.lookups = lookups if lookups is not None else default_lookups(cache)

    def find(self, country: Optional[str], locator: Locator) -> List[Representative]:
        code = require(country, 'country').strip().upper()
        if code not in SUPPORTED_COUNTRIES or code not in self.lookups:
            raise UnsupportedCountry()

        # EU uses memberState; US geocodes the full street address
        if code not in ('EU', 'US'):
            require(locator.postal, 'postal')

        logger.debug("Looking up %s representatives for %s", code, locator)
        reps = [rep for rep in self.lookups[code].lookup(locator) if rep.is_complete]
        if not reps:
            raise NoMatchFound()
        return reps
