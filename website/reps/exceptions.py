# ABOUTME: Error taxonomy for representative lookups and dataset syncs.
# ABOUTME: Each error knows its HTTP status so views can shape responses uniformly.

from typing import Any, Dict, Optional


class RepresentativeLookupError(Exception):
    """Base class for every failure the lookup layer reports to callers."""

    status_code = 500
    default_message = 'Could not find representative.'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        return {'error': self.message}


# 400 ----------------------------------------------------------------------

class InvalidInput(RepresentativeLookupError):
    status_code = 400
    default_message = 'Invalid input.'


class MissingParameter(InvalidInput):
    default_message = 'Missing required parameter.'


class UnsupportedCountry(InvalidInput):
    default_message = 'Unsupported country'


class InvalidFormat(InvalidInput):
    default_message = 'Invalid format.'


class InvalidPostcode(InvalidInput):
    default_message = 'Invalid postcode.'


class UnmappedPostalPrefix(InvalidInput):
    default_message = 'Could not determine electoral district from postal code'


class UnmappedPostcode(InvalidInput):
    default_message = 'Could not determine state from postcode'


class InvalidMemberState(InvalidInput):
    default_message = 'Invalid EU member state code'


# 404 ----------------------------------------------------------------------

class NotFound(RepresentativeLookupError):
    status_code = 404
    default_message = 'Location not found.'


class AddressNotFound(NotFound):
    default_message = 'Address not found.'


class NoSittingMember(NotFound):
    default_message = 'No sitting MP found.'


class NoElectoralDistrict(NotFound):
    default_message = 'No electoral districts found.'


class NoMatchFound(NotFound):
    default_message = 'No representatives found.'


# 503 ----------------------------------------------------------------------

class UpstreamUnavailable(RepresentativeLookupError):
    status_code = 503
    default_message = 'An upstream data provider is unavailable. Please try again shortly.'

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload['retryable'] = True
        return payload


class CommitteeMapUnavailable(UpstreamUnavailable):
    default_message = 'EU committee membership data could not be loaded. Please try again shortly.'


class DataNotCached(RepresentativeLookupError):
    """The dataset has never been synced or has expired."""

    status_code = 503
    default_message = 'Data not cached. Please run sync first.'
    retry_hint = 'Representative data is being updated. Please try again in a few minutes.'
    needs_sync = True

    def __init__(self, message: Optional[str] = None, cache_key: Optional[str] = None):
        super().__init__(message)
        self.cache_key = cache_key

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload['needsSync'] = True
        payload['retryAfter'] = self.retry_hint
        return payload
