# ABOUTME: API client for Bundestag periods, constituencies and mandates from Abgeordnetenwatch.
# ABOUTME: Thin wrapper over the public Abgeordnetenwatch v2 API used by the German adapter.

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..constants import BUNDESTAG_FALLBACK_PERIOD_ID, BUNDESTAG_PARLIAMENT_ID
from ..exceptions import UpstreamUnavailable
from .http import fetch_json

logger = logging.getLogger('reps.services')


class AbgeordnetenwatchAPI:
    """Thin client for the public Abgeordnetenwatch v2 API."""

    BASE_URL = "https://www.abgeordnetenwatch.de/api/v2"

    @classmethod
    def _request(cls, endpoint: str, params: Optional[Dict] = None) -> Dict:
        payload = fetch_json(f"{cls.BASE_URL}/{endpoint}", params=params or {})
        return payload or {}

    @classmethod
    def get_parliament_periods(cls, parliament_id: int = BUNDESTAG_PARLIAMENT_ID,
                               period_type: str = 'legislature') -> List[Dict]:
        return cls._request('parliament-periods', {'parliament': parliament_id, 'type': period_type}).get('data') or []

    @classmethod
    def get_parliament_period(cls, period_id: int) -> Dict:
        return cls._request(f'parliament-periods/{period_id}').get('data') or {}

    @classmethod
    def search_constituencies(cls, label: str) -> List[Dict]:
        """Constituencies whose label contains ``label``."""
        return cls._request('constituencies', {'label[cn]': label}).get('data') or []

    @classmethod
    def get_constituency_mandates(cls, parliament_period_id: int, constituency_id: int) -> List[Dict]:
        return cls._request('candidacies-mandates', {
            'parliament_period': parliament_period_id,
            'constituency': constituency_id,
        }).get('data') or []

    @classmethod
    def get_politician(cls, politician_id: int) -> Dict:
        return cls._request(f'politicians/{politician_id}').get('data') or {}

    @classmethod
    def current_period(cls) -> Dict[str, Any]:
        """
        Return ``{'id': …, 'label': …}`` for the newest Bundestag legislature.

        Falls back to the known period id when the period list cannot be
        loaded; the label is then left empty.
        """
        try:
            periods = cls.get_parliament_periods()
        except UpstreamUnavailable:
            logger.warning(
                "Could not fetch latest parliament period. Using fallback ID %s",
                BUNDESTAG_FALLBACK_PERIOD_ID,
                exc_info=True,
            )
            periods = []

        if not periods:
            return {'id': BUNDESTAG_FALLBACK_PERIOD_ID, 'label': ''}

        newest = sorted(periods, key=cls._period_start, reverse=True)[0]
        return {'id': newest.get('id', BUNDESTAG_FALLBACK_PERIOD_ID), 'label': newest.get('label') or ''}

    @staticmethod
    def _period_start(period: Dict) -> datetime:
        value = period.get('start_date_period') or period.get('election_date') or '2000-01-01'
        try:
            return datetime.fromisoformat(value)
        except (TypeError, ValueError):
            return datetime(2000, 1, 1)
