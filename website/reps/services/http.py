# ABOUTME: Shared outbound HTTP helpers for all civic-data providers.
# ABOUTME: Translates transport and status failures into UpstreamUnavailable.

import logging
from urllib.parse import urlparse
from typing import Any, Dict, Optional

import requests

from ..exceptions import UpstreamUnavailable

logger = logging.getLogger('reps.services')

USER_AGENT = 'repfinder/1.0 (civic engagement tool)'
LIVE_TIMEOUT = 10
BULK_TIMEOUT = 30


def fetch(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: int = LIVE_TIMEOUT,
    headers: Optional[Dict[str, str]] = None,
    allow_not_found: bool = False,
) -> Optional[requests.Response]:
    """
    GET ``url`` and return the response.

    Returns None for a 404 when ``allow_not_found`` is set so adapters can map
    provider "unknown postcode" answers to their own errors.
    """
    request_headers = {'User-Agent': USER_AGENT}
    if headers:
        request_headers.update(headers)

    logger.debug("GET %s params=%s", url, params)
    try:
        response = requests.get(url, params=params, headers=request_headers, timeout=timeout)
    except requests.RequestException as exc:
        raise UpstreamUnavailable(f"Request to {_host(url)} failed: {exc}") from exc

    if allow_not_found and response.status_code == 404:
        return None
    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        raise UpstreamUnavailable(
            f"{_host(url)} returned HTTP {response.status_code}"
        ) from exc
    return response


def fetch_json(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    timeout: int = LIVE_TIMEOUT,
    allow_not_found: bool = False,
) -> Any:
    response = fetch(url, params=params, timeout=timeout, allow_not_found=allow_not_found)
    if response is None:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamUnavailable(f"{_host(url)} returned malformed JSON") from exc


def fetch_text(url: str, timeout: int = BULK_TIMEOUT, headers: Optional[Dict[str, str]] = None) -> str:
    response = fetch(url, timeout=timeout, headers=headers)
    return response.text


def _host(url: str) -> str:
    return urlparse(url).netloc or url
