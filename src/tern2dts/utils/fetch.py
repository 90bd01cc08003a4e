"""
HTTP retrieval of the Tern document and documentation pages.
"""

import logging
from typing import Any, Optional
from urllib.parse import urljoin

import requests

from tern2dts.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0


def is_url(source: str) -> bool:
    """Check whether a source argument names a remote resource."""
    return source.startswith(("http://", "https://"))


def fetch_text(
    url: str,
    base_url: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Fetch a resource as text.

    Args:
        url: Absolute URL, or a path resolved against ``base_url``
        base_url: Base URL for relative paths
        timeout: Request timeout in seconds
        session: Optional session to reuse connections

    Returns:
        Response body
    """
    full_url = urljoin(base_url, url) if base_url else url
    logger.debug("GET %s", full_url)
    getter = session.get if session is not None else requests.get
    try:
        response = getter(full_url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch {full_url}: {e}") from e
    return response.text


def fetch_json(
    url: str,
    base_url: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> Any:
    """
    Fetch a JSON document.

    Args:
        url: Absolute URL, or a path resolved against ``base_url``
        base_url: Base URL for relative paths
        timeout: Request timeout in seconds
        session: Optional session to reuse connections

    Returns:
        Parsed JSON data
    """
    full_url = urljoin(base_url, url) if base_url else url
    logger.debug("GET %s", full_url)
    getter = session.get if session is not None else requests.get
    try:
        response = getter(full_url, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch {full_url}: {e}") from e
    except ValueError as e:
        raise FetchError(f"{full_url} did not return valid JSON: {e}") from e
