"""
Knowledge Augmentation Module

External lookup used by the web mode. A lookup resolves to exactly one of:

- LookupHit:      the source had an article with a non-empty extract
- NotFound:       the source has nothing under that title
- TransportError: the request failed (network, bad status, bad payload)

Anything with a ``lookup(query) -> LookupResult`` method can stand in for
WikipediaLookup, which is what tests do.
"""

import logging
from dataclasses import dataclass
from typing import Union
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)


@dataclass
class LookupHit:
    """A summary fetched from an external source."""
    title: str
    extract: str
    source: str = "Wikipedia"
    url: str = ""


@dataclass
class NotFound:
    query: str


@dataclass
class TransportError:
    query: str
    reason: str


LookupResult = Union[LookupHit, NotFound, TransportError]


class WikipediaLookup:
    """
    Wikipedia API interface for knowledge extraction.

    Uses Wikipedia's REST summary endpoint, which needs no authentication.
    The query is used as the article title as-is.
    """

    source_name = "Wikipedia"

    def __init__(self, timeout: float = 5.0, session: requests.Session = None):
        self.base_url = "https://en.wikipedia.org/api/rest_v1/page/summary/"
        self.user_agent = "Brainnova/1.0 (Personal fact memory)"
        self.timeout = timeout
        self.session = session

    def lookup(self, query: str) -> LookupResult:
        """
        Fetch the summary of the article titled ``query``.

        Args:
            query: Article title (spaces are fine)

        Returns:
            LookupHit, NotFound or TransportError
        """
        if not query:
            return NotFound(query)

        url = self.base_url + quote(query)
        headers = {'User-Agent': self.user_agent}
        http = self.session or requests

        try:
            response = http.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Wikipedia lookup failed for '{query}': {e}")
            return TransportError(query, str(e))

        if response.status_code == 404:
            logger.debug(f"No Wikipedia article for '{query}'")
            return NotFound(query)

        if response.status_code != 200:
            logger.warning(f"Wikipedia returned HTTP {response.status_code} for '{query}'")
            return TransportError(query, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Wikipedia sent an unreadable payload for '{query}': {e}")
            return TransportError(query, "invalid JSON")

        extract = data.get('extract') if isinstance(data, dict) else None
        if not extract:
            return TransportError(query, "missing extract")

        return LookupHit(
            title=data.get('title') or query,
            extract=extract,
            source=self.source_name,
            url=((data.get('content_urls') or {}).get('desktop') or {}).get('page', ''),
        )
