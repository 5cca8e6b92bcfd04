"""Fallback preview search against a public music catalog.

Used only when a Spotify track carries no preview_url. Every failure is
swallowed and reported as "no result", the same way the external lookups in
this codebase treat optional enrichment.
"""

from abc import ABC, abstractmethod
import logging
from typing import Optional

import requests

from vibecheck import config

logger = logging.getLogger(__name__)


class PreviewSearch(ABC):
    """
    Keyword search returning the preview URL of the best hit, if any.
    """

    id: str

    @abstractmethod
    def search(self, name: str, artist: str) -> Optional[str]:
        raise NotImplementedError


def build_search_term(name: str, artist: str) -> str:
    return f"{name} {artist}".strip()


class ItunesPreviewSearch(PreviewSearch):
    """
    Preview lookup through the iTunes Search API.

    One request per call, first result only, no retries.
    """

    id = "itunes"

    def __init__(
        self,
        url: str = config.PREVIEW_SEARCH_URL,
        country: str = config.PREVIEW_SEARCH_COUNTRY,
        timeout: float = config.HTTP_TIMEOUT_SECONDS,
    ):
        self.url = url
        self.country = country
        self.timeout = timeout

    def search(self, name: str, artist: str) -> Optional[str]:
        term = build_search_term(name, artist)
        if not term:
            return None

        params = {
            "term": term,
            "media": "music",
            "entity": "song",
            "limit": 1,
            "country": self.country,
        }

        try:
            r = requests.get(self.url, params=params, timeout=self.timeout)
            if not r.ok:
                logger.debug("Preview search HTTP %s for %r", r.status_code, term)
                return None
            results = r.json().get("results") or []
            if not results:
                return None
            return results[0].get("previewUrl") or None
        except Exception as e:
            logger.debug("Preview search failed for %r: %s", term, e)
            return None
