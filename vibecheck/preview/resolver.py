import asyncio
import logging

from vibecheck.core import NOT_FOUND, ResolutionResult, Track

from .search import PreviewSearch

logger = logging.getLogger(__name__)


class PreviewResolver:
    """
    Decide which audio URL, if any, can be played for a track.

    Policy, first match wins:
      1. the track's own preview_url (no network call)
      2. one fallback search keyed by "{name} {primary artist}"
      3. otherwise NOT_FOUND

    Nothing is cached: resolving the same track twice repeats step 2 when
    step 1 does not apply. resolve() never raises.
    """

    def __init__(self, search: PreviewSearch):
        self.search = search

    async def resolve(self, track: Track) -> ResolutionResult:
        if track.preview_url:
            return ResolutionResult.found_url(track.preview_url, source="spotify")

        try:
            # The search client is blocking; keep it off the event loop.
            url = await asyncio.to_thread(
                self.search.search, track.name, track.primary_artist
            )
        except Exception as e:
            logger.warning("Preview search raised for track %s: %s", track.id, e)
            return NOT_FOUND

        if not url:
            logger.info("No preview found for track %s.", track.id)
            return NOT_FOUND

        return ResolutionResult.found_url(url, source="search")
