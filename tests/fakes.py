"""Test doubles shared by the session, view and API tests."""

import asyncio
from typing import Dict, List, Optional

from vibecheck.core import NOT_FOUND, AudioFeatureSet, ResolutionResult, Track
from vibecheck.preview import AudioHandle, AudioPlaybackError


def make_track(
    track_id: str,
    preview_url: Optional[str] = None,
    features: Optional[AudioFeatureSet] = None,
    name: Optional[str] = None,
    artists: tuple = ("Test Artist",),
) -> Track:
    return Track(
        id=track_id,
        name=name or f"Track {track_id}",
        artists=artists,
        album="Test Album",
        duration_ms=180_000,
        preview_url=preview_url,
        features=features,
    )


class FakeAudioHandle(AudioHandle):
    def __init__(self, url, on_ended, factory: "FakeAudioFactory"):
        self.url = url
        self.on_ended = on_ended
        self.factory = factory
        self.volume: Optional[float] = None
        self.volume_history: List[float] = []
        self.started = False
        self.paused = False
        self.stopped = False

    def play(self) -> None:
        if self.factory.fail_play:
            raise AudioPlaybackError("playback blocked by media policy")
        self.started = True

    def pause(self) -> None:
        if self.factory.fail_toggle:
            raise AudioPlaybackError("pause rejected")
        self.paused = True

    def resume(self) -> None:
        if self.factory.fail_toggle:
            raise AudioPlaybackError("resume rejected")
        self.paused = False

    def set_volume(self, volume: float) -> None:
        self.volume = volume
        self.volume_history.append(volume)

    def stop(self) -> None:
        self.stopped = True

    def finish(self) -> None:
        """Simulate the natural end of the clip."""
        self.on_ended(self)


class FakeAudioFactory:
    """
    Records every acquired handle and checks that the previous one was
    released before a new one is created.
    """

    def __init__(self):
        self.handles: List[FakeAudioHandle] = []
        self.fail_play = False
        self.fail_toggle = False
        self.fail_acquire: Optional[Exception] = None
        self.overlaps = 0

    def __call__(self, url, on_ended) -> FakeAudioHandle:
        if self.fail_acquire is not None:
            raise self.fail_acquire
        if self.live:
            self.overlaps += 1
        handle = FakeAudioHandle(url, on_ended, self)
        self.handles.append(handle)
        return handle

    @property
    def live(self) -> List[FakeAudioHandle]:
        return [h for h in self.handles if not h.stopped]


class FakeResolver:
    """
    Resolver with per-track URLs and optional gates to hold a resolution
    in flight until the test releases it.

    With ignore_cancel=True a cancelled resolution keeps waiting and still
    returns its result, like a network call that cannot be aborted.
    """

    def __init__(self, urls: Optional[Dict[str, Optional[str]]] = None, ignore_cancel=False):
        self.urls = urls or {}
        self.ignore_cancel = ignore_cancel
        self.calls: List[str] = []
        self.gates: Dict[str, asyncio.Event] = {}

    def hold(self, track_id: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[track_id] = gate
        return gate

    async def resolve(self, track: Track) -> ResolutionResult:
        self.calls.append(track.id)
        gate = self.gates.get(track.id)
        if gate is not None:
            try:
                await gate.wait()
            except asyncio.CancelledError:
                if not self.ignore_cancel:
                    raise
                await gate.wait()

        url = self.urls.get(track.id)
        if not url:
            return NOT_FOUND
        return ResolutionResult.found_url(url, source="spotify")
