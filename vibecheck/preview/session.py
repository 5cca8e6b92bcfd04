"""Playback session: the single owner of the preview audio resource.

State machine
-------------
    idle ──select──▶ resolving ──found──▶ playing ◀──select──▶ paused
                        │                    │
                        └──not found──▶ unavailable
    playing ──resource ended──▶ idle
    any ──teardown──▶ idle

Every fresh selection bumps an intent version. A resolution only commits when
its version is still the current one, so the most recent select() wins no
matter in which order resolutions complete. Superseded resolutions are also
cancelled.

All methods must be called from the event loop thread. Audio handles that
signal from other threads marshal their callbacks onto the loop.
"""

import asyncio
import logging
import math
from typing import Callable, Optional

from vibecheck import config
from vibecheck.core import (
    NOT_FOUND,
    PlaybackSnapshot,
    PlaybackStatus,
    ResolutionResult,
    Track,
)

from .audio import AudioFactory, AudioHandle
from .resolver import PreviewResolver

logger = logging.getLogger(__name__)

NO_PREVIEW_NOTICE = "No preview available for this track."
PLAYBACK_FAILED_NOTICE = "Playback could not be started."

_ACTIVE_STATES = (PlaybackStatus.PLAYING, PlaybackStatus.PAUSED)


def clamp_volume(volume: float) -> float:
    volume = float(volume)
    if not math.isfinite(volume):
        raise ValueError("volume must be a finite number")
    return max(0.0, min(1.0, volume))


class PlaybackSession:
    def __init__(
        self,
        resolver: PreviewResolver,
        audio_factory: AudioFactory,
        volume: float = config.DEFAULT_VOLUME,
        on_notice: Optional[Callable[[str], None]] = None,
    ):
        self._resolver = resolver
        self._audio_factory = audio_factory
        self._on_notice = on_notice

        self._status = PlaybackStatus.IDLE
        self._target_track_id: Optional[str] = None
        self._resource: Optional[AudioHandle] = None
        self._volume = clamp_volume(volume)
        self._notice: Optional[str] = None

        self._intent = 0
        self._pending: Optional[asyncio.Task] = None

    # ---- read side ----

    @property
    def status(self) -> PlaybackStatus:
        return self._status

    @property
    def target_track_id(self) -> Optional[str]:
        return self._target_track_id

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def active_resource(self) -> Optional[AudioHandle]:
        return self._resource

    def snapshot(self) -> PlaybackSnapshot:
        return PlaybackSnapshot(
            status=self._status,
            track_id=self._target_track_id,
            volume=self._volume,
            notice=self._notice,
        )

    # ---- operations ----

    def select(self, track: Track) -> Optional[asyncio.Task]:
        """
        Handle a user click on `track`.

        Returns the resolution task when one is in flight for this track
        (new or already running), None when the click only toggled playback.
        """
        if track.id == self._target_track_id:
            if self._status in _ACTIVE_STATES:
                self._toggle()
                return None
            if self._status == PlaybackStatus.RESOLVING:
                return self._pending

        self._release_resource()
        self._cancel_pending()

        self._intent += 1
        self._target_track_id = track.id
        self._notice = None
        self._set_status(PlaybackStatus.RESOLVING)

        loop = asyncio.get_running_loop()
        self._pending = loop.create_task(self._resolve_and_commit(track, self._intent))
        return self._pending

    def set_volume(self, volume: float) -> float:
        self._volume = clamp_volume(volume)
        if self._resource is not None:
            try:
                self._resource.set_volume(self._volume)
            except Exception as e:
                logger.warning("Could not apply volume to active preview: %s", e)
        return self._volume

    def on_resource_ended(self, handle: AudioHandle) -> None:
        """
        Natural end of a preview. Signals from released handles are ignored.
        """
        if handle is not self._resource:
            logger.debug("Ignoring end signal from a released audio handle.")
            return

        logger.debug("Preview for %s ended.", self._target_track_id)
        self._release_resource()
        self._target_track_id = None
        self._set_status(PlaybackStatus.IDLE)

    def teardown(self) -> None:
        """
        Release everything the session holds. Safe from any state.
        """
        self._intent += 1
        self._cancel_pending()
        self._release_resource()
        self._target_track_id = None
        self._notice = None
        self._set_status(PlaybackStatus.IDLE)

    # ---- internals ----

    def _is_current(self, intent: int, track_id: str) -> bool:
        return intent == self._intent and track_id == self._target_track_id

    async def _resolve_and_commit(self, track: Track, intent: int) -> None:
        try:
            try:
                result = await self._resolver.resolve(track)
            except Exception as e:
                logger.warning("Preview resolution failed for %s: %s", track.id, e)
                result = NOT_FOUND

            if not self._is_current(intent, track.id):
                logger.info("Discarding stale preview resolution for %s.", track.id)
                return

            self._commit(track, result)
        finally:
            if self._pending is asyncio.current_task():
                self._pending = None

    def _commit(self, track: Track, result: ResolutionResult) -> None:
        if not result.found:
            self._set_status(PlaybackStatus.UNAVAILABLE)
            self._notify(NO_PREVIEW_NOTICE)
            return

        # At most one live resource.
        self._release_resource()

        try:
            handle = self._audio_factory(result.url, self.on_resource_ended)
            self._resource = handle
            handle.set_volume(self._volume)
            handle.play()
        except Exception as e:
            logger.warning("Playback of %s rejected: %s", track.id, e)
            self._release_resource()
            self._target_track_id = None
            self._set_status(PlaybackStatus.IDLE)
            self._notify(PLAYBACK_FAILED_NOTICE)
            return

        logger.info("Playing preview for %s (%s).", track.id, result.source)
        self._set_status(PlaybackStatus.PLAYING)

    def _toggle(self) -> None:
        if self._status == PlaybackStatus.PLAYING:
            action, next_status = self._resource.pause, PlaybackStatus.PAUSED
        else:
            action, next_status = self._resource.resume, PlaybackStatus.PLAYING

        try:
            action()
        except Exception as e:
            logger.warning("Could not toggle preview for %s: %s", self._target_track_id, e)
            return
        self._set_status(next_status)

    def _release_resource(self) -> None:
        handle, self._resource = self._resource, None
        if handle is None:
            return
        try:
            handle.stop()
        except Exception as e:
            logger.warning("Failed to stop audio resource: %s", e)

    def _cancel_pending(self) -> None:
        task, self._pending = self._pending, None
        if task is not None and not task.done():
            task.cancel()

    def _set_status(self, status: PlaybackStatus) -> None:
        if status != self._status:
            logger.debug(
                "Playback %s -> %s (track=%s)",
                self._status.value,
                status.value,
                self._target_track_id,
            )
        self._status = status

    def _notify(self, message: str) -> None:
        self._notice = message
        if self._on_notice is not None:
            self._on_notice(message)
