"""Public façade for the vibecheck.preview package.

This module exposes the preview engine: resolving a playable URL for a track,
the playback session that owns the single audio resource, track ordering by
audio feature, and the per-row view flags derived from the session.
"""

from .audio import (
    AudioFactory,
    AudioHandle,
    AudioPlaybackError,
    MpvAudioHandle,
    mpv_audio_factory,
)
from .resolver import PreviewResolver
from .search import ItunesPreviewSearch, PreviewSearch, build_search_term
from .session import (
    NO_PREVIEW_NOTICE,
    PLAYBACK_FAILED_NOTICE,
    PlaybackSession,
    clamp_volume,
)
from .sorting import SortKey, feature_value, sort_tracks
from .view_state import RowState, row_state

__all__ = [
    "AudioHandle",
    "AudioFactory",
    "AudioPlaybackError",
    "MpvAudioHandle",
    "mpv_audio_factory",
    "PreviewSearch",
    "ItunesPreviewSearch",
    "build_search_term",
    "PreviewResolver",
    "PlaybackSession",
    "clamp_volume",
    "NO_PREVIEW_NOTICE",
    "PLAYBACK_FAILED_NOTICE",
    "SortKey",
    "feature_value",
    "sort_tracks",
    "RowState",
    "row_state",
]
