"""Process-wide UI state shared by the API routes.

One playback session per process (there is one audio output), plus the
playlist view currently open. Both are plain module globals, created lazily;
tests swap them with set_session()/set_view().
"""

from typing import Optional

from vibecheck.preview import (
    ItunesPreviewSearch,
    PlaybackSession,
    PreviewResolver,
    mpv_audio_factory,
)
from vibecheck.views import PlaylistView

_session: Optional[PlaybackSession] = None
_view: Optional[PlaylistView] = None


def build_default_session() -> PlaybackSession:
    return PlaybackSession(
        resolver=PreviewResolver(ItunesPreviewSearch()),
        audio_factory=mpv_audio_factory,
    )


def get_session() -> PlaybackSession:
    global _session
    if _session is None:
        _session = build_default_session()
    return _session


def set_session(session: Optional[PlaybackSession]) -> None:
    global _session
    _session = session


def get_view() -> Optional[PlaylistView]:
    return _view


def set_view(view: Optional[PlaylistView]) -> None:
    global _view
    _view = view


def reset_state() -> None:
    """Tear down playback and forget the open view (logout, shutdown)."""
    global _view
    if _session is not None:
        _session.teardown()
    _view = None
