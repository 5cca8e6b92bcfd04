from dataclasses import dataclass

from vibecheck.core import PlaybackSnapshot, PlaybackStatus


@dataclass(frozen=True)
class RowState:
    is_current: bool
    is_playing: bool
    is_loading: bool


def row_state(snapshot: PlaybackSnapshot, track_id: str) -> RowState:
    """Render flags for one track row, derived only from the session snapshot."""
    is_target = snapshot.track_id == track_id
    return RowState(
        is_current=is_target
        and snapshot.status in (PlaybackStatus.PLAYING, PlaybackStatus.PAUSED),
        is_playing=is_target and snapshot.status == PlaybackStatus.PLAYING,
        is_loading=is_target and snapshot.status == PlaybackStatus.RESOLVING,
    )
