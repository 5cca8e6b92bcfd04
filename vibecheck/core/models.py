from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class AudioFeatureSet:
    """
    Spotify audio features for one track.

    Most values are in [0, 1]; tempo is in BPM and loudness in dB.
    A field Spotify did not return stays None; callers pick the default
    through get() instead of relying on falsy values.
    """

    danceability: Optional[float] = None
    energy: Optional[float] = None
    valence: Optional[float] = None
    tempo: Optional[float] = None
    acousticness: Optional[float] = None
    instrumentalness: Optional[float] = None
    liveness: Optional[float] = None
    speechiness: Optional[float] = None
    loudness: Optional[float] = None
    key: Optional[int] = None
    mode: Optional[int] = None

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def get(self, name: str, default: float = 0.0) -> float:
        if name not in self.field_names():
            raise KeyError(name)
        value = getattr(self, name)
        return default if value is None else value


@dataclass(frozen=True)
class Track:
    id: str
    name: str
    artists: Tuple[str, ...]
    album: str
    duration_ms: int
    album_art_url: Optional[str] = None
    preview_url: Optional[str] = None
    popularity: Optional[int] = None
    features: Optional[AudioFeatureSet] = None

    @property
    def primary_artist(self) -> str:
        return self.artists[0] if self.artists else ""

    @property
    def artist_names(self) -> str:
        return ", ".join(self.artists)


@dataclass(frozen=True)
class ResolutionResult:
    """
    Outcome of resolving a playable preview URL for a track.

    - url    : the playable URL, None when nothing was found
    - source : "spotify" (track's own preview field) or "search" (fallback)
    """

    url: Optional[str] = None
    source: Optional[str] = None

    @property
    def found(self) -> bool:
        return bool(self.url)

    @classmethod
    def found_url(cls, url: str, source: str) -> "ResolutionResult":
        return cls(url=url, source=source)


NOT_FOUND = ResolutionResult()


class PlaybackStatus(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    PLAYING = "playing"
    PAUSED = "paused"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class PlaybackSnapshot:
    """Read-only view of the playback session handed to the UI layer."""

    status: PlaybackStatus
    track_id: Optional[str]
    volume: float
    notice: Optional[str] = None
