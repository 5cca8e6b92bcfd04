from typing import Dict, List, Optional

from pydantic import BaseModel

from vibecheck.preview import SortKey

from ..playback.schemas import PlaybackState


class PlaylistSummary(BaseModel):
    id: str
    name: str
    description: str = ""
    owner: str = ""
    tracks_total: int = 0
    image_url: Optional[str] = None


class TrackRow(BaseModel):
    id: str
    name: str
    artists: List[str]
    album: str
    album_art_url: Optional[str] = None
    duration_ms: int
    has_preview_url: bool
    features: Optional[Dict[str, Optional[float]]] = None
    is_current: bool
    is_playing: bool
    is_loading: bool


class PlaylistViewResponse(BaseModel):
    playlist_id: str
    sort: SortKey
    tracks: List[TrackRow]
    playback: PlaybackState


class ChartPoint(BaseModel):
    index: int
    energy: float
    valence: float


class VibeResponse(BaseModel):
    playlist_id: str
    vibe: str
    tags: List[str]
    suggested_artists: List[str]
