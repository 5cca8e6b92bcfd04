from typing import Optional

from pydantic import BaseModel, Field

from vibecheck.core import PlaybackSnapshot, PlaybackStatus


class PlaybackState(BaseModel):
    status: PlaybackStatus
    track_id: Optional[str] = None
    volume: float
    notice: Optional[str] = None

    @classmethod
    def from_snapshot(cls, snapshot: PlaybackSnapshot) -> "PlaybackState":
        return cls(
            status=snapshot.status,
            track_id=snapshot.track_id,
            volume=snapshot.volume,
            notice=snapshot.notice,
        )


class SelectRequest(BaseModel):
    track_id: str


class VolumeRequest(BaseModel):
    # Out-of-range values are clamped by the session, not rejected.
    volume: float = Field(allow_inf_nan=False)
