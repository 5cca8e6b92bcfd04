import asyncio

from fastapi import APIRouter, HTTPException

from vibecheck.core import log_step

from ..state import get_session, get_view
from .schemas import PlaybackState, SelectRequest, VolumeRequest

router = APIRouter()


@router.get("", response_model=PlaybackState)
async def get_playback() -> PlaybackState:
    return PlaybackState.from_snapshot(get_session().snapshot())


@router.post("/select", response_model=PlaybackState)
async def select_track(body: SelectRequest) -> PlaybackState:
    """
    Row click: toggle the current preview or resolve and play another track.

    The response is sent once this selection has settled. If a newer
    selection supersedes it meanwhile, the snapshot reflects the newer one.
    """
    view = get_view()
    if view is None:
        raise HTTPException(status_code=404, detail="No playlist is open.")

    track = view.find_track(body.track_id)
    if track is None:
        raise HTTPException(
            status_code=404,
            detail=f"Track {body.track_id} is not part of the open playlist.",
        )

    session = get_session()
    log_step(f"Preview selection: {track.name} by {track.artist_names}")
    task = session.select(track)
    if task is not None:
        # asyncio.wait does not raise if the task gets cancelled by a newer selection.
        await asyncio.wait([task])

    return PlaybackState.from_snapshot(session.snapshot())


@router.post("/volume", response_model=PlaybackState)
async def set_volume(body: VolumeRequest) -> PlaybackState:
    session = get_session()
    session.set_volume(body.volume)
    return PlaybackState.from_snapshot(session.snapshot())


@router.post("/teardown", response_model=PlaybackState)
async def teardown_playback() -> PlaybackState:
    session = get_session()
    session.teardown()
    return PlaybackState.from_snapshot(session.snapshot())
