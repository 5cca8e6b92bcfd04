from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from starlette.concurrency import run_in_threadpool

from vibecheck.core import Track, log_info
from vibecheck.insights import VibeSummaryError, energy_valence_points
from vibecheck.preview import RowState, SortKey
from vibecheck.spotify import (
    SpotifyAPIError,
    SpotifyAuthError,
    list_user_playlists,
    load_playlist_with_features,
    load_spotify_token,
)
from vibecheck.views import PlaylistView

from ..errors import raise_unauth, raise_upstream
from ..playback.schemas import PlaybackState
from ..state import get_session, get_view, set_view
from .schemas import (
    ChartPoint,
    PlaylistSummary,
    PlaylistViewResponse,
    TrackRow,
    VibeResponse,
)

router = APIRouter()


def _track_row(track: Track, state: RowState) -> TrackRow:
    return TrackRow(
        id=track.id,
        name=track.name,
        artists=list(track.artists),
        album=track.album,
        album_art_url=track.album_art_url,
        duration_ms=track.duration_ms,
        has_preview_url=bool(track.preview_url),
        features=asdict(track.features) if track.features is not None else None,
        is_current=state.is_current,
        is_playing=state.is_playing,
        is_loading=state.is_loading,
    )


def _view_response(view: PlaylistView) -> PlaylistViewResponse:
    return PlaylistViewResponse(
        playlist_id=view.playlist_id,
        sort=view.sort_key,
        tracks=[_track_row(t, s) for t, s in view.rows()],
        playback=PlaybackState.from_snapshot(view.session.snapshot()),
    )


def _require_view(playlist_id: str) -> PlaylistView:
    view = get_view()
    if view is None or view.playlist_id != playlist_id:
        raise HTTPException(
            status_code=404,
            detail=f"Playlist {playlist_id} is not open.",
        )
    return view


@router.get("", response_model=List[PlaylistSummary])
async def get_playlists() -> List[PlaylistSummary]:
    try:
        token_info = load_spotify_token()
        playlists = await run_in_threadpool(list_user_playlists, token_info)
    except SpotifyAuthError as e:
        raise_unauth(e)
    except SpotifyAPIError as e:
        raise_upstream(e)

    return [PlaylistSummary(**p) for p in playlists]


@router.get("/{playlist_id}", response_model=PlaylistViewResponse)
async def open_playlist(
    playlist_id: str,
    sort: Optional[SortKey] = None,
    refresh: bool = False,
) -> PlaylistViewResponse:
    """
    Open (or re-render) a playlist screen.

    Opening a different playlist, or forcing a refresh, loads tracks and
    audio features from Spotify and stops any preview. Re-rendering the open
    playlist only applies the requested ordering.
    """
    view = get_view()
    if view is None or view.playlist_id != playlist_id or refresh:
        try:
            token_info = load_spotify_token()
            tracks = await run_in_threadpool(
                load_playlist_with_features, token_info, playlist_id
            )
        except SpotifyAuthError as e:
            raise_unauth(e)
        except SpotifyAPIError as e:
            raise_upstream(e)

        view = PlaylistView.open(playlist_id, tracks, get_session())
        set_view(view)

    if sort is not None:
        view.set_sort(sort)

    return _view_response(view)


@router.get("/{playlist_id}/chart", response_model=List[ChartPoint])
async def get_playlist_chart(playlist_id: str, limit: int = 50) -> List[ChartPoint]:
    view = _require_view(playlist_id)
    return [ChartPoint(**p) for p in energy_valence_points(view.tracks, limit=limit)]


@router.post("/{playlist_id}/vibe", response_model=VibeResponse)
async def analyze_vibe(playlist_id: str) -> VibeResponse:
    view = _require_view(playlist_id)
    already = view.summary is not None
    try:
        summary = await run_in_threadpool(view.summarize_vibe)
    except VibeSummaryError as e:
        raise HTTPException(
            status_code=502,
            detail={"status": "vibe_unavailable", "message": str(e)},
        )

    if not already:
        log_info(f"Vibe summary ready for playlist {playlist_id}: {summary.tags}")

    return VibeResponse(
        playlist_id=playlist_id,
        vibe=summary.vibe,
        tags=summary.tags,
        suggested_artists=summary.suggested_artists,
    )
