"""Playlist tracks and audio features from the Spotify Web API.

Only the first page of a playlist is fetched (up to 100 items). Audio features
come back as a list parallel to the requested ids; a track without features
is represented by None rather than by an error.
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional

import requests

from vibecheck import config
from vibecheck.core import (
    AudioFeatureSet,
    Track,
    log_info,
    log_progress,
    log_step,
    log_warning,
)

from .auth import SpotifyAuthError, spotify_get, spotify_headers


def _track_from_item(t: Dict[str, Any]) -> Track:
    album = t.get("album") or {}
    images = album.get("images") or []
    return Track(
        id=t["id"],
        name=t.get("name") or "",
        artists=tuple(a.get("name", "") for a in t.get("artists") or []),
        album=album.get("name") or "",
        duration_ms=t.get("duration_ms") or 0,
        album_art_url=images[0].get("url") if images else None,
        preview_url=t.get("preview_url") or None,
        popularity=t.get("popularity"),
    )


def _features_from_item(item: Optional[Dict[str, Any]]) -> Optional[AudioFeatureSet]:
    if not item:
        return None
    known = AudioFeatureSet.field_names()
    return AudioFeatureSet(**{k: v for k, v in item.items() if k in known})


def get_playlist_tracks(token_info: Dict[str, Any], playlist_id: str) -> List[Track]:
    """
    Fetch the tracks of a playlist (first page only).

    Items whose track is null or has no id (removed or local files) are skipped.
    """
    log_step(f"Fetching tracks for playlist {playlist_id}...")
    data = spotify_get(
        token_info,
        f"{config.SPOTIFY_API_BASE}/playlists/{playlist_id}/tracks",
        "playlist tracks",
        params={"limit": config.SPOTIFY_PLAYLIST_TRACKS_LIMIT},
    )

    tracks: List[Track] = []
    for item in data.get("items") or []:
        t = (item or {}).get("track")
        if not t or not t.get("id"):
            continue
        tracks.append(_track_from_item(t))

    log_info(f"{len(tracks)} tracks fetched.")
    return tracks


def _fetch_features_chunk(
    token_info: Dict[str, Any], chunk: List[str]
) -> List[Optional[AudioFeatureSet]]:
    try:
        r = requests.get(
            f"{config.SPOTIFY_API_BASE}/audio-features",
            headers=spotify_headers(token_info),
            params={"ids": ",".join(chunk)},
            timeout=config.HTTP_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        log_warning(f"Audio features request failed ({e}); continuing without.")
        return [None] * len(chunk)

    if r.status_code == 401:
        raise SpotifyAuthError("Spotify rejected the token while fetching audio features.")
    if not r.ok:
        log_warning(
            f"Audio features unavailable (HTTP {r.status_code}); continuing without."
        )
        return [None] * len(chunk)

    items = r.json().get("audio_features") or []
    features = [_features_from_item(item) for item in items[: len(chunk)]]
    # Keep the result parallel to the request even if Spotify returns fewer entries.
    features.extend([None] * (len(chunk) - len(features)))
    return features


def get_audio_features(
    token_info: Dict[str, Any], track_ids: List[str]
) -> List[Optional[AudioFeatureSet]]:
    """
    Fetch audio features for `track_ids`, chunked at AUDIO_FEATURES_CHUNK_SIZE.

    The result has one entry per requested id, in order. A failed chunk yields
    None for each of its ids; only a rejected token (401) is raised.
    """
    size = config.AUDIO_FEATURES_CHUNK_SIZE
    chunks = [track_ids[i : i + size] for i in range(0, len(track_ids), size)]

    features: List[Optional[AudioFeatureSet]] = []
    for idx, chunk in enumerate(chunks, start=1):
        features.extend(_fetch_features_chunk(token_info, chunk))
        if len(chunks) > 1:
            log_progress(idx, len(chunks), prefix="  Audio features")

    return features


def load_playlist_with_features(
    token_info: Dict[str, Any], playlist_id: str
) -> List[Track]:
    """Fetch a playlist's tracks and attach their audio features."""
    tracks = get_playlist_tracks(token_info, playlist_id)
    if not tracks:
        return []

    features = get_audio_features(token_info, [t.id for t in tracks])
    return [replace(t, features=f) for t, f in zip(tracks, features)]
