"""Public façade for the vibecheck.spotify package.

This module exposes the Spotify Web API integration: the credential supplier
(token loading, login URL, code exchange) and the read-only catalog helpers
for playlists, tracks and audio features. Callers should import these symbols
from this façade instead of the internal auth, playlists or tracks modules.
"""

from .auth import (
    SpotifyAPIError,
    SpotifyAuthError,
    SpotifyTokenMissing,
    build_spotify_auth_url,
    clear_spotify_token,
    exchange_code_for_token,
    load_spotify_token,
    spotify_headers,
)
from .playlists import get_current_user_profile, list_user_playlists
from .tracks import get_audio_features, get_playlist_tracks, load_playlist_with_features

__all__ = [
    "build_spotify_auth_url",
    "exchange_code_for_token",
    "load_spotify_token",
    "clear_spotify_token",
    "spotify_headers",
    "SpotifyAuthError",
    "SpotifyTokenMissing",
    "SpotifyAPIError",
    "get_current_user_profile",
    "list_user_playlists",
    "get_playlist_tracks",
    "get_audio_features",
    "load_playlist_with_features",
]
