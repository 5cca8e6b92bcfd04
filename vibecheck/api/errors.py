from typing import NoReturn

from fastapi import HTTPException

from vibecheck.core import log_warning
from vibecheck.spotify import SpotifyAPIError, SpotifyAuthError, build_spotify_auth_url

from .state import reset_state


def raise_unauth(e: SpotifyAuthError) -> NoReturn:
    """
    Credential missing or rejected: drop back to the logged-out state.
    """
    reset_state()
    raise HTTPException(
        status_code=401,
        detail={
            "status": "unauthenticated",
            "message": str(e) or "Spotify authorization required.",
            "auth_url": build_spotify_auth_url(),
        },
    )


def raise_upstream(e: SpotifyAPIError) -> NoReturn:
    log_warning(f"Spotify request failed: {e}")
    raise HTTPException(
        status_code=502,
        detail={
            "status": "upstream_error",
            "message": str(e),
            "upstream_status": e.status_code,
        },
    )
