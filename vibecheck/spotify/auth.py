"""Spotify credential supplier.

The rest of the application treats this module as a black box that yields a
bearer token or signals that the user must log in again. Tokens come from the
authorization-code flow and are persisted to SPOTIFY_TOKEN_FILE. There is no
refresh step: an expired token is reported as missing.
"""

import time
from typing import Any, Dict
from urllib.parse import urlencode

import requests

from vibecheck import config
from vibecheck.core import (
    VibeCheckError,
    log_info,
    log_warning,
    read_json,
    remove_file,
    write_json,
)

# Treat tokens as expired slightly before Spotify does.
EXPIRY_MARGIN_SECONDS = 60


class SpotifyAuthError(VibeCheckError):
    """The Spotify token was rejected (invalid, revoked or expired)."""


class SpotifyTokenMissing(SpotifyAuthError):
    """No usable token is available; the user must log in."""


class SpotifyAPIError(VibeCheckError):
    """A Spotify catalog request failed for a reason other than credentials."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def build_spotify_auth_url() -> str:
    params = {
        "response_type": "code",
        "client_id": config.SPOTIFY_CLIENT_ID or "",
        "scope": " ".join(config.SCOPES),
        "redirect_uri": config.SPOTIFY_REDIRECT_URI,
    }
    return f"{config.SPOTIFY_AUTH_URL}?{urlencode(params)}"


def exchange_code_for_token(code: str) -> Dict[str, Any]:
    """
    Exchange an authorization code for a token and persist it.
    """
    token_data = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": config.SPOTIFY_REDIRECT_URI,
        "client_id": config.SPOTIFY_CLIENT_ID,
        "client_secret": config.SPOTIFY_CLIENT_SECRET,
    }

    try:
        r = requests.post(
            config.SPOTIFY_TOKEN_URL,
            data=token_data,
            timeout=config.HTTP_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise SpotifyAuthError(f"Token exchange failed: {e}") from e

    if not r.ok:
        raise SpotifyAuthError(
            f"Token exchange rejected by Spotify (HTTP {r.status_code})."
        )

    token_info = r.json()
    token_info["timestamp"] = int(time.time())
    write_json(config.SPOTIFY_TOKEN_FILE, token_info)
    log_info("Spotify token stored.")
    return token_info


def load_spotify_token() -> Dict[str, Any]:
    """
    Load the persisted Spotify token.

    Raises SpotifyTokenMissing when there is no token, when the file is
    unreadable, or when the token has expired.
    """

    def _on_error(e: Exception) -> None:
        log_warning("Spotify token file is corrupted; ignoring it.")

    token_info = read_json(config.SPOTIFY_TOKEN_FILE, default=None, on_error=_on_error)
    if not isinstance(token_info, dict) or not token_info.get("access_token"):
        raise SpotifyTokenMissing("Spotify authorization required.")

    expires_in = token_info.get("expires_in", 3600)
    age = int(time.time()) - token_info.get("timestamp", 0)
    if age > expires_in - EXPIRY_MARGIN_SECONDS:
        raise SpotifyTokenMissing("Spotify token expired; please log in again.")

    token_info["expires_at"] = token_info.get("timestamp", 0) + expires_in
    return token_info


def clear_spotify_token() -> None:
    """Forget the persisted token (logout)."""
    if remove_file(config.SPOTIFY_TOKEN_FILE):
        log_info("Spotify token removed.")


def spotify_headers(token_info: Dict[str, Any]) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token_info['access_token']}"}


def raise_for_spotify_status(r: requests.Response, what: str) -> None:
    """
    Map a Spotify HTTP response onto the error taxonomy.

    401 means the credential is no longer valid; anything else that is not a
    success is an upstream data failure.
    """
    if r.ok:
        return
    if r.status_code == 401:
        raise SpotifyAuthError(f"Spotify rejected the token while fetching {what}.")
    raise SpotifyAPIError(
        f"Failed to fetch {what} (HTTP {r.status_code}).",
        status_code=r.status_code,
    )


def spotify_get(
    token_info: Dict[str, Any],
    url: str,
    what: str,
    params: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    """
    GET a Spotify Web API resource and return its JSON body.

    Transport failures and non-success responses are raised as
    SpotifyAPIError, a 401 as SpotifyAuthError.
    """
    try:
        r = requests.get(
            url,
            headers=spotify_headers(token_info),
            params=params,
            timeout=config.HTTP_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        raise SpotifyAPIError(f"Failed to fetch {what}: {e}") from e

    raise_for_spotify_status(r, what)
    return r.json()
