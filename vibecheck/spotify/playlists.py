from typing import Any, Dict, List, Optional

from vibecheck import config
from vibecheck.core import log_info, log_step

from .auth import spotify_get


def _first_image_url(images: Optional[List[Dict]]) -> Optional[str]:
    if not images:
        return None
    return images[0].get("url")


def get_current_user_profile(token_info: Dict[str, Any]) -> Dict[str, Any]:
    data = spotify_get(token_info, f"{config.SPOTIFY_API_BASE}/me", "profile")
    return {
        "id": data.get("id"),
        "display_name": data.get("display_name") or data.get("id"),
        "image_url": _first_image_url(data.get("images")),
        "product": data.get("product"),
    }


def list_user_playlists(token_info: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Return the first page of the current user's playlists.

    Each entry is a plain dict with id, name, description, owner,
    tracks_total and image_url.
    """
    log_step("Fetching Spotify playlists for current user...")
    data = spotify_get(
        token_info,
        f"{config.SPOTIFY_API_BASE}/me/playlists",
        "playlists",
        params={"limit": config.SPOTIFY_PLAYLISTS_LIMIT},
    )

    playlists: List[Dict[str, Any]] = []
    for p in data.get("items") or []:
        if not p or "id" not in p or "name" not in p:
            continue
        playlists.append(
            {
                "id": p["id"],
                "name": p["name"],
                "description": p.get("description") or "",
                "owner": (p.get("owner") or {}).get("display_name") or "",
                "tracks_total": (p.get("tracks") or {}).get("total", 0),
                "image_url": _first_image_url(p.get("images")),
            }
        )

    log_info(f"{len(playlists)} playlists found.")
    return playlists
