from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool

from vibecheck.spotify import (
    SpotifyAPIError,
    SpotifyAuthError,
    SpotifyTokenMissing,
    build_spotify_auth_url,
    clear_spotify_token,
    exchange_code_for_token,
    get_current_user_profile,
    load_spotify_token,
)

from ..errors import raise_unauth, raise_upstream
from ..state import reset_state

router = APIRouter()


@router.get("/url")
def get_auth_url() -> dict:
    """
    Spotify authorization URL the frontend redirects the user to.
    """
    return {"auth_url": build_spotify_auth_url()}


@router.get("/status")
def auth_status() -> dict:
    try:
        token_info = load_spotify_token()
    except SpotifyTokenMissing:
        return {
            "authenticated": False,
            "reason": "missing_or_expired_token",
            "expires_at": None,
        }

    return {
        "authenticated": True,
        "reason": None,
        "expires_at": token_info.get("expires_at"),
    }


@router.get("/profile")
async def auth_profile() -> dict:
    try:
        token_info = load_spotify_token()
        user = await run_in_threadpool(get_current_user_profile, token_info)
    except SpotifyAuthError as e:
        raise_unauth(e)
    except SpotifyAPIError as e:
        raise_upstream(e)

    return {"authenticated": True, "user": user}


@router.get("/callback", response_class=HTMLResponse)
async def auth_callback(
    code: str | None = Query(default=None),
    error: str | None = Query(default=None),
):
    """
    Spotify redirect target: exchange the code and persist the token.
    """
    if error:
        raise HTTPException(
            status_code=400,
            detail=f"Spotify authorization failed: {error}",
        )

    if code is None:
        raise HTTPException(status_code=400, detail="Missing 'code' parameter.")

    try:
        await run_in_threadpool(exchange_code_for_token, code)
    except SpotifyAuthError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return """
    <html>
      <body>
        <h1>Spotify authorization complete ✅</h1>
        <p>You can close this window and return to the application.</p>
      </body>
    </html>
    """


@router.post("/logout")
async def logout() -> dict:
    reset_state()
    clear_spotify_token()
    return {"authenticated": False}
