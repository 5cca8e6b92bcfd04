from contextlib import asynccontextmanager

from fastapi import FastAPI

from vibecheck import __version__
from vibecheck.api.auth.routes import router as auth_router
from vibecheck.api.health import router as health_router
from vibecheck.api.playback.routes import router as playback_router
from vibecheck.api.playlists.routes import router as playlists_router
from vibecheck.api.state import reset_state
from vibecheck.core import configure_logging

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Never leave a preview process behind.
    reset_state()


app = FastAPI(
    title="VibeCheck API",
    version=__version__,
    description="Playlist browsing with preview playback and mood/energy signals.",
    lifespan=lifespan,
)

app.include_router(health_router, tags=["health"])
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(playlists_router, prefix="/playlists", tags=["playlists"])
app.include_router(playback_router, prefix="/playback", tags=["playback"])
