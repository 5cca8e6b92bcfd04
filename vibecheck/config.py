from dotenv import load_dotenv
import os

load_dotenv()

# Base & cache directories
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CACHE_DIR = os.getenv("VIBECHECK_CACHE_DIR", os.path.join(BASE_DIR, "cache"))

# Cache files
SPOTIFY_TOKEN_FILE = os.path.join(CACHE_DIR, "spotify_token.json")

# Spotify credentials (REQUIRED for login)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")
SPOTIFY_REDIRECT_URI = os.getenv(
    "SPOTIFY_REDIRECT_URI", "http://127.0.0.1:8888/auth/callback"
)

# Spotify API constants
SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

SCOPES = [
    "user-read-private",
    "user-read-email",
    "playlist-read-private",
    "playlist-read-collaborative",
]

# Spotify paging limits
SPOTIFY_PLAYLISTS_LIMIT = 50
SPOTIFY_PLAYLIST_TRACKS_LIMIT = 100
AUDIO_FEATURES_CHUNK_SIZE = 100

# Fallback preview search (iTunes Search API)
PREVIEW_SEARCH_URL = os.getenv(
    "PREVIEW_SEARCH_URL", "https://itunes.apple.com/search"
)
PREVIEW_SEARCH_COUNTRY = os.getenv("PREVIEW_SEARCH_COUNTRY", "US")

HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

# Playback
DEFAULT_VOLUME = 0.5
MPV_PATH = os.getenv("MPV_PATH", "mpv")

# Gemini (vibe summaries)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
VIBE_MAX_TRACKS = 30
