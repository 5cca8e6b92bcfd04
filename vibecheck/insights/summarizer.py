"""Playlist "vibe" summaries from the Gemini API.

The summarizer is purely additive to the UI: it receives short
"{name} by {artist}" descriptions and returns a vibe description, three tags
and three similar artists. It never touches playback state.
"""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError
import requests

from vibecheck import config
from vibecheck.core import Track, VibeCheckError, log_step


class VibeSummaryError(VibeCheckError):
    """The summary could not be produced (missing key, transport, bad payload)."""


class VibeSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    vibe: str
    tags: List[str] = Field(default_factory=list)
    suggested_artists: List[str] = Field(default_factory=list, alias="suggestedArtists")


PROMPT_TEMPLATE = (
    "Analyze the following list of songs from a Spotify playlist and describe "
    'the overall "vibe", mood, and energy. Provide 3 short tags (e.g., '
    '"Upbeat", "Melancholic", "Gym") and 3 suggested artists that are similar '
    "but NOT in the list.\n\nSongs: {songs}"
)

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "vibe": {
            "type": "STRING",
            "description": "A 2-sentence description of the playlist's mood and musical style.",
        },
        "tags": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "3 short stylistic tags",
        },
        "suggestedArtists": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "3 artists similar to the playlist vibe",
        },
    },
    "required": ["vibe", "tags", "suggestedArtists"],
}


def describe_tracks(tracks: Sequence[Track]) -> List[str]:
    return [f"{t.name} by {t.primary_artist}" for t in tracks]


class GeminiVibeSummarizer:
    def __init__(
        self,
        api_key: Optional[str] = config.GEMINI_API_KEY,
        model: str = config.GEMINI_MODEL,
        max_tracks: int = config.VIBE_MAX_TRACKS,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.model = model
        self.max_tracks = max_tracks
        self.timeout = timeout

    def build_request(self, track_descriptions: Sequence[str]) -> Dict[str, Any]:
        # Only the head of the playlist is sent to bound latency and token usage.
        songs = ", ".join(track_descriptions[: self.max_tracks])
        return {
            "contents": [{"parts": [{"text": PROMPT_TEMPLATE.format(songs=songs)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    def summarize(self, track_descriptions: Sequence[str]) -> VibeSummary:
        if not self.api_key:
            raise VibeSummaryError("Gemini API key is missing.")
        if not track_descriptions:
            raise VibeSummaryError("Nothing to summarize: the playlist is empty.")

        log_step(f"Asking Gemini for a vibe summary ({self.model})...")
        url = f"{config.GEMINI_API_BASE}/models/{self.model}:generateContent"
        try:
            r = requests.post(
                url,
                headers={"x-goog-api-key": self.api_key},
                json=self.build_request(track_descriptions),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise VibeSummaryError(f"Gemini request failed: {e}") from e

        if not r.ok:
            raise VibeSummaryError(f"Gemini request failed (HTTP {r.status_code}).")

        text = _extract_text(r.json())
        if not text:
            raise VibeSummaryError("No response from Gemini.")

        try:
            return VibeSummary.model_validate_json(text)
        except ValidationError as e:
            raise VibeSummaryError(f"Unexpected Gemini response: {e}") from e


def _extract_text(payload: Dict[str, Any]) -> Optional[str]:
    candidates = payload.get("candidates") or []
    if not candidates:
        return None
    parts = (candidates[0].get("content") or {}).get("parts") or []
    texts = [p.get("text", "") for p in parts if isinstance(p, dict)]
    return "".join(texts) or None
