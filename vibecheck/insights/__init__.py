"""Public façade for the vibecheck.insights package.

Mood/energy chart data and the generative "vibe" summary of a playlist.
"""

from .charts import energy_valence_points
from .summarizer import (
    GeminiVibeSummarizer,
    VibeSummary,
    VibeSummaryError,
    describe_tracks,
)

__all__ = [
    "energy_valence_points",
    "GeminiVibeSummarizer",
    "VibeSummary",
    "VibeSummaryError",
    "describe_tracks",
]
