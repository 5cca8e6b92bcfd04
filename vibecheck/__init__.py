"""VibeCheck: playlist browsing with short preview playback and mood signals."""

__version__ = "0.1.0"
