"""Base exception shared by the vibecheck packages.

Concrete errors are defined next to the code that raises them
(vibecheck.spotify, vibecheck.preview.audio, vibecheck.insights.summarizer).
"""


class VibeCheckError(Exception):
    """Root of all application-level errors."""
