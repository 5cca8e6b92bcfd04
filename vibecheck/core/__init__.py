"""Public façade for the vibecheck.core package.

This module exposes logging helpers, filesystem utilities, the base error and
the domain models shared by every other package. Callers should import these
cross-cutting concerns from this façade instead of the internal submodules.
"""

from .errors import VibeCheckError
from .fs_utils import ensure_dir, ensure_parent_dir, read_json, remove_file, write_json
from .logging_config import configure_logging
from .logging_utils import (
    log_info,
    log_progress,
    log_step,
    log_warning,
)
from .models import (
    NOT_FOUND,
    AudioFeatureSet,
    PlaybackSnapshot,
    PlaybackStatus,
    ResolutionResult,
    Track,
)

__all__ = [
    "configure_logging",
    "log_info",
    "log_step",
    "log_warning",
    "log_progress",
    "ensure_parent_dir",
    "ensure_dir",
    "write_json",
    "read_json",
    "remove_file",
    "VibeCheckError",
    "Track",
    "AudioFeatureSet",
    "ResolutionResult",
    "NOT_FOUND",
    "PlaybackStatus",
    "PlaybackSnapshot",
]
