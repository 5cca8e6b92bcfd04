import logging

LOGGER_NAME = "vibecheck"

# Project logger; submodules use logging.getLogger(__name__) under it.
logger = logging.getLogger(LOGGER_NAME)


def log_info(message: str) -> None:
    logger.info("%s", message)


def log_step(message: str) -> None:
    """
    Action step / ongoing work (e.g. a Spotify request about to be issued).
    """
    logger.info("→ %s", message)


def log_warning(message: str) -> None:
    """
    Non-fatal problem: missing preview, failed feature chunk, playback refused.
    """
    logger.warning("⚠️ %s", message)


def log_progress(current: int, total: int, prefix: str = "") -> None:
    """
    Progress line for chunked work.

    Example:
      log_progress(2, 3, prefix="Audio features")
      -> "Audio features 2/3 (66.7%)"
    """
    if total <= 0:
        total = 1

    percent = max(0.0, min(1.0, current / total)) * 100

    if prefix:
        logger.info("%s %d/%d (%.1f%%)", prefix, current, total, percent)
    else:
        logger.info("%d/%d (%.1f%%)", current, total, percent)
