import logging
import sys


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure root logging for the backend.

    - Logs go to stdout
    - Time, level and logger name on every line
    - Applied once; if Uvicorn (or a test runner) already installed handlers,
      only the level is adjusted.
    """
    root = logging.getLogger()

    if root.handlers:
        root.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    root.addHandler(handler)
    root.setLevel(level)
