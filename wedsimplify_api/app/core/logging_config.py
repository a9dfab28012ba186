"""
Logging configuration for the WedSimplify API.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger.  Each record shows the timestamp, level,
logger name and message.  Request access lines are emitted by the
middleware in ``main`` under the ``wedsimplify_api.access`` logger, so
uvicorn's own access logger is lowered to WARNING to avoid printing
every request twice.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third‑party loggers that duplicate our own output.
NOISY_LOGGERS = ("uvicorn.access",)


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  An empty value disables
        the file handler.
    quiet : Iterable[str]
        Logger names whose level is raised to WARNING.
    """
    root = logging.getLogger()
    if root.handlers:
        # pytest and repeated create_app() calls must not stack handlers.
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
