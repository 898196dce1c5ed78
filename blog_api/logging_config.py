"""
Logging configuration for the Blog API.

The level and optional log file come from ``settings.LOG_LEVEL`` and
``settings.LOG_FILE`` unless passed explicitly.  Request lines go to the
``blog_api.access`` logger (see ``middleware.py``); every other module
logs through ``logging.getLogger(__name__)``.
"""
import logging
from pathlib import Path

from blog_api.config import settings

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None, logfile: str | None = None) -> None:
    """
    Configure the root logger once.

    Calling this again (tests, uvicorn reload) is a no-op when handlers
    are already attached.  Unknown level names fall back to INFO.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level = level or settings.LOG_LEVEL
    logfile = logfile or settings.LOG_FILE

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
