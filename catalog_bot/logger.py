"""
Central logger for the application.
Standard Python logging, with a clear format and levels.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once (stdout handler, shared format).
    """
    from .settings import settings

    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or settings.LOG_LEVEL), logging.INFO))

    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)


def get_logger(name: str = "catalog-bot") -> logging.Logger:
    """
    Return a logger that is guaranteed to have output configured.
    """
    setup_logging()
    return logging.getLogger(name)
