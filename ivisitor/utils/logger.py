# ivisitor/utils/logger.py
"""
Centralised logging configuration for the backend.
Console output always; a rotating file under LOG_DIR when LOG_TO_FILE is on.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from ivisitor.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
NOISY_LOGGERS = ("sqlalchemy.engine", "multipart", "urllib3")

_configured = False


def _file_handler(level: str, fmt: logging.Formatter) -> RotatingFileHandler:
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    # Rotating file handler — keeps last 10 × 5MB log files
    handler = RotatingFileHandler(
        filename=os.path.join(settings.LOG_DIR, "ivisitor.log"),
        maxBytes=5 * 1024 * 1024,
        backupCount=10,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(fmt)
    return handler


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)
    if settings.LOG_TO_FILE:
        root.addHandler(_file_handler(level, fmt))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)
