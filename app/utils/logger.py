# app/utils/logger.py
"""
Logging setup shared by every module.
Console output plus a size-rotated file under LOG_DIR (defaults to ./logs).
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from app.config import settings

LOG_LEVEL = settings.LOG_LEVEL.upper()
LOG_DIR = settings.LOG_DIR or os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")

# httpx logs every request line at INFO, including the media upload URL
QUIET_LOGGERS = ("httpx", "httpcore")

_configured = False


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers = [logging.StreamHandler()]
    if settings.LOG_TO_FILE:
        os.makedirs(LOG_DIR, exist_ok=True)
        # 10 files × 5MB
        handlers.append(RotatingFileHandler(
            filename=os.path.join(LOG_DIR, "alarms.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=10,
            encoding="utf-8",
        ))

    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)
    for handler in handlers:
        handler.setLevel(LOG_LEVEL)
        handler.setFormatter(fmt)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)
