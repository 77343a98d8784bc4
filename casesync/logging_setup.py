"""Logging for the case synchronization engine.

Module loggers (`casesync.*`) emit `event key=value` records to stdout.
Transport and SQL chatter from httpx and SQLAlchemy is held at WARNING so
case events stay readable. The level comes from the caller, then
`CASESYNC_LOG_LEVEL`, then INFO.
"""
from __future__ import annotations
import logging
import os
from logging.config import dictConfig

LOG_LEVEL_ENV = "CASESYNC_LOG_LEVEL"

_DICT_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "casesync": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        }
    },
    "handlers": {
        "stdout": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "casesync",
            "stream": "ext://sys.stdout",
        }
    },
    "root": {"level": "INFO", "handlers": ["stdout"]},
    "loggers": {
        "httpx": {"level": "WARNING"},
        "httpcore": {"level": "WARNING"},
        "sqlalchemy.engine": {"level": "WARNING"},
    },
}


def configure_logging(level: str | None = None) -> None:
    """Install the stdout handler unless the host application already did.

    An explicit `level` (or `CASESYNC_LOG_LEVEL`) is applied to the
    `casesync` logger in either case.
    """
    root = logging.getLogger()
    if not root.handlers:
        dictConfig(_DICT_CONFIG)
    chosen = level or os.environ.get(LOG_LEVEL_ENV)
    if chosen:
        logging.getLogger("casesync").setLevel(chosen.upper())
