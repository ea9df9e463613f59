"""Logging configuration."""

import logging
import sys
from typing import Optional

from stockscope.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty at INFO; only their warnings are worth seeing
_QUIET_LOGGERS = ("sqlalchemy.engine", "apscheduler", "httpx")


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure stdout logging at settings.log_level (INFO if unrecognized)."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
