"""Logging setup for the room registry process."""

from __future__ import annotations

import logging

from roomhub.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Apply the configured level to the ``roomhub`` logger tree."""
    root_logger = logging.getLogger("roomhub")
    root_logger.setLevel(settings.roomhub_log_level)
    if not logging.getLogger().handlers and not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
