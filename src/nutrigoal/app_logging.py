"""Logging configuration helpers."""

from __future__ import annotations

import logging

LOGGER_NAME = "nutrigoal"


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure engine logging with a single stream handler.

    Calling this again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
