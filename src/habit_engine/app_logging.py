"""Logging setup for the engine and its HTTP surface."""

import logging

LOGGER_NAME = "habit_engine"
LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def resolve_level(level: str | int) -> int:
    """Map a level name such as ``"debug"`` to its number, falling back to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int = logging.INFO) -> None:
    """Attach one stream handler to the engine logger.

    Repeated calls only adjust the level, so rebuilding the app in tests does
    not duplicate output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
