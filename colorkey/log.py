import logging
import sys

from .config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Installed once; repeated setup_logging calls only change the level
_handler: logging.Handler | None = None


def setup_logging(level: str | int | None = None) -> logging.Logger:
    """
    Send colorkey log records to stdout.

    Args:
        level: Level name or number (default: COLORKEY_LOG_LEVEL)

    Returns:
        The package logger
    """
    global _handler

    level = level if level is not None else LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger("colorkey")
    logger.setLevel(level)

    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(_handler)

    return logger
