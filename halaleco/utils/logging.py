# halaleco/utils/logging.py
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger("halaleco")


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stderr handler to the package logger (idempotent)."""
    logger.setLevel(level.upper())
    if not any(getattr(h, "_halaleco", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._halaleco = True
        logger.addHandler(handler)
