"""Console logging setup for the mdedit logger hierarchy"""

import logging
import sys


LOGGER_NAME = "mdedit"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_log_level(raw_level: str) -> int:
    """Map a level name (any case) to its logging constant; unknown names give INFO."""
    resolved = getattr(logging, raw_level.strip().upper(), None)
    if isinstance(resolved, int):
        return resolved
    return logging.INFO


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a single stderr handler to the mdedit logger, replacing earlier ones."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_log_level(level))
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
