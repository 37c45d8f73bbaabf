"""Logging setup for the payday command line."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a stderr handler to the ``payday`` logger.

    Safe to call more than once; the handler is replaced rather than added
    again.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)

    Returns:
        The configured ``payday`` logger
    """
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level '{level}'")

    logger = logging.getLogger("payday")
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        if getattr(handler, "_payday_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._payday_handler = True
    logger.addHandler(handler)
    return logger
