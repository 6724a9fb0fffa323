"""
Logging setup for the parcel tracker.

Operations log through the shared ``tracker`` logger with structured
context passed in ``extra``.
"""

import logging

# Configure structured logger
logger = logging.getLogger("tracker")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stream handler to the tracker logger.
    
    Safe to call more than once; the handler is only installed the first time.
    """
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger
