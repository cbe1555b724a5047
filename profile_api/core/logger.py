"""
Logging setup for the profile image service.

Every module logs through a child of the ``profile_api`` logger, so a single
handler configured here covers the whole application.
"""

import logging

from profile_api.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("profile_api")


def setup_logger() -> logging.Logger:
    """Configures the application logger. Safe to call more than once."""
    settings = get_settings()
    logger.setLevel(settings.log_level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
