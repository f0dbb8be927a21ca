"""
Logging setup for the BFF process.

Pipeline modules log through ``logging.getLogger(__name__)`` under the ``bff``
namespace. This module gives that namespace one console handler whose lines
carry the environment name, so logs from several deployments of the same
service can share a sink.
"""

import logging

from bff.core.config import Settings

PACKAGE_LOGGER = "bff"
LOG_FORMAT = "%(asctime)s | %(levelname)s | {environment} | %(name)s | %(message)s"

# Chatty third-party loggers capped at WARNING unless we run at DEBUG
QUIET_LOGGERS = ("aiohttp.access", "aiohttp.client")


def setup_logging(settings: Settings) -> logging.Logger:
    """Attach the console handler to the ``bff`` logger (once) and set levels."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not any(getattr(h, "_bff_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                fmt=LOG_FORMAT.format(environment=settings.environment),
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handler._bff_handler = True
        logger.addHandler(handler)
        logger.propagate = False

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    return logger
