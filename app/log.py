"""Logging for the CRM service.

Everything logs under the ``litecrm`` namespace (``litecrm.sellers``,
``litecrm.engine``, ...). Level and line format come from ``Settings`` so
they can be changed per environment with ``LITECRM_LOG_LEVEL`` /
``LITECRM_LOG_FORMAT``.
"""

from __future__ import annotations

import logging
import sys

from app.config import Settings, get_settings

ROOT_LOGGER = "litecrm"


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """Configure the ``litecrm`` logger from ``settings``.

    Safe to call again: the service's own stdout handler is reconfigured in
    place instead of a second one being added.
    """
    settings = settings or get_settings()
    level = settings.log_level.upper()
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    handler = next((h for h in logger.handlers if getattr(h, "litecrm", False)), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.litecrm = True
        logger.addHandler(handler)

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(settings.log_format, datefmt=settings.log_date_format))
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Loggers outside the ``litecrm`` namespace are nested under it."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
