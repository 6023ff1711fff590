"""Logging setup for the service process."""

from __future__ import annotations

import logging

from roadmap_pulse.core.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the running process.

    Args:
        level: Optional level name overriding ``settings.log_level``.
    """
    logging.basicConfig(format=LOG_FORMAT, level=(level or settings.log_level).upper())
    if settings.sql_debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
