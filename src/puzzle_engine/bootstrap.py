"""Console application bootstrap helpers."""

from __future__ import annotations

import logging

from puzzle_engine.config import EngineSettings

_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: EngineSettings) -> None:
    """Route library log records to stderr at the configured level."""
    logging.basicConfig(level=settings.log_level, format=_LOG_FORMAT)
    logging.getLogger("puzzle_engine").setLevel(settings.log_level)
    _LOGGER.debug("Logging configured at %s", settings.log_level)
