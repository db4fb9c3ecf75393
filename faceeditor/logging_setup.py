"""Logging setup for front ends embedding the face editor."""

import logging

from faceeditor.config import LoggingConfig, settings


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure root logging from LoggingConfig (LOG_LEVEL, LOG_FORMAT)."""
    log_config = config or settings.logging
    logging.basicConfig(level=log_config.level, format=log_config.format)
