"""Logging setup shared by the API process and CLI scripts."""

import logging
import os

from taskboard.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"

ACCESS_LOGGER_NAME = "taskboard.access"


def configure_logging(settings: Settings) -> None:
    """Configure root logging; optionally mirror request lines into ACCESS_LOG_FILE."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
    if not settings.ACCESS_LOG_FILE:
        return
    access_logger = logging.getLogger(ACCESS_LOGGER_NAME)
    for handler in access_logger.handlers:
        if getattr(handler, "baseFilename", None) == os.path.abspath(settings.ACCESS_LOG_FILE):
            return
    file_handler = logging.FileHandler(settings.ACCESS_LOG_FILE, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    access_logger.addHandler(file_handler)
