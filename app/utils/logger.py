# app/utils/logger.py
import logging
import sys
from app.utils.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# HTTP client libraries log every request at INFO; only show them when debugging.
NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def configure_logger(name: str, level_name: str) -> logging.Logger:
    """Returns the named logger writing to stdout at `level_name` (INFO if unknown)."""
    app_logger = logging.getLogger(name)
    level = getattr(logging, level_name, logging.INFO)
    app_logger.setLevel(level)

    # Hot-reloads re-import this module
    if app_logger.hasHandlers():
        app_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    app_logger.addHandler(handler)
    app_logger.propagate = False

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)
    return app_logger


logger = configure_logger("coding_mentor", settings.log_level)
