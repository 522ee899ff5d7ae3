"""Logging configuration for the application."""

import logging
import sys

from summarizer.core.config import settings

# Third-party loggers that log every outbound request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def _resolve_level() -> int:
    if settings.LOG_LEVEL:
        return getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    return logging.DEBUG if settings.DEBUG else logging.INFO


def setup_logging() -> logging.Logger:
    """Configure and return the application logger."""
    level = _resolve_level()

    logger = logging.getLogger("summarizer")
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    if settings.DEBUG:
        formatter = logging.Formatter(
            "\n%(levelname)s [%(asctime)s] %(name)s\n"
            "└── %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    logger.propagate = False

    if not settings.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return logger


# Application logger instance
logger = setup_logging()
