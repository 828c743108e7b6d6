from __future__ import annotations

import logging
import os

PACKAGE_LOGGER = "daterange_picker"
LOG_LEVEL_ENV = "DATE_RANGE_PICKER_LOG_LEVEL"

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_CONFIGURED = False


def resolve_log_level(level: str | int | None = None) -> str | int:
    """Explicit level, then the package override, then LOG_LEVEL, then INFO."""
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV) or os.getenv("LOG_LEVEL") or "INFO"
    return level.strip().upper() if isinstance(level, str) else level


def configure_logging(level: str | int | None = None) -> None:
    # Only the package logger is touched; the host application owns the root logger.
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolve_log_level(level))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)
    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
