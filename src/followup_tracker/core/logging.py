"""Logging configuration for the tracker, its HTTP client and its server."""

from __future__ import annotations

import logging
import logging.config
from typing import Any

from .config import LoggingSettings

_FORMATTERS: dict[str, dict[str, Any]] = {
    "structured": {
        "format": "time={asctime} level={levelname} logger={name} message={message}",
        "style": "{",
    },
    "plain": {
        "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
    },
}

# Third-party loggers that are only interesting when debugging.
_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def build_logging_config(settings: LoggingSettings) -> dict[str, Any]:
    """Return the ``dictConfig`` mapping for ``settings``."""
    level = settings.level.upper()
    formatter = "structured" if settings.structured else "plain"
    library_level = level if level == "DEBUG" else "WARNING"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": _FORMATTERS[formatter]},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": level,
            },
        },
        "loggers": {name: {"level": library_level} for name in _NOISY_LOGGERS},
        "root": {"handlers": ["console"], "level": level},
    }


def configure_logging(settings: LoggingSettings) -> None:
    """Install the console handler and levels described by ``settings``."""
    logging.config.dictConfig(build_logging_config(settings))
    logging.getLogger(__name__).debug(
        "Logging configured (level=%s, structured=%s)",
        settings.level.upper(),
        settings.structured,
    )


__all__ = ["build_logging_config", "configure_logging"]
