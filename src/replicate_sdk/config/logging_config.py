from __future__ import annotations

import logging
from logging.config import dictConfig


def configure_logging(level: str = "WARNING") -> None:
    """
    Configure console logging for the CLI.

    Library code only creates module loggers; applications embedding the SDK
    keep control of handlers.
    """
    level = level.upper()
    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"}
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": level,
            }
        },
        "loggers": {
            "replicate_sdk": {"handlers": ["console"], "level": level, "propagate": False},
        },
    })
    logging.getLogger("httpx").setLevel(max(getattr(logging, level, logging.WARNING), logging.WARNING))
