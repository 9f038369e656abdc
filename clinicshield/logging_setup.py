"""Central logging configuration for ClinicShield.

Handlers log stable event names (``answer_saved``, ``catalog_seeded``, ...)
with context passed through ``extra=``. The console formatter appends those
extra fields as ``key=value`` pairs so events stay greppable in plain stdout.
"""
from __future__ import annotations

import logging
import os
from logging.config import dictConfig

# Attributes present on every LogRecord; anything else came from ``extra=``.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class EventFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS and not k.startswith("_")}
        if not extras:
            return base
        return base + " " + " ".join(f"{k}={v}" for k, v in sorted(extras.items()))


def _dict_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "events": {
                "()": EventFormatter,
                "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "events",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            "clinicshield": {"level": level},
            "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.error": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    }


def configure_logging(level: str | None = None) -> None:
    """Configure logging once; ``LOG_LEVEL`` picks the level when none is given.

    Does nothing when the root logger already has handlers (reloaders,
    pytest capture).
    """
    if logging.getLogger().handlers:
        return
    chosen = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(chosen), int):
        chosen = "INFO"
    dictConfig(_dict_config(chosen))
