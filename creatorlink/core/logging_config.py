"""Centralized structured logging configuration."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from creatorlink.core.config import Config, get_config

# Keys passed through `extra=` that are copied into the JSON line.
_EXTRA_FIELDS = ("event", "profile_id", "session_id", "step", "status_code", "error", "reason")

# Baseline per-logger levels; LOGGER_LEVELS entries override these.
_DEFAULT_LOGGER_LEVELS = {
    "development": {"creatorlink": "DEBUG"},
    "production": {
        "creatorlink": "INFO",
        "sqlalchemy.engine": "WARNING",
        "urllib3": "WARNING",
        "uvicorn.access": "WARNING",
    },
}


class JsonFormatter(logging.Formatter):
    """One JSON object per line; ``extra`` event fields are lifted to the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def logger_levels(config: Config) -> dict[str, str]:
    levels = dict(_DEFAULT_LOGGER_LEVELS.get(config.ENV, {}))
    levels.update(config.LOGGER_LEVELS)
    return levels


def apply_logger_levels(config: Config) -> None:
    for name, level in logger_levels(config).items():
        logging.getLogger(name).setLevel(level)


def configure_logging(config: Config | None = None) -> None:
    """Install the JSON handlers on the root logger once per process."""
    config = config or get_config()
    root = logging.getLogger()
    if root.handlers:
        apply_logger_levels(config)
        return

    root.setLevel(config.LOG_LEVEL)
    formatter = JsonFormatter()

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if config.LOG_FILE:
        file_handler = logging.FileHandler(config.LOG_FILE)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    apply_logger_levels(config)
