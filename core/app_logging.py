# core/app_logging.py

"""
Logging configuration and helpers.

Configures the standard library `logging` package once for the whole program. Records are
rendered either as plain text lines (the default, suitable for an interactive session) or as
single-line JSON objects when `Config.log_format` is "json".
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from core.config import Config

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


class JSONFormatter(logging.Formatter):
    """Formatter that renders log records as single-line JSON objects."""

    # attributes populated by logging.LogRecord that are not surfaced as extras
    _RESERVED = {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "ts": timestamp.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["error_type"] = record.exc_info[0].__name__
            payload["error"] = str(record.exc_info[1])
            payload["stack"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in self._RESERVED or key in payload or key.startswith("_"):
                continue
            payload[key] = value

        return json.dumps(payload, default=str, separators=(",", ":"))


def configure_logging(config: Config | None = None, force: bool = False) -> None:
    """
    Configures root logging from a `Config`.

    Args:
        config (Config | None): The configuration to apply. Defaults to `Config.from_env()`.
        force (bool): Reconfigure even if logging was already configured.
    """
    global _configured
    if _configured and not force:
        return

    if config is None:
        config = Config.from_env()

    level = getattr(logging, config.log_level, logging.INFO)

    handler = logging.StreamHandler(stream=sys.stderr)
    if config.log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]
    logging.captureWarnings(True)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configuration is left to the program entry point."""

    return logging.getLogger(name)


__all__ = [
    "JSONFormatter",
    "configure_logging",
    "get_logger",
]
