"""Structured logging configuration for the chat message store."""

import json
import logging
import logging.config
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

from .config import Settings

# aiosqlite logs every statement at DEBUG
QUIET_LOGGERS = ("aiosqlite",)


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Per-call fields passed as extra={"context": {...}}, e.g. message ids
        if hasattr(record, "context"):
            log_data["context"] = record.context

        return json.dumps(log_data, default=str)


def build_logging_config(settings: Settings) -> dict:
    """dictConfig for the given settings: rotating JSON file, optional stdout."""
    handlers = {
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(settings.log_file),
            "maxBytes": 10 * 1024 * 1024,  # 10 MB
            "backupCount": 5,
            "formatter": "json",
            "encoding": "utf-8",
        },
    }
    if settings.log_console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "chat_core.logging_config.JSONFormatter",
            },
        },
        "handlers": handlers,
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        "root": {
            "level": settings.log_level.upper(),
            "handlers": list(handlers),
        },
    }


def setup_logging(settings: Settings | None = None) -> None:
    """
    Setup structured logging for the message store.

    Args:
        settings: Where and how much to log. Defaults to Settings.from_env()
                  (LOG_LEVEL, LOG_FILE, LOG_CONSOLE).
    """
    if settings is None:
        settings = Settings.from_env()

    Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(settings))


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance (typically for __name__)."""
    return logging.getLogger(name)
