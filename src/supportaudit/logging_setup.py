"""
Logging Setup (Structured JSON)

Configures the "supportaudit" logger for the service and the CLI.
Library modules only call logging.getLogger(__name__).
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Optional

LOGGER_NAME = "supportaudit"

# Extra record attributes copied into the JSON line when present
_EXTRA_FIELDS = (
    "session_id",
    "conversation_id",
    "outcome",
    "confidence",
    "decision_fingerprint",
    "schema_name",
    "schema_version",
    "action",
    "triggered_rules",
    "duration_ms",
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a JSON stream handler to the package logger.

    Safe to call more than once; only one handler is installed.
    """
    if level is None:
        from .config import get_settings

        level = get_settings().log_level

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(getattr(h, "_supportaudit", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        handler._supportaudit = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
