"""Structured Logging — JSON formatter and setup for binding diagnostics.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (field_name, env_key, error_code, field_count) surfaced when present
    - JSON format by default, human-readable when log_format="text"
    - Environment VALUES are never logged by envbind itself

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging is opt-in: a library must not configure the root logger on import
"""

import json
import logging
from datetime import datetime, timezone


EXTRA_FIELDS: tuple[str, ...] = (
    "field_name", "env_key", "error_code", "field_count", "status",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Attach a handler to the envbind logger. Returns it so callers can remove it."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logger = logging.getLogger("envbind")
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
