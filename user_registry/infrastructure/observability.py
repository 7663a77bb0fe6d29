"""Structured Logging — one JSON line per record for the user registry.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - user_id, error_code, field, path and method are copied from `extra` when set
    - LOG_FORMAT=text swaps in a plain formatter for local runs

Design Decisions:
    - JSONFormatter on stdlib logging: request handlers pass context through `extra`
    - setup_logging runs once, from the FastAPI lifespan in main.py
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = ("user_id", "error_code", "field", "path", "method")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

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


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
