"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Request identity (session_id, operation, channel_id, path) grouped under "request"
    - Gateway failures (error_code, debug_info from ErrorContext) grouped under "error"
    - Bridge calls (bridge_method, status_code) grouped under "bridge"
    - Groups with no populated field are omitted
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - Grouping over flat keys: one log line per request fault stays greppable by group
    - setup_logging called once on startup via lifespan
"""

import json
import logging
from datetime import datetime, timezone

_GROUPS: dict[str, tuple[str, ...]] = {
    "request": ("session_id", "operation", "channel_id", "path"),
    "error": ("error_code", "debug_info"),
    "bridge": ("bridge_method", "status_code"),
}


def _grouped_extras(record: logging.LogRecord) -> dict[str, dict]:
    """Collect extra=... fields from the record into their groups."""
    groups = {}
    for group, keys in _GROUPS.items():
        values = {
            key: record.__dict__[key]
            for key in keys
            if record.__dict__.get(key) is not None
        }
        if values:
            groups[group] = values
    return groups


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_grouped_extras(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines for development; request fields appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = [
            f"{key}={value}"
            for values in _grouped_extras(record).values()
            for key, value in values.items()
        ]
        return f"{line} [{' '.join(pairs)}]" if pairs else line


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
