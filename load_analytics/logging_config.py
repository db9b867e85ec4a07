"""JSON logging for the analytics engine.

Engine modules log with ``logging.getLogger(__name__)`` and pass
structured fields as ``extra={"ctx_<name>": value}``; the formatter
gathers them under ``context`` with the prefix removed.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from load_analytics.config import Settings, get_settings

CONTEXT_PREFIX = "ctx_"


class JSONFormatter(logging.Formatter):
    """One JSON object per record: level, logger, event, source and context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
            "source": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        context = {
            key[len(CONTEXT_PREFIX):]: value
            for key, value in record.__dict__.items()
            if key.startswith(CONTEXT_PREFIX)
        }
        if context:
            entry["context"] = context
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
            }
        return json.dumps(entry, default=str)


def _json_handler(root: logging.Logger) -> logging.Handler | None:
    for handler in root.handlers:
        if isinstance(handler.formatter, JSONFormatter):
            return handler
    return None


def setup_logging(settings: Settings | None = None) -> None:
    """Install the JSON stdout handler once and apply the profile's log level.

    Calling again only re-applies the level, so a changed APP_ENV or
    LOG_LEVEL takes effect without stacking handlers.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    if _json_handler(root) is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    root.setLevel(level)

    # SQL echo only in dev; slow queries are still reported by load_analytics.db
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.is_dev else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
