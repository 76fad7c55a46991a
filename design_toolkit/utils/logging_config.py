"""
Logging setup for applications embedding the toolkit.

The evaluators only emit records through module loggers and attach context
with ``extra={...}`` (phase_id, question_key, consideration_id,
ethical_score, event_type). The formatters here surface that context:

- json:     one JSON object per line, context fields as top-level keys
- readable: single line with the context appended as ``[key=value ...]``

``design_toolkit.setup()`` calls configure_logging() once at startup.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from design_toolkit.config import get_config

CONTEXT_FIELDS = ("phase_id", "question_key", "consideration_id", "ethical_score", "event_type")


def _context(record: logging.LogRecord) -> dict:
    return {
        key: getattr(record, key)
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """JSON lines for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_context(record))
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class ReadableFormatter(logging.Formatter):
    """Plain single-line format for local development."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-8s %(name)s: %(message)s", "%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = _context(record)
        if context:
            pairs = " ".join(f"{k}={v}" for k, v in context.items())
            # Tracebacks stay on the lines after the message
            head, sep, tail = text.partition("\n")
            text = f"{head} [{pairs}]{sep}{tail}"
        return text


def configure_logging(cfg=None, stream=None) -> logging.Handler:
    """Replace root handlers with one stream handler built from ``cfg``.

    ``cfg`` defaults to get_config(); output goes to ``stream`` (stderr when
    omitted). Returns the installed handler.
    """
    cfg = cfg or get_config()
    level = logging.getLevelName(str(cfg.LOG_LEVEL).upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter() if cfg.LOG_FORMAT == "json" else ReadableFormatter())
    handler.setLevel(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    if not cfg.TESTING:
        logging.getLogger(__name__).info("Logging configured: level=%s format=%s",
                                         logging.getLevelName(level), cfg.LOG_FORMAT)
    return handler
