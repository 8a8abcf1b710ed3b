"""JSON logging formatter used by the shared ``aihub`` logger.

Serializes the standard record fields and, when the message itself is a JSON
object (as produced by :func:`aihub_providers.base.logging.log_event`), hoists
its keys to the top level so one event is one flat JSON line.
"""
from __future__ import annotations

import contextlib
import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# LogRecord attributes that are logging internals, never event fields.
_RESERVED = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """Format records as single-line JSON objects.

    ``msg`` keeps the raw message text; parsed event keys and any ``extra=``
    attributes are merged alongside without overwriting the base fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": datetime.now(timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        msg_text = record.getMessage()
        base["msg"] = msg_text
        with contextlib.suppress(ValueError):
            parsed = json.loads(msg_text)
            if isinstance(parsed, dict):
                for k, v in parsed.items():
                    base.setdefault(k, v)
        for k, v in record.__dict__.items():
            if k.startswith("_") or k in _RESERVED:
                continue
            base.setdefault(k, v)
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
