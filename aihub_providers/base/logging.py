"""Structured logging utilities for the provider layer.

One shared ``aihub`` logger writes JSON (or plain) lines to stderr; module
loggers obtained through :func:`get_logger` propagate into it so handlers are
configured once. :func:`log_event` is the primitive every component uses to
emit a named event with a :class:`LogContext`.

Level comes from ``AIHUB_LOG_LEVEL`` (default ``WARNING`` so library use stays
quiet). API keys must never be passed as event fields.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from typing import Any

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "aihub"
LOG_LEVEL_ENV = "AIHUB_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_aihub_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_aihub_console_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Parse a logging level name into its integer constant.

    Accepts DEBUG, INFO, WARN/WARNING, ERROR and CRITICAL case-insensitively;
    unknown values fall back to ``default``.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared ``aihub`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        logger.setLevel(desired_level)
        for handler in list(logger.handlers):
            if not getattr(handler, _CONSOLE_HANDLER_ATTR, False):
                continue
            stream = getattr(handler, "stream", None)
            if stream is None or getattr(stream, "closed", False) or stream is not sys.stderr:
                # stderr may have been swapped (pytest capsys); rebind to the live one
                logger.removeHandler(handler)
                with contextlib.suppress(Exception):
                    handler.close()
                logger.addHandler(_console_handler(json_mode, desired_level))
            else:
                handler.setLevel(desired_level)
        return logger

    logger.setLevel(desired_level)
    logger.handlers[:] = [_console_handler(json_mode, desired_level)]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def _console_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.WARNING) -> logging.Logger:
    """Return a logger wired into the shared ``aihub`` handler.

    Names outside the ``aihub`` hierarchy (e.g. ``aihub_providers.chat``) are
    mapped under it so a single handler serves the whole package.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(*, level: int | str | None = None, json_mode: bool = True) -> logging.Logger:
    """Reconfigure the shared logger's level and format at runtime.

    ``level`` accepts numeric levels or names; ``None`` keeps the current one.
    Handlers attached by callers are left alone.
    """
    logger = _ensure_base_logger(json_mode=json_mode, level=logging.WARNING)
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)
    for handler in logger.handlers:
        if getattr(handler, _CONSOLE_HANDLER_ATTR, False):
            handler.setLevel(logger.level)
            handler.setFormatter(_formatter(json_mode))
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured event as a single JSON message.

    Parameters
    ----------
    logger: logging.Logger
        Logger from :func:`get_logger`.
    event: str
        Event name, e.g. ``http.response``.
    ctx: LogContext | None
        Provider/model/url context merged shallowly into the payload.
    level: int
        Logging level for the record.
    keep_none: bool
        Preserve keys whose value is ``None`` (encoded as ``null``).
    **fields: Any
        JSON-serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
