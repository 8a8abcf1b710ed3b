"""
Normalized provider error codes.

Values are lowercase snake_case and form a stable contract for logging and
for callers inspecting :attr:`RequestResult.error_code`.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
