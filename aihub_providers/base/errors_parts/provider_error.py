"""
Structured provider error exception type.

Raised only on request (see :meth:`RequestResult.raise_for_error`); the chat
client itself reports failures as values.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """A failed provider call with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` for the failure.
        message: Human-readable message suitable for logging.
        provider: Provider name the call targeted (e.g. ``"openai"``).
        status: HTTP status, ``0`` when no response was received.
        retryable: Hint for callers that want to retry; not authoritative.
    """

    code: ErrorCode
    message: str
    provider: str
    status: int = 0
    retryable: bool = False
    detail: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"[{self.provider}:{self.code.value}] {self.message}"


__all__ = ["ProviderError"]
