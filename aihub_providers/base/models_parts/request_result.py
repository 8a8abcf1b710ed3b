"""
Transport-agnostic envelope for one HTTP exchange.

``error`` is set only when the transport failed before any response arrived
(``status`` is then ``0`` and ``raw`` is empty). A 4xx/5xx response is a
completed exchange: ``error`` stays ``None`` and callers inspect ``status``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..errors_parts.classification import RETRYABLE_CODES, classify_status
from ..errors_parts.error_code import ErrorCode
from ..errors_parts.provider_error import ProviderError


@dataclass
class RequestResult:
    """Normalized outcome of a single POST.

    Attributes:
        status: HTTP status code; ``0`` when no response was received.
        headers: Response headers, case as received, repeats joined by ``", "``.
        body: Decoded JSON object/array, or ``None`` when ``raw`` is not JSON.
        raw: Response body text; ``""`` on transport failure.
        error: Transport failure description, otherwise ``None``.
    """

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Any] = None
    raw: str = ""
    error: Optional[str] = None
    transport_code: Optional[ErrorCode] = field(default=None, repr=False, compare=False)

    @classmethod
    def transport_failure(cls, error: str, code: Optional[ErrorCode] = None) -> "RequestResult":
        return cls(status=0, headers={}, body=None, raw="", error=error or "transport error", transport_code=code)

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status < 300

    @property
    def error_code(self) -> Optional[ErrorCode]:
        """Normalized failure category, ``None`` for successful exchanges."""
        if self.error is not None:
            return self.transport_code or ErrorCode.TRANSIENT
        return classify_status(self.status)

    def raise_for_error(self, provider: str = "") -> "RequestResult":
        """Raise :class:`ProviderError` unless the exchange succeeded.

        Returns ``self`` so calls can be chained.
        """
        code = self.error_code
        if code is None:
            return self
        message = self.error or f"HTTP {self.status}"
        raise ProviderError(
            code=code,
            message=message,
            provider=provider,
            status=self.status,
            retryable=code in RETRYABLE_CODES,
            detail=self.raw[:500] or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "headers": dict(self.headers),
            "body": self.body,
            "raw": self.raw,
            "error": self.error,
        }


__all__ = ["RequestResult"]
