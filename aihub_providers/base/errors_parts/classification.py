"""
Map HTTP statuses and transport exceptions to :class:`ErrorCode` values.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError

_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# Codes worth a retry by callers that choose to retry.
RETRYABLE_CODES = frozenset(
    {ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT, ErrorCode.TRANSIENT, ErrorCode.UNAVAILABLE}
)


def classify_status(status: int) -> Optional[ErrorCode]:
    """Classify an HTTP status; ``None`` for 2xx/3xx.

    Unlisted 4xx map to ``VALIDATION``, unlisted 5xx to ``SERVER_ERROR``.
    ``0`` (no response) maps to ``TRANSIENT``.
    """
    if status == 0:
        return ErrorCode.TRANSIENT
    if 200 <= status < 400:
        return None
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 400 <= status < 500:
        return ErrorCode.VALIDATION
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UNKNOWN


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify a transport-level exception.

    Precedence: ``ProviderError`` passthrough, timeouts, connection failures,
    an HTTP status carried by the exception, then ``UNKNOWN``.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, (ConnectionError, httpx.NetworkError)):
        return ErrorCode.UNAVAILABLE
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSIENT
    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    if isinstance(status, int):
        return classify_status(status) or ErrorCode.UNKNOWN
    return ErrorCode.UNKNOWN


__all__ = [
    "classify_status",
    "classify_exception",
    "RETRYABLE_CODES",
    "_HTTP_STATUS_MAP",
]
