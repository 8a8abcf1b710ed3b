"""Single-request JSON connector built on ``httpx``.

Purpose:
    Turn a resolved :class:`ProviderConfig` into request headers and a URL,
    issue exactly one synchronous POST, and normalize whatever happened into a
    :class:`RequestResult`.

External dependencies:
    - ``httpx`` for the synchronous client. Tests inject an
      ``httpx.MockTransport`` through ``transport=``.

Timeout strategy:
    - The per-request timeout comes from ``ProviderConfig.timeout_seconds``;
      there is no retry, backoff or streaming.

Failure semantics:
    - Transport failures (DNS, refused connection, timeout before a response,
      malformed URL) become ``status=0`` results with ``error`` set.
    - A request httpx refuses to build (e.g. a non-ASCII header value) is
      reported the same way, with ``ErrorCode.VALIDATION``.
    - Any HTTP status, 4xx/5xx included, is a completed exchange: ``error`` is
      ``None`` and the caller inspects ``status``.
    - A body that is not a JSON object/array yields ``body=None`` while ``raw``
      keeps the text.

Lifecycle:
    - Without an injected ``client`` each call opens and closes its own
      ``httpx.Client``; no state is shared between calls.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

from ...config.defaults import DEFAULT_TIMEOUT_SECONDS
from ..errors import ErrorCode, classify_exception
from ..logging import LogContext, get_logger, log_event
from ..models import ProviderConfig, RequestResult

_logger = get_logger("aihub.http")


def normalize_response_headers(raw_headers: List[Tuple[bytes, bytes]], encoding: str = "latin-1") -> Dict[str, str]:
    """Collapse raw header pairs into a mapping.

    Names keep the case they were first received with; repeated headers
    (compared case-insensitively) are joined with ``", "`` in arrival order.
    """
    names: Dict[str, str] = {}
    values: Dict[str, List[str]] = {}
    for raw_name, raw_value in raw_headers:
        name = raw_name.decode(encoding) if isinstance(raw_name, bytes) else str(raw_name)
        value = raw_value.decode(encoding) if isinstance(raw_value, bytes) else str(raw_value)
        key = name.lower()
        names.setdefault(key, name)
        values.setdefault(key, []).append(value.strip())
    return {names[key]: ", ".join(vals) for key, vals in values.items()}


def _decode_body(raw: str) -> Optional[Any]:
    if not raw:
        return None
    try:
        decoded = json.loads(raw)
    except ValueError:
        return None
    return decoded if isinstance(decoded, (dict, list)) else None


def _has_header(headers: Mapping[str, str], name: str) -> bool:
    lowered = name.lower()
    return any(k.lower() == lowered for k in headers)


class HttpConnector:
    """Build and send one JSON POST per call.

    Parameters
    ----------
    transport: httpx.BaseTransport | None
        Transport for the per-call client (e.g. ``httpx.MockTransport``).
    client: httpx.Client | None
        Caller-owned client reused for every call and never closed here.
    """

    def __init__(self, transport: Optional[httpx.BaseTransport] = None, client: Optional[httpx.Client] = None) -> None:
        self._transport = transport
        self._client = client

    @staticmethod
    def build_headers(config: ProviderConfig) -> Dict[str, str]:
        """Merge default and custom headers, then inject dialect headers.

        Custom headers win over defaults. The auth header (and the family's
        extra headers) are only added when the caller has not already set a
        header of that name, compared case-insensitively.
        """
        headers: Dict[str, str] = {**config.default_headers, **config.headers}
        family = config.family
        if config.api_key:
            name, value = family.auth_header(config.api_key)
            if not _has_header(headers, name):
                headers[name] = value
        for name, value in family.extra_headers(config.organization).items():
            if not _has_header(headers, name):
                headers[name] = value
        return headers

    @staticmethod
    def build_url(config: ProviderConfig) -> str:
        return config.url

    def post_json(
        self,
        url: str,
        headers: Mapping[str, str],
        payload: Mapping[str, Any],
        timeout: int = DEFAULT_TIMEOUT_SECONDS,
        ctx: Optional[LogContext] = None,
    ) -> RequestResult:
        """POST ``payload`` as JSON and return the normalized result.

        Never raises for transport or HTTP failures; a payload that cannot be
        serialized is a programming error and propagates as ``TypeError``.
        """
        ctx = ctx or LogContext(url=url)
        if not url.lower().startswith(("http://", "https://")):
            error = f"request URL must start with http:// or https://, got {url!r}"
            log_event(_logger, "http.invalid_url", ctx, level=logging.WARNING, error=error)
            return RequestResult.transport_failure(error, ErrorCode.VALIDATION)
        if self._client is not None:
            return self._send(self._client, url, headers, payload, timeout, ctx)
        with httpx.Client(timeout=timeout, transport=self._transport) as client:
            return self._send(client, url, headers, payload, timeout, ctx)

    def _send(
        self,
        client: httpx.Client,
        url: str,
        headers: Mapping[str, str],
        payload: Mapping[str, Any],
        timeout: int,
        ctx: LogContext,
    ) -> RequestResult:
        body = json.dumps(payload)
        log_event(_logger, "http.request", ctx, level=logging.DEBUG, timeout=timeout, bytes=len(body))
        try:
            request = client.build_request("POST", url, headers=dict(headers), content=body, timeout=timeout)
        except (httpx.InvalidURL, ValueError) as exc:
            # header values httpx cannot encode (non-ASCII) or a malformed URL
            error = f"invalid request: {exc}"
            log_event(
                _logger,
                "http.invalid_request",
                ctx,
                level=logging.WARNING,
                error=error,
                error_type=exc.__class__.__name__,
            )
            return RequestResult.transport_failure(error, ErrorCode.VALIDATION)
        try:
            response = client.send(request)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            error = str(exc) or exc.__class__.__name__
            code = classify_exception(exc)
            log_event(
                _logger,
                "http.transport_error",
                ctx,
                level=logging.WARNING,
                error=error,
                error_type=exc.__class__.__name__,
                error_code=code.value,
            )
            return RequestResult.transport_failure(error, code)

        raw = response.text
        result = RequestResult(
            status=response.status_code,
            headers=normalize_response_headers(response.headers.raw, response.headers.encoding),
            body=_decode_body(raw),
            raw=raw,
            error=None,
        )
        log_event(
            _logger,
            "http.response",
            ctx,
            level=logging.INFO if result.ok else logging.WARNING,
            status=result.status,
            json_body=result.body is not None,
        )
        return result


__all__ = ["HttpConnector", "normalize_response_headers"]
