"""Chat client: one configured chat-completion call per invocation.

Call flow:
    ``chat(messages, options)`` -> ``ConfigResolver.resolve(provider, options)``
    -> ``HttpConnector.build_headers`` -> family payload defaults overlaid by
    ``options["payload"]`` -> ``POST base_url + chat_path`` -> ``RequestResult``.

No retries, streaming or session state: a single request, a single
fully-read response. Business failures (bad credentials, rate limits,
malformed requests) come back as the provider's status code; transport
failures come back as ``RequestResult.error``.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from ..base.http import HttpConnector
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ProviderConfig, RequestResult, to_message_dicts
from ..config.resolver import ConfigResolver

_logger = get_logger("aihub.chat")

# Option key holding request-body overrides; every other key is config.
PAYLOAD_OPTION = "payload"


class ChatClient:
    """Send chat-completion requests to a named provider.

    Parameters
    ----------
    provider: str | None
        Provider name. ``None`` follows the resolver's default driver at call
        time, so changing ``AI_HUB_DRIVER`` retargets an existing client.
    resolver: ConfigResolver | None
        Configuration layer; defaults to file + environment sources.
    connector: HttpConnector | None
        HTTP layer; inject one built on ``httpx.MockTransport`` in tests.

    Examples
    --------
    >>> client = ChatClient("openai")                              # doctest: +SKIP
    >>> result = client.chat([{"role": "user", "content": "hi"}])  # doctest: +SKIP
    >>> result.status, result.body                                 # doctest: +SKIP
    """

    def __init__(
        self,
        provider: Optional[str] = None,
        resolver: Optional[ConfigResolver] = None,
        connector: Optional[HttpConnector] = None,
    ) -> None:
        self._provider = provider.strip().lower() if provider else None
        self.resolver = resolver or ConfigResolver()
        self.connector = connector or HttpConnector()

    @property
    def name(self) -> str:
        """Effective provider name."""
        return self._provider or self.resolver.default_driver()

    def default_model(self) -> str:
        return self.resolver.default_model(self.name)

    def config(self, options: Optional[Mapping[str, Any]] = None) -> ProviderConfig:
        """Resolve the configuration a call with ``options`` would use."""
        return self.resolver.resolve(self.name, options)

    def build_payload(
        self, config: ProviderConfig, messages: Iterable[Any], options: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """Family defaults with caller payload overrides merged on top (shallow)."""
        payload = config.family.payload_defaults(config.model, to_message_dicts(messages))
        overrides = (options or {}).get(PAYLOAD_OPTION) or {}
        if isinstance(overrides, Mapping):
            payload.update(overrides)
        return payload

    def chat(self, messages: Iterable[Any], options: Optional[Mapping[str, Any]] = None) -> RequestResult:
        """Perform one chat-completion request.

        Parameters
        ----------
        messages: Iterable
            Ordered ``{"role", "content"}`` mappings (``Message`` / ``MessageDTO``
            instances are accepted too).
        options: Mapping | None
            Per-call overrides: configuration keys (``api_key``, ``base_url``,
            ``model``, ``timeout``, ``headers``, ``chat_path``,
            ``messages_path``, ``organization``, ``default_headers``) and
            ``payload`` for request-body fields.

        Returns
        -------
        RequestResult
            Never raises for transport or HTTP failures.
        """
        options = options or {}
        config = self.config(options)
        headers = self.connector.build_headers(config)
        payload = self.build_payload(config, messages, options)
        url = self.connector.build_url(config)
        ctx = LogContext(provider=config.name, model=str(payload.get("model") or ""), url=url)
        if config.is_empty:
            log_event(_logger, "chat.unconfigured_provider", ctx)
        return self.connector.post_json(url, headers, payload, config.timeout_seconds, ctx)


__all__ = ["ChatClient", "PAYLOAD_OPTION"]
