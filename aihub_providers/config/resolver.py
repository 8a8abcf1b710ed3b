"""Layered provider configuration resolution.

Merge order per field (first non-null, non-empty value wins):

1. Caller overrides passed to :meth:`ConfigResolver.resolve`.
2. Configured sources, in order (structured store or file, then environment).
3. Built-in defaults from :mod:`aihub_providers.config.defaults`.

Resolution never raises. A misconfigured key should surface as an
authentication failure from the remote service, not a local exception, so
every malformed value degrades to its default and an unknown provider yields
an empty :class:`ProviderConfig`.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..base.families import ProviderFamily
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ProviderConfig
from .defaults import (
    BUILTIN_PROVIDERS,
    CONFIG_FILE_ENV,
    DEFAULT_DRIVER,
    DEFAULT_HEADERS,
    DEFAULT_TIMEOUT_SECONDS,
)
from .env import PROVIDER_FIELDS
from .sources import ConfigSource, EnvConfigSource, FileConfigSource, MappingConfigSource

_logger = get_logger("aihub.config.resolver")


def _is_set(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, bytes, Mapping, list, tuple)):
        return len(value) > 0
    return True


def decode_headers(headers: Any) -> Dict[str, str]:
    """Normalize a header setting into a mapping.

    A mapping is returned as a dict with the same items, a JSON object string
    is parsed, and anything else (including invalid JSON or a JSON array)
    yields ``{}``. Idempotent: ``decode_headers(decode_headers(x)) ==
    decode_headers(x)``.
    """
    if isinstance(headers, Mapping):
        return dict(headers)
    if isinstance(headers, str) and headers:
        try:
            decoded = json.loads(headers)
        except ValueError:
            return {}
        if isinstance(decoded, dict):
            return decoded
    return {}


def coerce_timeout(value: Any, default: int = DEFAULT_TIMEOUT_SECONDS) -> int:
    """Return ``value`` as a positive int seconds count, else ``default``."""
    if isinstance(value, bool):
        return default
    try:
        seconds = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return seconds if seconds > 0 else default


def _str_headers(headers: Mapping[Any, Any]) -> Dict[str, str]:
    return {str(k): str(v) for k, v in headers.items() if v is not None}


class ConfigResolver:
    """Resolve a provider's effective :class:`ProviderConfig`.

    Parameters
    ----------
    sources: Sequence[ConfigSource] | None
        Layers consulted after caller overrides, highest priority first.
        ``None`` selects :meth:`default_sources` (config file named by
        ``AI_HUB_CONFIG_FILE`` when set, then the environment).

    Notes
    -----
    The resolver holds no per-call state; it is safe to share across threads
    as long as the underlying sources are only read.
    """

    def __init__(self, sources: Optional[Sequence[ConfigSource]] = None) -> None:
        self._sources: List[ConfigSource] = list(self.default_sources() if sources is None else sources)

    # ---- construction helpers -------------------------------------------------

    @staticmethod
    def default_sources(environ: Optional[Mapping[str, str]] = None) -> List[ConfigSource]:
        env = os.environ if environ is None else environ
        sources: List[ConfigSource] = []
        path = env.get(CONFIG_FILE_ENV)
        if path:
            sources.append(FileConfigSource(path))
        sources.append(EnvConfigSource(env))
        return sources

    @classmethod
    def from_store(cls, store: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None) -> "ConfigResolver":
        """Structured store first, environment as the fallback layer."""
        return cls([MappingConfigSource(store), EnvConfigSource(environ)])

    @classmethod
    def from_file(cls, path: str | os.PathLike[str], environ: Optional[Mapping[str, str]] = None) -> "ConfigResolver":
        return cls([FileConfigSource(path), EnvConfigSource(environ)])

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "ConfigResolver":
        return cls(cls.default_sources(environ))

    @property
    def sources(self) -> List[ConfigSource]:
        return list(self._sources)

    # ---- lookups --------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Return the first set value for a dotted top-level key."""
        for source in self._sources:
            value = source.get(key)
            if _is_set(value):
                return value
        return default

    def default_driver(self) -> str:
        """Configured default provider name, ``"openai"`` when unset or empty."""
        value = self.get("default")
        if isinstance(value, str) and value.strip():
            return value.strip().lower()
        return DEFAULT_DRIVER

    def _first(self, provider: str, fields: Iterable[str], overrides: Mapping[str, Any]) -> Any:
        fields = tuple(fields)
        for field in fields:
            if _is_set(overrides.get(field)):
                return overrides[field]
        for source in self._sources:
            for field in fields:
                value = source.provider_value(provider, field)
                if _is_set(value):
                    return value
        return None

    def is_known(self, provider: str, overrides: Optional[Mapping[str, Any]] = None) -> bool:
        """True when a built-in, an override or any source mentions ``provider``."""
        name = (provider or "").strip().lower()
        if not name:
            return False
        if name in BUILTIN_PROVIDERS:
            return True
        if overrides and any(_is_set(v) for v in overrides.values()):
            return True
        return any(source.has_provider(name) for source in self._sources)

    def resolve(self, provider: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None) -> ProviderConfig:
        """Return the effective configuration for ``provider``.

        Parameters
        ----------
        provider: str | None
            Provider name (case-insensitive); ``None`` uses :meth:`default_driver`.
        overrides: Mapping | None
            Per-call values that beat every other layer. ``None`` values are
            ignored; ``headers`` may be a mapping or a JSON object string.
            Keys that are not configuration fields (e.g. ``payload``) are
            ignored here.

        Returns
        -------
        ProviderConfig
            ``ProviderConfig.empty(name)`` when nothing knows the provider.
        """
        name = (provider or self.default_driver()).strip().lower()
        ov: Dict[str, Any] = {k: v for k, v in (overrides or {}).items() if v is not None}
        for key in ("headers", "default_headers"):
            if key in ov:
                ov[key] = decode_headers(ov[key])

        if not self.is_known(name, {k: v for k, v in ov.items() if k in PROVIDER_FIELDS}):
            log_event(_logger, "config.unknown_provider", LogContext(provider=name))
            return ProviderConfig.empty(name)

        family = ProviderFamily.for_provider(name)
        builtin = BUILTIN_PROVIDERS.get(name, {})

        def pick(*fields: str) -> Any:
            value = self._first(name, fields, ov)
            if _is_set(value):
                return value
            for field in fields:
                if _is_set(builtin.get(field)):
                    return builtin[field]
            return None

        base_url = str(pick("base_url") or "").rstrip("/")
        model = str(pick("model") or family.fallback_model)
        default_headers = decode_headers(pick("default_headers"))

        config = ProviderConfig(
            name=name,
            api_key=str(pick("api_key") or ""),
            base_url=base_url,
            model=model,
            timeout_seconds=coerce_timeout(pick("timeout")),
            chat_path=str(pick(*family.path_fields) or family.default_path),
            headers=_str_headers(decode_headers(pick("headers"))),
            default_headers=_str_headers(default_headers or DEFAULT_HEADERS),
            organization=str(pick("organization") or ""),
        )
        log_event(
            _logger,
            "config.resolved",
            LogContext(provider=name, model=config.model, url=config.url),
            level=logging.DEBUG,
            api_key_present=bool(config.api_key),
            sources=[s.name for s in self._sources],
        )
        return config

    def default_model(self, provider: Optional[str] = None) -> str:
        """Model a provider uses when a request does not name one."""
        config = self.resolve(provider)
        return config.model or config.family.fallback_model


__all__ = ["ConfigResolver", "decode_headers", "coerce_timeout"]
