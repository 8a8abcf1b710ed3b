"""Configuration sources consulted by the resolver, in priority order.

Each source answers three questions about a provider without ever raising:
does it know the provider, what value does it hold for a field, and what value
does it hold for a top-level key such as ``default``. The resolver walks an
explicit ordered list of sources and keeps the first non-empty answer per
field, so adding a layer means adding a source, not editing merge logic.

Implementations
---------------
``MappingConfigSource``
    A structured store (e.g. an application's settings tree). Provider fields
    live under ``providers.<name>.<field>``; the older ``<name>.<field>`` and
    ``drivers.<name>.<field>`` layouts are read as fallbacks.
``FileConfigSource``
    A ``MappingConfigSource`` loaded from a JSON or YAML file.
``EnvConfigSource``
    Process environment using the ``AI_{PROVIDER}_{FIELD}`` convention plus
    the legacy aliases in :mod:`aihub_providers.config.env`.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple, runtime_checkable

import yaml

from ..base.logging import get_logger, log_event
from .env import DRIVER_ENV_VARS, PROVIDER_FIELDS, env_var_candidates, lookup_env

_logger = get_logger("aihub.config")

# Where provider sections may live inside a structured store, first match wins.
PROVIDER_SECTIONS: Tuple[str, ...] = ("providers", "", "drivers")


@runtime_checkable
class ConfigSource(Protocol):
    """Read-only view of one configuration layer."""

    name: str

    def get(self, key: str) -> Any:
        """Return the value at a dotted top-level path, or ``None``."""

    def provider_value(self, provider: str, field: str) -> Any:
        """Return ``field`` for ``provider``, or ``None`` when unset."""

    def has_provider(self, provider: str) -> bool:
        """Return True when this layer holds any value for ``provider``."""


def _dig(data: Any, path: str) -> Any:
    node = data
    for part in path.split("."):
        if not isinstance(node, Mapping) or part not in node:
            return None
        node = node[part]
    return node


class MappingConfigSource:
    """Structured store backed by an in-memory mapping.

    The mapping is read on every lookup and never copied, so callers that
    mutate their settings between calls are seen immediately.
    """

    name = "store"

    def __init__(self, store: Optional[Mapping[str, Any]] = None, *, name: Optional[str] = None) -> None:
        self._store: Mapping[str, Any] = store if isinstance(store, Mapping) else {}
        if name:
            self.name = name

    def get(self, key: str) -> Any:
        return _dig(self._store, key)

    def _section(self, provider: str) -> Optional[Mapping[str, Any]]:
        provider = (provider or "").strip().lower()
        if not provider:
            return None
        for prefix in PROVIDER_SECTIONS:
            section = _dig(self._store, f"{prefix}.{provider}" if prefix else provider)
            if isinstance(section, Mapping) and section:
                return section
        return None

    def provider_value(self, provider: str, field: str) -> Any:
        section = self._section(provider)
        return section.get(field) if section is not None else None

    def has_provider(self, provider: str) -> bool:
        return self._section(provider) is not None


def load_config_file(path: str | os.PathLike[str]) -> Dict[str, Any]:
    """Load a JSON or YAML mapping from ``path``.

    JSON is tried first, then YAML. Missing files, parse errors and non-mapping
    documents all yield ``{}``; the failure is logged, not raised.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        log_event(_logger, "config.file_unreadable", path=str(p), error=str(exc), level=logging.WARNING)
        return {}
    data: Any
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            log_event(_logger, "config.file_invalid", path=str(p), error=str(exc), level=logging.WARNING)
            return {}
    if not isinstance(data, dict):
        log_event(_logger, "config.file_not_mapping", path=str(p), level=logging.WARNING)
        return {}
    return data


class FileConfigSource(MappingConfigSource):
    """Structured store loaded once from a JSON/YAML file."""

    name = "file"

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        super().__init__(load_config_file(self.path))


class EnvConfigSource:
    """Environment-variable layer.

    ``environ`` defaults to the live ``os.environ`` mapping so later changes to
    the process environment are visible without rebuilding the source.
    """

    name = "env"

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ: Mapping[str, str] = os.environ if environ is None else environ

    def get(self, key: str) -> Any:
        if key == "default":
            value, _ = lookup_env(self._environ, DRIVER_ENV_VARS)
            return value
        value, _ = lookup_env(self._environ, ["AI_HUB_" + key.replace(".", "_").upper()])
        return value

    def provider_value(self, provider: str, field: str) -> Any:
        if not provider:
            return None
        value, _ = lookup_env(self._environ, env_var_candidates(provider, field))
        return value

    def has_provider(self, provider: str) -> bool:
        if not provider:
            return False
        return any(self.provider_value(provider, field) for field in PROVIDER_FIELDS)


__all__ = [
    "ConfigSource",
    "MappingConfigSource",
    "FileConfigSource",
    "EnvConfigSource",
    "load_config_file",
    "PROVIDER_SECTIONS",
]
