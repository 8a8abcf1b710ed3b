"""Unified configuration layer for providers.

Goals
-----
* Centralize defaults (base URLs, models, paths, timeout, headers).
* Merge sources in a predictable order, first non-empty value per field wins:
    1. Caller overrides
    2. Structured store (in-memory mapping, or a JSON/YAML file named by
       ``AI_HUB_CONFIG_FILE``)
    3. Environment variables (``AI_{PROVIDER}_{FIELD}`` plus legacy aliases)
    4. Built-in defaults
* Never raise: unknown providers resolve to an empty configuration.

Public API
----------
* resolve_provider_config(provider=None, overrides=None) -> ProviderConfig
* get_model(provider=None) -> str
* ConfigResolver and decode_headers live in ``.resolver``
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional

from .defaults import BUILTIN_PROVIDERS, DEFAULT_DRIVER
from .env import env_var_name
from .sources import ConfigSource, EnvConfigSource, FileConfigSource, MappingConfigSource

if TYPE_CHECKING:
    from ..base.models import ProviderConfig


def resolve_provider_config(provider: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None) -> "ProviderConfig":
    """Resolve ``provider`` against the default sources (file + environment)."""
    # Local import: resolver depends on base.models, which imports this package.
    from .resolver import ConfigResolver

    return ConfigResolver().resolve(provider, overrides)


def get_model(provider: Optional[str] = None) -> str:
    from .resolver import ConfigResolver

    return ConfigResolver().default_model(provider)


__all__ = [
    "resolve_provider_config",
    "get_model",
    "BUILTIN_PROVIDERS",
    "DEFAULT_DRIVER",
    "env_var_name",
    "ConfigSource",
    "EnvConfigSource",
    "FileConfigSource",
    "MappingConfigSource",
]
