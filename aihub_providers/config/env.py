"""aihub_providers.config.env
=========================

Environment variable naming convention for provider configuration.

Purpose
-------
- Derive the conventional variable name for a provider field:
  ``AI_{PROVIDER}_{FIELD}`` with ``.`` and ``-`` mapped to ``_``
  (``openai`` + ``api_key`` -> ``AI_OPENAI_API_KEY``).
- List the legacy aliases still honored after the conventional name
  (``OPENAI_API_KEY``, ``ANTHROPIC_BASE_URL``, ...), canonical name first.
- Name the variables that select the default driver.

Failure Modes
-------------
Helpers never raise on unknown providers or unset variables; they return
``None`` and let the resolver fall through to the next layer.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, Mapping, Optional, Tuple

ENV_PREFIX = "AI_"

# Variables naming the default driver, in priority order.
DRIVER_ENV_VARS: Tuple[str, ...] = ("AI_HUB_DRIVER", "AI_DRIVER")

# Per-provider fields read from the environment. Other AI_* variables (AI_HUB_DRIVER,
# AI_HUB_CONFIG_FILE, ...) are package controls, not provider settings.
PROVIDER_FIELDS: Tuple[str, ...] = (
    "api_key",
    "base_url",
    "model",
    "organization",
    "timeout",
    "chat_path",
    "messages_path",
    "headers",
    "default_headers",
)

# (provider, field) -> legacy names consulted after AI_{PROVIDER}_{FIELD}
ENV_ALIASES: Dict[Tuple[str, str], Tuple[str, ...]] = {
    ("openai", "api_key"): ("OPENAI_API_KEY",),
    ("openai", "base_url"): ("OPENAI_BASE_URL",),
    ("openai", "model"): ("OPENAI_MODEL",),
    ("openai", "timeout"): ("OPENAI_TIMEOUT",),
    ("openai", "organization"): ("AI_OPENAI_ORG", "OPENAI_ORG"),
    ("anthropic", "api_key"): ("ANTHROPIC_API_KEY",),
    ("anthropic", "base_url"): ("ANTHROPIC_BASE_URL",),
    ("anthropic", "model"): ("ANTHROPIC_MODEL",),
    ("anthropic", "timeout"): ("ANTHROPIC_TIMEOUT",),
}

_SEPARATORS = re.compile(r"[.\-]")


def _segment(value: str) -> str:
    return _SEPARATORS.sub("_", value.strip()).upper()


def env_var_name(provider: str, field: str) -> str:
    """Return the conventional variable name for ``provider``/``field``.

    >>> env_var_name("openai", "api_key")
    'AI_OPENAI_API_KEY'
    >>> env_var_name("open-router", "chat.path")
    'AI_OPEN_ROUTER_CHAT_PATH'
    """
    return f"{ENV_PREFIX}{_segment(provider)}_{_segment(field)}"


def env_var_candidates(provider: str, field: str) -> Iterable[str]:
    """Yield acceptable variable names for a provider field, canonical first."""
    canonical = env_var_name(provider, field)
    yield canonical
    for alias in ENV_ALIASES.get(((provider or "").lower(), field), ()):
        if alias != canonical:
            yield alias


def lookup_env(environ: Mapping[str, str], names: Iterable[str]) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, name)`` for the first non-empty variable in ``names``.

    Empty strings count as unset. ``(None, None)`` when nothing matches.
    """
    for name in names:
        val = environ.get(name)
        if val:
            return val, name
    return None, None


__all__ = [
    "ENV_PREFIX",
    "DRIVER_ENV_VARS",
    "PROVIDER_FIELDS",
    "ENV_ALIASES",
    "env_var_name",
    "env_var_candidates",
    "lookup_env",
]
