"""aihub_providers.config.defaults
=============================

Central place for the small, stable default values used when a provider's
configuration does not set a field. These are the last layer consulted by
:class:`~aihub_providers.config.resolver.ConfigResolver`, below caller
overrides, the structured store, and environment variables.

Only plain constants live here (no I/O, no imports from sibling modules) so
every layer can import them without cycles.
"""

from __future__ import annotations

from typing import Dict

# ---- Driver selection ----
# Provider used when neither the caller nor configuration names one.
DEFAULT_DRIVER = "openai"

# ---- Request shape ----
DEFAULT_TIMEOUT_SECONDS = 60
DEFAULT_CHAT_PATH = "/chat/completions"
DEFAULT_TEMPERATURE = 0.7

# Baseline headers merged under any custom headers.
DEFAULT_HEADERS: Dict[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

# ---- OpenAI-style providers ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"

# ---- Anthropic-style providers ----
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_DEFAULT_MODEL = "claude-3-5-sonnet"
ANTHROPIC_MESSAGES_PATH = "/v1/messages"
ANTHROPIC_API_VERSION = "2023-06-01"
ANTHROPIC_DEFAULT_MAX_TOKENS = 4096

# ---- Other OpenAI-compatible providers ----
GROQ_DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
GROQ_DEFAULT_MODEL = "llama3-8b-8192"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_DEFAULT_MODEL = "openrouter/horizon-beta"

# Built-in providers and the per-field defaults they start from. Providers not
# listed here only exist when configuration or the environment mentions them.
BUILTIN_PROVIDERS: Dict[str, Dict[str, str]] = {
    "openai": {
        "base_url": OPENAI_DEFAULT_BASE_URL,
        "model": OPENAI_DEFAULT_MODEL,
        "chat_path": DEFAULT_CHAT_PATH,
    },
    "anthropic": {
        "base_url": ANTHROPIC_DEFAULT_BASE_URL,
        "model": ANTHROPIC_DEFAULT_MODEL,
        "chat_path": ANTHROPIC_MESSAGES_PATH,
    },
    "groq": {
        "base_url": GROQ_DEFAULT_BASE_URL,
        "model": GROQ_DEFAULT_MODEL,
        "chat_path": DEFAULT_CHAT_PATH,
    },
    "openrouter": {
        "base_url": OPENROUTER_DEFAULT_BASE_URL,
        "model": OPENROUTER_DEFAULT_MODEL,
        "chat_path": DEFAULT_CHAT_PATH,
    },
}

# ---- Configuration sources ----
# Env var naming an optional JSON/YAML file that acts as the structured store.
CONFIG_FILE_ENV = "AI_HUB_CONFIG_FILE"

# ---- Registry ----
REGISTRY_FILE_ENV = "AI_HUB_REGISTRY"
REGISTRY_DEFAULT_PATH = ".ai-hub/registry.json"


__all__ = [
    "DEFAULT_DRIVER",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_CHAT_PATH",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_HEADERS",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_MESSAGES_PATH",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "GROQ_DEFAULT_BASE_URL",
    "GROQ_DEFAULT_MODEL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_MODEL",
    "BUILTIN_PROVIDERS",
    "CONFIG_FILE_ENV",
    "REGISTRY_FILE_ENV",
    "REGISTRY_DEFAULT_PATH",
]
