"""Provider families: the two wire dialects a provider can speak.

A provider's family is a static property of its name, not configuration:
``anthropic`` speaks the Anthropic Messages dialect, every other provider
(openai, groq, openrouter, local gateways, ...) the OpenAI chat-completions
dialect. Each family owns its auth header, its extra headers and its payload
defaults.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping

from ..config.defaults import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    ANTHROPIC_MESSAGES_PATH,
    DEFAULT_CHAT_PATH,
    DEFAULT_TEMPERATURE,
    OPENAI_DEFAULT_MODEL,
)

_ANTHROPIC_PROVIDERS = frozenset({"anthropic"})


class ProviderFamily(str, Enum):
    """Wire dialect of a provider."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"

    @classmethod
    def for_provider(cls, name: str) -> "ProviderFamily":
        """Return the family for a provider name (case-insensitive)."""
        if (name or "").strip().lower() in _ANTHROPIC_PROVIDERS:
            return cls.ANTHROPIC
        return cls.OPENAI

    @property
    def default_path(self) -> str:
        return ANTHROPIC_MESSAGES_PATH if self is ProviderFamily.ANTHROPIC else DEFAULT_CHAT_PATH

    @property
    def path_fields(self) -> tuple:
        """Config keys naming the endpoint path, highest priority first."""
        if self is ProviderFamily.ANTHROPIC:
            return ("messages_path", "chat_path")
        return ("chat_path",)

    @property
    def fallback_model(self) -> str:
        """Model used when nothing configures one. Empty for Anthropic."""
        return OPENAI_DEFAULT_MODEL if self is ProviderFamily.OPENAI else ""

    def auth_header(self, api_key: str) -> tuple:
        """Return the ``(name, value)`` authentication header for ``api_key``."""
        if self is ProviderFamily.ANTHROPIC:
            return "x-api-key", api_key
        return "Authorization", f"Bearer {api_key}"

    def extra_headers(self, organization: str = "") -> Dict[str, str]:
        """Dialect headers injected when the caller has not set them."""
        if self is ProviderFamily.ANTHROPIC:
            return {"anthropic-version": ANTHROPIC_API_VERSION}
        return {"OpenAI-Organization": organization} if organization else {}

    def payload_defaults(self, model: str, messages: List[Mapping[str, Any]]) -> Dict[str, Any]:
        """Built-in request body; caller payload overrides are laid over it."""
        payload: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": DEFAULT_TEMPERATURE,
            "stream": False,
        }
        if self is ProviderFamily.ANTHROPIC:
            payload["max_tokens"] = ANTHROPIC_DEFAULT_MAX_TOKENS
        return payload


__all__ = ["ProviderFamily"]
