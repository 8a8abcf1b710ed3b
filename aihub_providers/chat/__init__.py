"""Chat-completion client for OpenAI- and Anthropic-compatible providers."""

from .client import ChatClient, PAYLOAD_OPTION

__all__ = ["ChatClient", "PAYLOAD_OPTION"]
