"""
Resolved, immutable configuration for one provider.

Built fresh by :class:`~aihub_providers.config.resolver.ConfigResolver` for
every call and never cached. Invariants: ``base_url`` has no trailing ``/``
and ``timeout_seconds`` is a positive integer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from ...config.defaults import DEFAULT_TIMEOUT_SECONDS
from ..families import ProviderFamily


def _mask(secret: str) -> str:
    if not secret:
        return ""
    if len(secret) <= 8:
        return "***"
    return f"{secret[:4]}...{secret[-4:]}"


@dataclass(frozen=True)
class ProviderConfig:
    """Effective connection settings for a provider.

    Attributes:
        name: Lowercased provider name.
        api_key: Secret credential; ``""`` when unset.
        base_url: API root without trailing slash.
        model: Default model for requests that do not override it.
        timeout_seconds: Per-request timeout.
        chat_path: Endpoint suffix appended directly to ``base_url``.
        headers: Custom headers (win over ``default_headers``).
        default_headers: Baseline ``Accept`` / ``Content-Type`` headers.
        organization: OpenAI organization id; ``""`` when unset.
    """

    name: str
    api_key: str = ""
    base_url: str = ""
    model: str = ""
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    chat_path: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    default_headers: Dict[str, str] = field(default_factory=dict)
    organization: str = ""

    @classmethod
    def empty(cls, name: str) -> "ProviderConfig":
        """Configuration for a provider nothing knows about."""
        return cls(name=(name or "").strip().lower())

    @property
    def is_empty(self) -> bool:
        """True when no source supplied anything usable for this provider."""
        return not (self.base_url or self.api_key or self.model or self.chat_path or self.headers)

    @property
    def family(self) -> ProviderFamily:
        return ProviderFamily.for_provider(self.name)

    @property
    def url(self) -> str:
        """Request URL: ``base_url`` and ``chat_path`` concatenated."""
        return f"{self.base_url}{self.chat_path}"

    def to_dict(self, mask_secrets: bool = True) -> Dict[str, Any]:
        """Return a JSON-friendly view; the API key is masked by default."""
        return {
            "name": self.name,
            "family": self.family.value,
            "api_key": _mask(self.api_key) if mask_secrets else self.api_key,
            "base_url": self.base_url,
            "model": self.model,
            "timeout": self.timeout_seconds,
            "chat_path": self.chat_path,
            "headers": dict(self.headers),
            "default_headers": dict(self.default_headers),
            "organization": self.organization,
        }


__all__ = ["ProviderConfig"]
