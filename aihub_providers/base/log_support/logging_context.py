"""Structured logging context carried through a chat call.

:class:`LogContext` holds the provider name, model and target URL for an
outbound request, plus free-form ``extra`` fields; ``to_dict`` flattens it and
drops ``None`` values for compact events.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for provider logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    url: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
