"""
Pydantic DTOs validating chat input at the edges (CLI, host applications).

The chat client itself forwards messages untouched; these models are for
callers that want early, explicit validation before a request is built.
Validation either succeeds or raises ``pydantic.ValidationError``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

Role = Literal["system", "user", "assistant", "tool"]


class MessageDTO(BaseModel):
    """One chat message with non-blank text content."""

    role: Role
    content: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def _validate_content(self) -> "MessageDTO":
        if not self.content.strip():
            raise ValueError("content string must be non-empty")
        return self


class ChatRequestDTO(BaseModel):
    """Validated request for :meth:`ChatClient.chat`.

    Attributes:
        provider: Optional provider name; ``None`` uses the default driver.
        messages: Ordered, non-empty message list starting with system/user.
        model: Optional model override.
        temperature: Optional sampling temperature within [0.0, 2.0].
        max_tokens: Optional positive completion limit.
        payload: Extra request-body fields merged last.
    """

    provider: Optional[str] = None
    messages: List[MessageDTO] = Field(..., min_length=1)
    model: Optional[str] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)
    payload: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_sequence(self) -> "ChatRequestDTO":
        if self.messages[0].role not in ("system", "user"):
            raise ValueError("first message must be from 'system' or 'user'")
        return self

    def to_options(self) -> Dict[str, Any]:
        """Translate into the ``options`` mapping accepted by ``ChatClient.chat``."""
        payload: Dict[str, Any] = {}
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens
        payload.update(self.payload)
        options: Dict[str, Any] = {"payload": payload}
        if self.model:
            options["model"] = self.model
        return options


__all__ = ["Role", "MessageDTO", "ChatRequestDTO"]
