"""
Chat message model and the flattening helper used by the chat client.

Callers may pass plain ``{"role", "content"}`` mappings, :class:`Message`
instances or pydantic ``MessageDTO`` objects; the wire payload always carries
plain dictionaries in the original order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Literal, Mapping, Union

Role = Literal["system", "user", "assistant", "tool"]


@dataclass
class Message:
    """A single chat turn.

    ``content`` is usually text but may be any JSON-serializable value (e.g. a
    list of content blocks) since it is forwarded to the provider untouched.
    """

    role: Role
    content: Union[str, List[Any]]

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


def to_message_dicts(messages: Iterable[Union[Mapping[str, Any], Message, Any]]) -> List[Dict[str, Any]]:
    """Flatten supported message shapes into wire dictionaries, preserving order."""
    out: List[Dict[str, Any]] = []
    for msg in messages:
        if isinstance(msg, Message):
            out.append(msg.to_dict())
        elif isinstance(msg, Mapping):
            out.append(dict(msg))
        elif hasattr(msg, "model_dump"):
            out.append(msg.model_dump(exclude_none=True))
        else:
            raise TypeError(f"unsupported message type: {type(msg).__name__}")
    return out


__all__ = ["Message", "Role", "to_message_dicts"]
