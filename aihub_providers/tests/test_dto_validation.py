"""Validation rules of the chat request DTOs."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from aihub_providers.base.dto import ChatRequestDTO, MessageDTO


def test_chat_request_happy_path():
    req = ChatRequestDTO(
        provider="openai",
        messages=[MessageDTO(role="system", content="Be brief."), MessageDTO(role="user", content="Hello")],
        model="gpt-4o-mini",
        temperature=0.2,
        max_tokens=64,
        payload={"top_p": 0.9},
    )
    assert req.to_options() == {  # nosec B101
        "payload": {"temperature": 0.2, "max_tokens": 64, "top_p": 0.9},
        "model": "gpt-4o-mini",
    }


def test_minimal_request_options():
    req = ChatRequestDTO(messages=[{"role": "user", "content": "hi"}])
    assert req.to_options() == {"payload": {}}  # nosec B101


@pytest.mark.parametrize("content", ["", "   "])
def test_message_rejects_blank_content(content):
    with pytest.raises(ValidationError):
        MessageDTO(role="user", content=content)


def test_message_rejects_unknown_role():
    with pytest.raises(ValidationError):
        MessageDTO(role="robot", content="hi")


def test_request_requires_messages_and_valid_first_role():
    with pytest.raises(ValidationError):
        ChatRequestDTO(messages=[])
    with pytest.raises(ValidationError):
        ChatRequestDTO(messages=[{"role": "assistant", "content": "hi"}])


@pytest.mark.parametrize("field,value", [("temperature", 2.5), ("temperature", -0.1), ("max_tokens", 0)])
def test_request_parameter_bounds(field, value):
    with pytest.raises(ValidationError):
        ChatRequestDTO(messages=[{"role": "user", "content": "hi"}], **{field: value})
