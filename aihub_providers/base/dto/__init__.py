"""DTO validation package for inbound chat requests."""

from .chat import ChatRequestDTO, MessageDTO, Role

__all__ = ["Role", "MessageDTO", "ChatRequestDTO"]
