"""
Provider-agnostic models public surface.

Re-exports the implementations under ``aihub_providers.base.models_parts``.
"""

from .models_parts.message import Message, Role, to_message_dicts
from .models_parts.provider_config import ProviderConfig
from .models_parts.request_result import RequestResult

__all__ = [
    "Message",
    "Role",
    "to_message_dicts",
    "ProviderConfig",
    "RequestResult",
]
