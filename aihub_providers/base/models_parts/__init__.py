"""One-class-per-file model implementations re-exported by ``base.models``."""

from .message import Message, Role, to_message_dicts
from .provider_config import ProviderConfig
from .request_result import RequestResult

__all__ = ["Message", "Role", "to_message_dicts", "ProviderConfig", "RequestResult"]
