"""aihub_providers package

Configuration resolution and a single-call HTTP client for OpenAI- and
Anthropic-compatible chat-completion APIs.

Public API (re-exported):
    - Configuration: :class:`ConfigResolver`, :func:`decode_headers`,
      :class:`ProviderConfig`
    - Chat: :class:`ChatClient`, :class:`HttpConnector`, :class:`RequestResult`
    - Families: :class:`ProviderFamily`
    - Errors: :class:`ProviderError`, :class:`ErrorCode`
    - Registry: :class:`Registry`

Example::

    from aihub_providers import ChatClient

    result = ChatClient("anthropic").chat([{"role": "user", "content": "hi"}])
    if result.error is None and result.status == 200:
        print(result.body)
"""

from .base.errors import ErrorCode, ProviderError
from .base.families import ProviderFamily
from .base.http import HttpConnector
from .base.models import Message, ProviderConfig, RequestResult
from .chat import ChatClient
from .config.resolver import ConfigResolver, decode_headers
from .registry import Registry

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ChatClient",
    "ConfigResolver",
    "decode_headers",
    "ErrorCode",
    "HttpConnector",
    "Message",
    "ProviderConfig",
    "ProviderError",
    "ProviderFamily",
    "Registry",
    "RequestResult",
]
