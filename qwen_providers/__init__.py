"""qwen_providers package

Client for the Qwen chat-completions service (Alibaba DashScope,
OpenAI-compatible mode) with an incremental streaming parser.

Public API (re-exported):
    - Version: ``__version__``
    - Provider: :class:`QwenProvider`
    - Models: :class:`Message`, :class:`ApiConfig`
    - Wire DTOs: :class:`QwenResponse`, :class:`StreamMessage`, :class:`StreamDone`
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`
    - Helpers: :func:`accumulate_events`, :func:`simple`, :func:`iter_stream_events`

Example::

    from qwen_providers import ApiConfig, Message, QwenProvider, StreamMessage

    provider = QwenProvider(api_key="sk-...")
    for item in provider.stream_chat([Message.user("hi")], ApiConfig(body={"temperature": 0.2})):
        if isinstance(item, StreamMessage):
            print(item.delta_text, end="")
"""

from .base.dto import QwenResponse, StreamDone, StreamEvent, StreamMessage
from .base.errors import ErrorCode, ProviderError
from .base.models import ApiConfig, Message, Role
from .base.streaming import StreamItem, accumulate_events
from .base.utils.simple import simple
from .qwen import QwenProvider, QwenStreamParser, iter_stream_events

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "QwenProvider",
    "QwenStreamParser",
    "iter_stream_events",
    "ApiConfig",
    "Message",
    "Role",
    "QwenResponse",
    "StreamDone",
    "StreamEvent",
    "StreamMessage",
    "StreamItem",
    "ErrorCode",
    "ProviderError",
    "accumulate_events",
    "simple",
]
