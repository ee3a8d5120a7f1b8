"""
Providers Base Package

Exports provider-agnostic pieces used by the Qwen adapter:
- Models: caller-facing dataclasses (``Message``, ``ApiConfig``)
- DTOs: pydantic wire shapes for requests, responses and stream events
- Errors: the ``ErrorCode`` taxonomy and ``ProviderError``
- Streaming: the stream item type and ``accumulate_events``
"""

from .dto import (
    ChatMessage,
    Choice,
    QwenMessage,
    QwenRequest,
    QwenResponse,
    StreamChoice,
    StreamDone,
    StreamEvent,
    StreamMessage,
    Usage,
)
from .errors import ErrorCode, ProviderError, classify_exception
from .models import ApiConfig, Message, Role
from .streaming import StreamItem, accumulate_events
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "ApiConfig",
    "Message",
    "Role",
    # DTOs
    "ChatMessage",
    "Choice",
    "QwenMessage",
    "QwenRequest",
    "QwenResponse",
    "StreamChoice",
    "StreamDone",
    "StreamEvent",
    "StreamMessage",
    "Usage",
    # Errors
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    # Streaming
    "StreamItem",
    "accumulate_events",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
