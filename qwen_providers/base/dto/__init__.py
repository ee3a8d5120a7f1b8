"""Pydantic wire DTOs for requests, responses and stream events."""

from .request import QwenMessage, QwenRequest
from .response import ChatMessage, Choice, QwenResponse, Usage
from .stream_event import StreamChoice, StreamDone, StreamEvent, StreamMessage

__all__ = [
    "QwenMessage",
    "QwenRequest",
    "ChatMessage",
    "Choice",
    "QwenResponse",
    "Usage",
    "StreamChoice",
    "StreamDone",
    "StreamEvent",
    "StreamMessage",
]
