"""Qwen (DashScope) provider package."""

from .client import QwenProvider
from .chat_helpers import decode_chat_response
from .stream_parser import QwenStreamParser, iter_stream_events

__all__ = ["QwenProvider", "QwenStreamParser", "decode_chat_response", "iter_stream_events"]
