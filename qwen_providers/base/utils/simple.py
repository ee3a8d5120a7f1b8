"""Convenience helper for one-prompt interactions.

Sends a plain text prompt without building a message list by hand.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..models import ApiConfig, Message
from ..streaming import accumulate_events

if TYPE_CHECKING:
    from ...qwen.client import QwenProvider


def simple(
    provider: "QwenProvider",
    text: str,
    *,
    config: Optional[ApiConfig] = None,
    stream: bool = False,
) -> str:
    """Send ``text`` as a single user message and return the assistant text.

    Parameters
    - provider: Provider instance to call.
    - text: Prompt text.
    - config: Optional per-call configuration.
    - stream: When ``True`` the streaming endpoint is used and the deltas are
      accumulated; the result is the same text.

    Raises
    - ProviderError: Propagated from the provider (including stream error items).
    """
    messages = [Message(role="user", content=text)]
    if stream:
        response = accumulate_events(provider.stream_chat(messages, config))
    else:
        response = provider.chat(messages, config)
    return response.text or ""


__all__ = ["simple"]
