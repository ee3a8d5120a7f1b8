"""Streaming primitives for the provider layer.

Defines the item type produced by ``stream_chat`` and a helper folding a
stream of deltas back into a complete response.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Union

from ..constants import PROVIDER_NAME
from ..dto import ChatMessage, Choice, QwenResponse, StreamDone, StreamMessage, Usage
from ..errors import ErrorCode, ProviderError

# A stream yields events, or a single error value after which it ends.
StreamItem = Union[StreamMessage, StreamDone, ProviderError]


def accumulate_events(items: Iterable[StreamItem]) -> QwenResponse:
    """Accumulate a stream into a :class:`QwenResponse`.

    - Concatenates delta content per choice index, in arrival order.
    - Takes the role from the first delta that carries one (``assistant`` by default).
    - Keeps the last non-null ``finish_reason`` per choice.
    - Takes usage from the last event that reported it; zeros otherwise.
    - Stops at the terminal marker.

    Raises:
        ProviderError: The first error item encountered, or ``parse_error``
            when the stream contained no data event at all.
    """
    first: Optional[StreamMessage] = None
    usage: Optional[Usage] = None
    contents: Dict[int, List[str]] = {}
    roles: Dict[int, str] = {}
    finish: Dict[int, Optional[str]] = {}

    for item in items:
        if isinstance(item, ProviderError):
            raise item
        if isinstance(item, StreamDone):
            break
        if first is None:
            first = item
        if item.usage is not None:
            usage = item.usage
        for choice in item.choices:
            contents.setdefault(choice.index, [])
            if choice.delta.content:
                contents[choice.index].append(choice.delta.content)
            if choice.delta.role and choice.index not in roles:
                roles[choice.index] = choice.delta.role
            if choice.finish_reason is not None:
                finish[choice.index] = choice.finish_reason

    if first is None:
        raise ProviderError(
            code=ErrorCode.PARSE_ERROR,
            message="stream ended without any data event",
            provider=PROVIDER_NAME,
        )

    choices = [
        Choice(
            index=idx,
            message=ChatMessage(role=roles.get(idx, "assistant"), content="".join(parts)),
            finish_reason=finish.get(idx),
        )
        for idx, parts in sorted(contents.items())
    ]
    return QwenResponse(
        id=first.id,
        object="chat.completion",
        created=first.created,
        model=first.model,
        choices=choices,
        usage=usage or Usage(prompt_tokens=0, completion_tokens=0, total_tokens=0),
    )


__all__ = [
    "StreamItem",
    "accumulate_events",
]
