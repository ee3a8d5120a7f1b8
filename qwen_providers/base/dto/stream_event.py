"""
Streaming event DTOs.

A stream event is either a data chunk (``StreamMessage``) or the terminal
marker (``StreamDone``) produced for the provider's done sentinel. The two are
discriminated by ``kind`` so ``StreamEvent`` can be validated as a union.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from .request import QwenMessage
from .response import Usage


class StreamChoice(BaseModel):
    index: int
    delta: QwenMessage
    finish_reason: Optional[str] = None
    logprobs: Optional[Any] = None


class StreamMessage(BaseModel):
    """One ``chat.completion.chunk`` data event."""

    kind: Literal["data"] = "data"
    id: str
    object: str
    created: int
    model: str
    choices: List[StreamChoice]
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None

    @property
    def delta_text(self) -> str:
        """Concatenated content fragments of all choices in this chunk."""
        return "".join(c.delta.content or "" for c in self.choices)


class StreamDone(BaseModel):
    """Terminal marker signalling end-of-stream."""

    kind: Literal["none"] = "none"


StreamEvent = Annotated[Union[StreamMessage, StreamDone], Field(discriminator="kind")]


__all__ = ["StreamChoice", "StreamMessage", "StreamDone", "StreamEvent"]
