"""
Single-shot chat completion response DTOs.

Shapes mirror the provider's ``chat.completion`` object. Unknown fields are
ignored; missing or mistyped required fields raise ``ValidationError``.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from ..models_parts.message import Role


class ChatMessage(BaseModel):
    """Complete message returned in a non-streaming choice."""

    role: Role
    content: str


class Usage(BaseModel):
    """Token usage counters."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class Choice(BaseModel):
    index: int
    message: ChatMessage
    finish_reason: Optional[str] = None


class QwenResponse(BaseModel):
    """Structured response of a single-shot chat completion."""

    id: str
    object: str
    created: int
    model: str
    choices: List[Choice]
    usage: Usage

    @property
    def text(self) -> Optional[str]:
        """Content of the first choice, or ``None`` when there is no choice."""
        return self.choices[0].message.content if self.choices else None


__all__ = ["ChatMessage", "Usage", "Choice", "QwenResponse"]
