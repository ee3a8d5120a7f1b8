"""
Outbound chat request DTOs.

``QwenRequest`` is the typed base structure of the request body. The typed
fields are validated; every other configuration field is carried as a pydantic
extra and serialized alongside them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from ...config.defaults import QWEN_DEFAULT_MAX_TOKENS, QWEN_DEFAULT_MODEL


class QwenMessage(BaseModel):
    """Provider message shape, used both outbound and as a stream delta.

    Both fields are optional because stream deltas frequently carry only one
    of them (the role on the first chunk, content fragments afterwards).
    """

    role: Optional[str] = None
    content: Optional[str] = None


class QwenRequest(BaseModel):
    """Outbound request body.

    Attributes:
        messages: Conversation turns in provider vocabulary.
        stream: Whether server-sent streaming is requested.
        model: Target model identifier.
        max_tokens: Completion token limit.

    Provider-specific fields (``temperature``, ``top_p``, ``enable_search``...)
    are accepted as extras.
    """

    model_config = ConfigDict(extra="allow")

    messages: List[QwenMessage]
    stream: bool
    model: str = QWEN_DEFAULT_MODEL
    max_tokens: int = QWEN_DEFAULT_MAX_TOKENS

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready body including extra fields.

        Serializer warnings are silenced because the lossy fallback body is
        built with ``model_construct`` and may hold unvalidated raw values.
        """
        return self.model_dump(mode="json", warnings=False)


__all__ = ["QwenMessage", "QwenRequest"]
