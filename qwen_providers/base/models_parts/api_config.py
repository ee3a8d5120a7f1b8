"""
Per-call provider configuration.

``ApiConfig`` pairs the open-ended request body document (model, token limit
and any provider-specific field such as ``temperature`` or ``top_p``) with a
mapping of custom HTTP headers. The provider reads it and never mutates it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class ApiConfig:
    """Caller-owned configuration for a single chat call.

    Attributes:
        body: Arbitrary JSON-compatible fields merged into the outbound request
            body. ``model`` and ``max_tokens`` are honoured when present;
            ``stream``, ``messages`` and ``system`` are always ignored.
        headers: Custom HTTP headers applied after the authorization and
            content-type headers. They may override those two.
    """

    body: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)


__all__ = ["ApiConfig"]
