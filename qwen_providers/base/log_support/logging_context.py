"""Per-call logging context.

A :class:`LogContext` is built once per ``chat`` / ``stream_chat`` call and
passed to every event of that call, so all lines of one request share the
same provider, model and streaming flag.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    provider: Optional[str] = None
    model: Optional[str] = None
    stream: Optional[bool] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into log fields; ``extra`` keys sit beside the named ones and ``None`` is omitted."""
        fields: Dict[str, Any] = {
            "provider": self.provider,
            "model": self.model,
            "stream": self.stream,
            "request_id": self.request_id,
            **self.extra,
        }
        return {k: v for k, v in fields.items() if v is not None}


__all__ = ["LogContext"]
