"""The one exception type surfaced by the Qwen client.

Failures from every stage (headers, transport, HTTP status, decoding) carry an
:class:`ErrorCode`. ``chat`` raises them; ``stream_chat`` yields them as the
last item of the stream instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Failure with a machine-readable code.

    ``message`` is the service's raw body text for ``api_error`` and a short
    description otherwise. ``status_code`` is set only when the service
    answered. ``param`` names the offending header or field when one is known,
    and ``raw`` keeps the underlying exception.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    status_code: Optional[int] = None
    param: Optional[str] = None
    raw: Optional[BaseException] = None

    @property
    def type(self) -> str:
        """Wire-style tag, e.g. ``"api_error"``."""
        return self.code.value

    def __str__(self) -> str:
        return f"{self.provider}:{self.model or '-'} {self.type}: {self.message}"


__all__ = ["ProviderError"]
