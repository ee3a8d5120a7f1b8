"""
Normalized provider error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the Qwen adapter. Values are
lowercase snake_case and double as the ``type`` tag surfaced to callers, so
they are considered a stable public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    INTERNAL = "internal"
    REQUEST_FAILED = "request_failed"
    API_ERROR = "api_error"
    PARSE_ERROR = "parse_error"
    STREAM_ERROR = "stream_error"


__all__ = ["ErrorCode"]
