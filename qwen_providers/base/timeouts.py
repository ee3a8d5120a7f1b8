"""Transport timeout configuration.

The streaming core enforces no deadlines of its own; timeouts belong to the
HTTP client. This module turns environment overrides into an
``httpx.Timeout`` used by the pooled clients.

Supported environment variables (all optional, positive floats):
    QWEN_TIMEOUT_HTTP_SECONDS      read/write/pool timeout
    QWEN_TIMEOUT_CONNECT_SECONDS   connection establishment timeout
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

from ..config.defaults import HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS, HTTP_DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Read, write and pool timeout. For streaming this
            bounds the wait between two chunks, not the whole stream.
        connect_timeout_seconds: Timeout for establishing the connection.
    """

    http_timeout_seconds: float = HTTP_DEFAULT_TIMEOUT_SECONDS
    connect_timeout_seconds: float = HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return a ``TimeoutConfig`` built from the current environment."""
    return TimeoutConfig(
        http_timeout_seconds=_parse_env_float("QWEN_TIMEOUT_HTTP_SECONDS", HTTP_DEFAULT_TIMEOUT_SECONDS),
        connect_timeout_seconds=_parse_env_float("QWEN_TIMEOUT_CONNECT_SECONDS", HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS),
    )


__all__ = ["TimeoutConfig", "get_timeout_config"]
