"""Base shared constants for the provider adapter.

Central location to avoid scattering magic strings.

Security
--------
This module contains only generic sentinel strings. There are no credentials
or tokens embedded.

# pragma: allowlist secret
"""
from __future__ import annotations

PROVIDER_NAME = "qwen"

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string, not a real secret

# Message used when a non-success response body cannot be read
UNKNOWN_API_ERROR = "Unknown error"

__all__ = [
    "PROVIDER_NAME",
    "MISSING_API_KEY_ERROR",
    "UNKNOWN_API_ERROR",
]
