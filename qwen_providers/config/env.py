"""Credential lookup from the process environment.

DashScope documents ``DASHSCOPE_API_KEY``; many setups export the same key as
``QWEN_API_KEY`` instead. Both are accepted, canonical name first. Values that
look like template placeholders (copied from an example ``.env``) are skipped
so they never reach the service as a bearer token.

Nothing here raises: unknown providers and unset variables resolve to
``None`` and the caller decides what a missing key means.
"""

from __future__ import annotations

import os
from typing import Dict, Mapping, Optional, Tuple

# Ordered candidates for the Qwen key, canonical first.
QWEN_KEY_ENV_VARS: Tuple[str, ...] = ("DASHSCOPE_API_KEY", "QWEN_API_KEY")

ENV_MAP: Dict[str, str] = {"qwen": QWEN_KEY_ENV_VARS[0]}
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {"qwen": QWEN_KEY_ENV_VARS}

_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "example", "your-api-key", "<")


def is_placeholder(val: Optional[str]) -> bool:
    """Return True for values such as ``changeme``, ``sk-example`` or ``test_key``."""
    if not val:
        return False
    v = val.strip().lower()
    return v.startswith("test_") or any(marker in v for marker in _PLACEHOLDER_MARKERS)


def get_env_var_name(provider: str) -> Optional[str]:
    """Canonical variable name for ``provider`` (case-insensitive), if known."""
    return ENV_MAP.get((provider or "").lower())


def get_env_var_candidates(provider: str) -> Tuple[str, ...]:
    return ENV_ALIASES.get((provider or "").lower(), ())


def resolve_provider_key(
    provider: str, environ: Optional[Mapping[str, str]] = None
) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(key, variable_name)`` for the first usable candidate.

    ``environ`` defaults to ``os.environ``. Empty and placeholder values are
    skipped; ``(None, None)`` means no usable key is set.
    """
    env = os.environ if environ is None else environ
    for name in get_env_var_candidates(provider):
        val = (env.get(name) or "").strip()
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "QWEN_KEY_ENV_VARS",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
