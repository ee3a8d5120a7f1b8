"""Unified configuration layer for the Qwen provider.

Merge order (later wins):
    1. Built-in defaults
    2. Optional JSON config file pointed to by ``QWEN_PROVIDERS_CONFIG_FILE``
    3. Environment variables (``QWEN_MODEL``, ``QWEN_BASE_URL``)
    4. API key from the environment (``DASHSCOPE_API_KEY`` / ``QWEN_API_KEY``)
    5. In-code overrides passed to :func:`get_provider_config`

External config file example::

    {"qwen": {"model": "qwen-max", "base_url": "https://dashscope-intl.aliyuncs.com/compatible-mode/v1"}}

Public API
----------
* get_provider_config(overrides: dict | None = None) -> dict
* get_model() -> str | None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .defaults import QWEN_DEFAULT_BASE_URL, QWEN_DEFAULT_MODEL
from .env import resolve_provider_key

PROVIDER_NAME = "qwen"
CONFIG_FILE_ENV = "QWEN_PROVIDERS_CONFIG_FILE"

DEFAULTS: Dict[str, Any] = {
    "model": QWEN_DEFAULT_MODEL,
    "base_url": QWEN_DEFAULT_BASE_URL,
}

ENV_FIELD_MAP = {
    "model": "QWEN_MODEL",
    "base_url": "QWEN_BASE_URL",
}


def _load_external_config() -> Dict[str, Any]:
    """Return the ``qwen`` section of the external JSON config, if any.

    A missing path or unreadable file yields an empty mapping; a file that is
    not valid JSON raises ``ValueError`` so misconfiguration is not silent.
    """
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    p = Path(path)
    if not p.is_file():
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{CONFIG_FILE_ENV} is not valid JSON: {e}") from e
    section = data.get(PROVIDER_NAME) if isinstance(data, dict) else None
    return section if isinstance(section, dict) else {}


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, var in ENV_FIELD_MAP.items():
        val = os.getenv(var)
        if val:
            out[field] = val
    return out


def get_provider_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged provider configuration.

    Merge order (later wins): defaults -> external config -> env vars -> env
    API key -> overrides. Override values of ``None`` are ignored.
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= _env_overrides()

    if not cfg.get("api_key"):
        key, _ = resolve_provider_key(PROVIDER_NAME)
        if key:
            cfg["api_key"] = key

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_model() -> Optional[str]:
    return get_provider_config().get("model")


__all__ = [
    "get_provider_config",
    "get_model",
    "DEFAULTS",
    "CONFIG_FILE_ENV",
]
