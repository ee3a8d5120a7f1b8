"""Process-wide pool of ``httpx.Client`` instances.

The Qwen provider keeps no per-call transport state: each call borrows a
client from this pool (``qwen.chat`` or ``qwen.stream``) and the connection
pool inside that client is shared by every thread in the process.
``httpx.Client`` is thread-safe for this use.

Clients are created lazily with the timeouts from
:func:`~qwen_providers.base.timeouts.get_timeout_config` in effect at
creation time, replaced if someone closed them, and closed at interpreter
exit.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

PoolKey = Tuple[Optional[str], str]

_POOL: Dict[PoolKey, httpx.Client] = {}
_POOL_LOCK = threading.RLock()


def _new_client(base_url: Optional[str]) -> httpx.Client:
    kwargs = {"timeout": get_timeout_config().to_httpx()}
    if base_url:
        kwargs["base_url"] = base_url
    return httpx.Client(**kwargs)


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return the pooled client for ``(base_url, purpose)``, creating it on first use.

    Parameters:
        base_url: Set on the client so callers may use relative paths.
            ``None`` shares one client per purpose for absolute URLs.
        purpose: Pool discriminator, e.g. ``"qwen.chat"``.
    """
    key: PoolKey = (base_url, purpose)
    client = _POOL.get(key)
    if client is None or client.is_closed:
        with _POOL_LOCK:
            client = _POOL.get(key)
            if client is None or client.is_closed:
                client = _POOL[key] = _new_client(base_url)
    return client


def close_all_clients() -> None:
    """Close every pooled client and empty the pool."""
    with _POOL_LOCK:
        clients = list(_POOL.values())
        _POOL.clear()
    for client in clients:
        # Interpreter shutdown may already have torn down the transport.
        with contextlib.suppress(Exception):
            client.close()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
