"""Pytest configuration for the Qwen provider test suite.

- Isolates every test from the developer's real credentials and config.
- Closes pooled HTTP clients after the session.
- Provides a factory building a provider wired to an ``httpx.MockTransport``.
"""

from __future__ import annotations

import logging
from contextlib import suppress
from typing import Callable, Iterator, List

import httpx
import pytest

from qwen_providers.base.http import close_all_clients
from qwen_providers.base.logging import BASE_LOGGER_NAME
from qwen_providers.qwen import QwenProvider

_ISOLATED_ENV = (
    "DASHSCOPE_API_KEY",
    "QWEN_API_KEY",
    "QWEN_MODEL",
    "QWEN_BASE_URL",
    "QWEN_PROVIDERS_CONFIG_FILE",
    "QWEN_PROVIDERS_LOG_LEVEL",
    "QWEN_TIMEOUT_HTTP_SECONDS",
    "QWEN_TIMEOUT_CONNECT_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove provider environment variables for the duration of a test."""
    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_log_level() -> Iterator[None]:
    """Forget levels pinned by ``configure_logger`` so tests do not leak them."""
    yield
    base = logging.getLogger(BASE_LOGGER_NAME)
    if hasattr(base, "_qwen_level_override"):
        delattr(base, "_qwen_level_override")


@pytest.fixture(scope="session", autouse=True)
def close_clients_after_session() -> Iterator[None]:
    yield
    with suppress(Exception):
        close_all_clients()


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture()
def captured_requests() -> List[httpx.Request]:
    """List collecting every request that reached the mock transport."""
    return []


@pytest.fixture()
def make_provider(captured_requests: List[httpx.Request]) -> Iterator[Callable[..., QwenProvider]]:
    """Return a factory: ``make_provider(handler, api_key="sk-test")``.

    The handler receives each outgoing ``httpx.Request`` and returns the
    response (or raises an ``httpx`` error to simulate transport failure).
    """
    clients: List[httpx.Client] = []

    def _factory(handler: Handler, api_key: str | None = "sk-test", base_url: str = "https://qwen.test/v1") -> QwenProvider:
        def _recording(request: httpx.Request) -> httpx.Response:
            captured_requests.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(_recording))
        clients.append(client)
        return QwenProvider(api_key=api_key, base_url=base_url, client=client)

    yield _factory
    for c in clients:
        c.close()
