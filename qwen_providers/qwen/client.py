"""Qwen provider adapter (DashScope OpenAI-compatible chat completions).

Summary:
- Single-shot chat via ``httpx`` returning a validated :class:`QwenResponse`.
- Streaming via ``httpx.Client.stream`` and :class:`QwenStreamParser`,
  yielding events lazily as frames complete.

Errors & Observability:
- Every failure is a :class:`ProviderError` tagged with an ``ErrorCode``.
  ``chat`` raises it; ``stream_chat`` yields it as the last item.
- Structured ``chat.*`` / ``stream.*`` events are emitted through the shared
  provider logger. The API key is never logged.

Concurrency:
- The provider keeps no per-call state. One instance can serve concurrent
  calls from several threads; they share the pooled (or injected)
  ``httpx.Client`` and nothing else.

This module orchestrates I/O only; builders and parsing live in the helper
modules.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Sequence

import httpx

from ..base.constants import PROVIDER_NAME
from ..base.dto import QwenRequest, QwenResponse
from ..base.errors import ErrorCode, Phase, ProviderError, classify_exception
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ApiConfig, Message
from ..base.streaming import StreamItem
from ..config import get_provider_config
from ..config.defaults import QWEN_CHAT_PATH, QWEN_DEFAULT_BASE_URL, QWEN_DEFAULT_MODEL
from .chat_helpers import QwenChatMixin
from .helpers import QwenCommonMixin
from .stream_helpers import QwenStreamingMixin

_TRANSPORT_MESSAGE_PREFIX = {
    ErrorCode.REQUEST_FAILED: "Request failed",
    ErrorCode.STREAM_ERROR: "Stream error",
}


class QwenProvider(QwenCommonMixin, QwenChatMixin, QwenStreamingMixin):
    """Client for Alibaba's Qwen models.

    Parameters:
        api_key: Bearer credential; when omitted it is resolved from provider
            config (``DASHSCOPE_API_KEY`` / ``QWEN_API_KEY``).
        base_url: API base URL; defaults to the DashScope compatible-mode
            endpoint.
        client: Optional ``httpx.Client`` to use instead of the shared pool
            (timeouts, proxies and transports are then the caller's choice).

    Side effects:
        - Reads provider configuration via ``get_provider_config()``.
        - Initializes a structured provider logger.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        cfg = get_provider_config()
        self._api_key = api_key or cfg.get("api_key")
        self._base_url = (base_url or cfg.get("base_url") or QWEN_DEFAULT_BASE_URL).rstrip("/")
        self._client = client
        self._logger = get_logger("qwen_providers.qwen")

    @property
    def provider_name(self) -> str:
        """Return the canonical provider slug used in logs and errors."""
        return PROVIDER_NAME

    @property
    def url(self) -> str:
        """Absolute chat-completions endpoint."""
        return self._base_url + QWEN_CHAT_PATH

    def chat(self, messages: Sequence[Message], config: Optional[ApiConfig] = None) -> QwenResponse:
        """Perform a non-streaming chat completion.

        Parameters:
            messages: Conversation turns. System turns are not sent.
            config: Optional per-call body fields and custom headers.

        Returns:
            The decoded :class:`QwenResponse`.

        Raises:
            ProviderError: ``internal`` for header problems (before any I/O),
                ``request_failed``, ``api_error`` or ``parse_error`` otherwise.
        """
        config = config or ApiConfig()
        headers = self.build_headers(config.headers)
        request = self.build_request(messages, False, config)
        ctx = self._context(request)
        self._log_start("chat.start", ctx, request)
        try:
            return self._execute_chat(request, headers, ctx)
        except ProviderError as e:
            normalized_log_event(
                self._logger,
                "chat.error",
                ctx,
                phase="finalize",
                emitted=False,
                error=e.message,
                error_code=e.code.value,
                http_status=e.status_code,
            )
            raise

    def stream_chat(self, messages: Sequence[Message], config: Optional[ApiConfig] = None) -> Iterator[StreamItem]:
        """Stream a chat completion.

        Nothing is sent until the returned iterator is first advanced.

        Parameters:
            messages: Conversation turns. System turns are not sent.
            config: Optional per-call body fields and custom headers.

        Yields:
            ``StreamMessage`` for each data frame and ``StreamDone`` for the
            done sentinel, in wire order. On failure a single
            :class:`ProviderError` is yielded and the iterator ends.
        """
        config = config or ApiConfig()
        try:
            headers = self.build_headers(config.headers)
        except ProviderError as e:
            model = config.body.get("model") if isinstance(config.body, dict) else None
            ctx = LogContext(provider=self.provider_name, model=str(model or QWEN_DEFAULT_MODEL), stream=True)
            yield self._stream_fail(ctx, e, phase="start")
            return
        request = self.build_request(messages, True, config)
        ctx = self._context(request)
        self._log_start("stream.start", ctx, request)
        yield from self._stream_events(request, headers, ctx)

    # ---- Internal helpers ----

    def _http_client(self, purpose: str) -> httpx.Client:
        if self._client is not None:
            return self._client
        return get_httpx_client(None, purpose=f"{self.provider_name}.{purpose}")

    def _context(self, request: QwenRequest) -> LogContext:
        model = getattr(request, "model", None)
        return LogContext(
            provider=self.provider_name,
            model=str(model or QWEN_DEFAULT_MODEL),
            stream=bool(getattr(request, "stream", False)),
        )

    def _error(
        self,
        code: ErrorCode,
        message: str,
        model: Optional[str],
        *,
        status_code: Optional[int] = None,
        raw: Optional[Exception] = None,
    ) -> ProviderError:
        return ProviderError(
            code=code,
            message=message,
            provider=self.provider_name,
            model=model,
            status_code=status_code,
            raw=raw,
        )

    def _transport_error(self, exc: Exception, phase: Phase, model: Optional[str]) -> ProviderError:
        """Wrap an httpx failure; ``phase`` decides request vs stream error."""
        code = classify_exception(exc, phase)
        prefix = _TRANSPORT_MESSAGE_PREFIX.get(code, "Transport error")
        return self._error(code, f"{prefix}: {exc}", model, raw=exc)

    def _log_start(self, event: str, ctx: LogContext, request: QwenRequest) -> None:
        extra: dict[str, Any] = request.model_extra or {}
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="start",
            message_count=len(request.messages),
            max_tokens=getattr(request, "max_tokens", None),
            extra_fields=sorted(extra) or None,
        )


__all__ = ["QwenProvider"]
