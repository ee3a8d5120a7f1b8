"""Streaming helpers for the Qwen provider.

Purpose:
    Open the streaming HTTP response, hand its raw byte chunks to
    :class:`QwenStreamParser` and yield the resulting events one by one.

Error items:
    Failures are yielded as :class:`ProviderError` values, after which the
    sequence ends. Events parsed before a failure are always delivered first.
    - opening the stream fails -> ``request_failed``
    - non-success HTTP status -> ``api_error``
    - reading a chunk fails -> ``stream_error``

Resource release:
    The response is entered on an ``ExitStack`` owned by the generator, so
    closing the generator early (``break``, ``close()``, garbage collection)
    closes the response and returns the connection to the pool.
"""

from __future__ import annotations

import time
from contextlib import ExitStack
from typing import Iterator, Optional

import httpx

from ..base.dto import QwenRequest
from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, normalized_log_event
from ..base.streaming import StreamItem
from .chat_helpers import read_error_text
from .stream_parser import QwenStreamParser


class QwenStreamingMixin:
    """Mixin providing the streaming transport loop.

    Consumers must define ``url``, ``_http_client(purpose)``, ``_error(...)``,
    ``_transport_error(...)``, ``provider_name`` and ``_logger``.
    """

    def _stream_events(self, request: QwenRequest, headers: httpx.Headers, ctx: LogContext) -> Iterator[StreamItem]:
        model = ctx.model
        client = self._http_client("stream")
        t0 = time.perf_counter()
        first_event_ms: Optional[float] = None
        emitted = 0

        with ExitStack() as stack:
            try:
                resp = stack.enter_context(
                    client.stream("POST", self.url, headers=headers, json=request.to_payload())
                )
            except httpx.HTTPError as e:
                yield self._stream_fail(ctx, self._transport_error(e, "request", model))
                return

            if not resp.is_success:
                err = self._error(ErrorCode.API_ERROR, read_error_text(resp), model, status_code=resp.status_code)
                yield self._stream_fail(ctx, err)
                return

            parser = QwenStreamParser(ctx=ctx, logger=self._logger)
            try:
                for chunk in resp.iter_bytes():
                    for event in parser.feed(chunk):
                        if first_event_ms is None:
                            first_event_ms = (time.perf_counter() - t0) * 1000.0
                        emitted += 1
                        yield event
            except (httpx.HTTPError, httpx.StreamError) as e:
                err = self._transport_error(e, "stream", model)
                yield self._stream_fail(ctx, err, emitted=emitted)
                return
            parser.close()

        normalized_log_event(
            self._logger,
            "stream.end",
            ctx,
            phase="finalize",
            emitted=emitted > 0,
            emitted_count=emitted,
            dropped_frames=parser.dropped_frames,
            time_to_first_event_ms=round(first_event_ms, 2) if first_event_ms is not None else None,
            total_duration_ms=round((time.perf_counter() - t0) * 1000.0, 2),
        )

    def _stream_fail(self, ctx: LogContext, error: ProviderError, *, emitted: int = 0, phase: str = "finalize") -> ProviderError:
        """Log a stream failure and return the error item to yield."""
        normalized_log_event(
            self._logger,
            "stream.error",
            ctx,
            phase=phase,
            emitted=emitted > 0,
            error=error.message,
            error_code=error.code.value,
            http_status=error.status_code,
        )
        return error


__all__ = ["QwenStreamingMixin"]
