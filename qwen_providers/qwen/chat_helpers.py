"""Single-shot chat helpers for the Qwen provider.

Encapsulates the blocking request/response path and the response decoder so
the main provider module stays focused on orchestration.

Failure mapping:
    - transport failure while sending or reading -> ``request_failed``
    - non-success HTTP status -> ``api_error`` (message is the raw body text)
    - body that does not match :class:`QwenResponse` -> ``parse_error``
"""

from __future__ import annotations

import time
from typing import Optional, Union

import httpx
from pydantic import ValidationError

from ..base.constants import PROVIDER_NAME, UNKNOWN_API_ERROR
from ..base.dto import QwenRequest, QwenResponse
from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, normalized_log_event


def decode_chat_response(
    content: Union[bytes, str],
    *,
    provider: str = PROVIDER_NAME,
    model: Optional[str] = None,
) -> QwenResponse:
    """Deserialize one complete JSON document into a :class:`QwenResponse`.

    Raises:
        ProviderError: ``parse_error`` on invalid JSON or any shape mismatch.
    """
    try:
        return QwenResponse.model_validate_json(content)
    except ValidationError as e:
        raise ProviderError(
            code=ErrorCode.PARSE_ERROR,
            message=f"Failed to parse response: {e}",
            provider=provider,
            model=model,
            raw=e,
        ) from e


def read_error_text(resp: httpx.Response) -> str:
    """Return the body text of a failed response, or a generic message.

    Works for streamed responses too: the body is read first if it has not
    been consumed yet.
    """
    try:
        resp.read()
        return resp.text
    except (httpx.HTTPError, httpx.StreamError):
        return UNKNOWN_API_ERROR


class QwenChatMixin:
    """Mixin providing single-shot chat execution.

    Consumers must define ``url``, ``_http_client(purpose)``, ``_error(...)``,
    ``_transport_error(...)``, ``provider_name`` and ``_logger``.
    """

    def _execute_chat(self, request: QwenRequest, headers: httpx.Headers, ctx: LogContext) -> QwenResponse:
        """POST the request, await the full body and decode it."""
        model = ctx.model
        client = self._http_client("chat")
        t0 = time.perf_counter()
        try:
            resp = client.post(self.url, headers=headers, json=request.to_payload())
        except httpx.HTTPError as e:
            raise self._transport_error(e, "request", model) from e
        latency_ms = (time.perf_counter() - t0) * 1000.0

        if not resp.is_success:
            raise self._error(ErrorCode.API_ERROR, read_error_text(resp), model, status_code=resp.status_code)

        response = decode_chat_response(resp.content, provider=self.provider_name, model=model)
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=True,
            tokens=response.usage,
            latency_ms=round(latency_ms, 2),
            response_id=response.id,
            http_status=resp.status_code,
        )
        return response


__all__ = ["QwenChatMixin", "decode_chat_response", "read_error_text"]
