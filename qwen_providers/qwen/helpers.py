"""Header and request-body builders for the Qwen provider.

Purpose:
    Pure construction helpers shared by the single-shot and streaming paths.
    Nothing here performs I/O.

Header precedence:
    ``Authorization`` and ``Content-Type`` are set first and caller-supplied
    custom headers are applied afterwards, so a custom header with either name
    replaces the built-in value. This override is intentional and allowed.

Request merge:
    The base body (messages, stream flag, model, max_tokens) is merged with
    every configuration field except the reserved keys ``stream``,
    ``messages`` and ``system``, then re-validated as :class:`QwenRequest`.
    When validation fails the request degrades to a lossy fallback that keeps
    the messages, the stream flag and the raw non-reserved configuration
    fields.

Notes:
    Consumers must define ``_api_key`` (str|None), ``provider_name`` and
    ``_logger``.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx
from pydantic import ValidationError

from ..base.constants import MISSING_API_KEY_ERROR
from ..base.dto import QwenMessage, QwenRequest
from ..base.errors import ErrorCode, ProviderError
from ..base.logging import log_event
from ..base.models import ApiConfig, Message
from ..config.defaults import QWEN_DEFAULT_MAX_TOKENS, QWEN_DEFAULT_MODEL

RESERVED_BODY_KEYS = ("stream", "messages", "system")

# Provider vocabulary for the roles accepted in the messages channel.
_ROLE_VOCABULARY = {
    "user": "user",
    "assistant": "assistant",
}

# RFC 7230 token characters for header names.
_HEADER_NAME_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
# Visible ASCII plus space and horizontal tab.
_HEADER_VALUE_RE = re.compile(r"[\t\x20-\x7e]*")


def validate_header(name: str, value: str, provider: str = "qwen") -> None:
    """Raise ``ProviderError(INTERNAL)`` if ``name``/``value`` cannot be sent.

    Control characters (including CR/LF) and non-ASCII text are rejected
    before any network I/O takes place.
    """
    if not isinstance(name, str) or not _HEADER_NAME_RE.fullmatch(name):
        raise ProviderError(
            code=ErrorCode.INTERNAL,
            message=f"Invalid header name: {name!r}",
            provider=provider,
            param=str(name),
        )
    if not isinstance(value, str) or not _HEADER_VALUE_RE.fullmatch(value):
        # Value may be a credential: report the header name only.
        raise ProviderError(
            code=ErrorCode.INTERNAL,
            message=f"Invalid value for header {name!r}: contains forbidden characters",
            provider=provider,
            param=name,
        )


def to_qwen_messages(messages: Sequence[Message]) -> List[QwenMessage]:
    """Drop system turns and map the remaining roles to provider vocabulary."""
    out: List[QwenMessage] = []
    for msg in messages:
        if msg.role == "system":
            continue
        role = _ROLE_VOCABULARY.get(msg.role)
        if role is None:  # pragma: no cover - Role is a closed set
            raise AssertionError(f"role {msg.role!r} has no provider mapping")
        out.append(QwenMessage(role=role, content=msg.content))
    return out


class QwenCommonMixin:
    """Mixin offering shared header/payload builders."""

    def build_headers(self, custom_headers: Optional[Mapping[str, str]] = None) -> httpx.Headers:
        """Build the outbound header set.

        Parameters:
            custom_headers: Optional caller headers applied last; they may
                replace ``Authorization`` or ``Content-Type``.

        Returns:
            An ``httpx.Headers`` instance (case-insensitive, so an override
            replaces rather than duplicates a built-in header).

        Raises:
            ProviderError: ``internal`` when the API key is missing or any
                header name/value contains forbidden characters.
        """
        api_key: Optional[str] = getattr(self, "_api_key", None)
        if not api_key:
            raise ProviderError(code=ErrorCode.INTERNAL, message=MISSING_API_KEY_ERROR, provider=self.provider_name)
        headers = httpx.Headers()
        for name, value in (("Authorization", f"Bearer {api_key}"), ("Content-Type", "application/json")):
            validate_header(name, value, self.provider_name)
            headers[name] = value
        for name, value in (custom_headers or {}).items():
            validate_header(name, value, self.provider_name)
            headers[name] = value
        return headers

    def build_request(self, messages: Sequence[Message], stream: bool, config: ApiConfig) -> QwenRequest:
        """Compose the outbound request body.

        Parameters:
            messages: Caller conversation; system turns are filtered out.
            stream: Streaming flag; always wins over any configured value.
            config: Provider configuration whose ``body`` is merged in.

        Returns:
            A validated ``QwenRequest``, or the lossy fallback described in
            the module docstring when validation fails.
        """
        qwen_messages = to_qwen_messages(messages)
        body: Dict[str, Any] = dict(config.body) if isinstance(config.body, Mapping) else {}

        merged: Dict[str, Any] = {
            "messages": [m.model_dump() for m in qwen_messages],
            "stream": stream,
            "model": body.get("model", QWEN_DEFAULT_MODEL),
            "max_tokens": body.get("max_tokens", QWEN_DEFAULT_MAX_TOKENS),
        }
        merged.update({k: v for k, v in body.items() if k not in RESERVED_BODY_KEYS})

        try:
            return QwenRequest.model_validate(merged)
        except ValidationError as e:
            log_event(
                self._logger,
                "request.fallback",
                provider=self.provider_name,
                error_count=e.error_count(),
                fields=sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")}),
            )
            extras = {k: v for k, v in body.items() if k not in RESERVED_BODY_KEYS}
            return QwenRequest.model_construct(messages=qwen_messages, stream=stream, **extras)


__all__ = [
    "QwenCommonMixin",
    "RESERVED_BODY_KEYS",
    "to_qwen_messages",
    "validate_header",
]
