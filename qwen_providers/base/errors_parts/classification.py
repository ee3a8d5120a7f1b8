"""Map exceptions raised during a request to :class:`ErrorCode` values.

The same transport exception means different things depending on when it
happens: an ``httpx`` failure while sending the request is ``request_failed``,
while the same failure after the streaming body was opened is
``stream_error``. Callers therefore pass the lifecycle ``phase``.
"""
from __future__ import annotations

import json
from typing import Literal, Tuple, Type

import httpx
from pydantic import ValidationError

from .error_code import ErrorCode
from .provider_error import ProviderError

Phase = Literal["request", "stream"]

_DECODE_ERRORS: Tuple[Type[BaseException], ...] = (ValidationError, json.JSONDecodeError, httpx.DecodingError)
_TRANSPORT_ERRORS: Tuple[Type[BaseException], ...] = (httpx.HTTPError, httpx.StreamError)


def classify_exception(exc: BaseException, phase: Phase = "request") -> ErrorCode:
    """Return the error code for ``exc``.

    Checked in order: an existing ``ProviderError`` keeps its code, decoding
    failures are ``parse_error``, HTTP status errors are ``api_error``, other
    ``httpx`` errors depend on ``phase``, and anything else is ``internal``.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, _DECODE_ERRORS):
        return ErrorCode.PARSE_ERROR
    # HTTPStatusError is itself an HTTPError, so it must be tested first.
    if isinstance(exc, httpx.HTTPStatusError):
        return ErrorCode.API_ERROR
    if isinstance(exc, _TRANSPORT_ERRORS):
        return ErrorCode.REQUEST_FAILED if phase == "request" else ErrorCode.STREAM_ERROR
    return ErrorCode.INTERNAL


__all__ = ["classify_exception", "Phase"]
