"""Shared testing utilities for the Qwen provider tests.

Exports:
    - assert_true(condition, message)
    - ChunkStream: an ``httpx.SyncByteStream`` replaying fixed chunks
    - data_frame(obj) / DONE_FRAME: wire-format frame builders
    - completion_chunk(...) / completion_body(...): provider-shaped JSON objects

Nothing here imports pytest so the helpers stay usable from plain scripts.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Iterator, Optional

import httpx

DONE_FRAME = b"data: [DONE]\n\n"


def assert_true(condition: bool, message: str) -> None:
    """Raise AssertionError with ``message`` if ``condition`` is False."""
    if not condition:
        raise AssertionError(message)


class ChunkStream(httpx.SyncByteStream):
    """Response body that yields the given chunks, then optionally fails.

    ``served`` counts chunks handed out and ``closed`` records whether the
    owning response released the stream.
    """

    def __init__(self, chunks: Iterable[bytes], error: Optional[Exception] = None) -> None:
        self.chunks = list(chunks)
        self.error = error
        self.served = 0
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self.chunks:
            self.served += 1
            yield chunk
        if self.error is not None:
            raise self.error

    def close(self) -> None:
        self.closed = True


def completion_chunk(
    content: Optional[str] = None,
    *,
    role: Optional[str] = None,
    finish_reason: Optional[str] = None,
    index: int = 0,
    chunk_id: str = "chatcmpl-1",
    usage: Optional[Dict[str, int]] = None,
) -> Dict[str, Any]:
    delta: Dict[str, Any] = {}
    if role is not None:
        delta["role"] = role
    if content is not None:
        delta["content"] = content
    obj: Dict[str, Any] = {
        "id": chunk_id,
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": "qwen-plus",
        "choices": [{"index": index, "delta": delta, "finish_reason": finish_reason, "logprobs": None}],
    }
    if usage is not None:
        obj["usage"] = usage
    return obj


def data_frame(obj: Any) -> bytes:
    """Encode one ``data: <json>`` frame including its blank-line terminator."""
    return b"data: " + json.dumps(obj, ensure_ascii=False).encode("utf-8") + b"\n\n"


def completion_body(text: str = "Hello!", *, model: str = "qwen-plus") -> Dict[str, Any]:
    return {
        "id": "chatcmpl-42",
        "object": "chat.completion",
        "created": 1700000000,
        "model": model,
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": text}, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }


__all__ = [
    "DONE_FRAME",
    "ChunkStream",
    "assert_true",
    "completion_body",
    "completion_chunk",
    "data_frame",
]
