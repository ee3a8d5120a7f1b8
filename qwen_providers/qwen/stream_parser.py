"""Incremental parser for the Qwen streaming response body.

Purpose:
    Turn arbitrarily chunked bytes from a long-lived HTTP response into an
    ordered sequence of :data:`StreamEvent` values.

Wire format:
    Frames are separated by a blank line (``"\\n\\n"``). A frame that starts
    with ``"data: "`` carries either a JSON ``chat.completion.chunk`` object or
    the done sentinel ``[DONE]``. Frames without the prefix (comments,
    keep-alives) carry no event.

Classification:
    The JSON after the prefix is parsed as-is and classified by the presence
    of a ``choices`` field; the frame text is never rewritten. A frame that is
    not a completion chunk but contains the done sentinel ends the stream, so
    chunk content that happens to mention ``[DONE]`` is still delivered. Any
    other frame that fails to parse or validate is logged and dropped so one
    bad frame cannot end an otherwise healthy stream.

State:
    The only state is the text buffer holding the unterminated tail plus the
    incremental UTF-8 decoder. After :meth:`QwenStreamParser.feed` returns the
    buffer never contains a frame terminator. Bytes left in the buffer when the
    stream ends are dropped by :meth:`QwenStreamParser.close`.
"""

from __future__ import annotations

import codecs
import json
import logging
from typing import Iterable, Iterator, List, Optional

from pydantic import ValidationError

from ..base.dto import StreamDone, StreamEvent, StreamMessage
from ..base.logging import LogContext, get_logger, log_event
from ..config.defaults import STREAM_DONE_SENTINEL, STREAM_EVENT_PREFIX, STREAM_FRAME_TERMINATOR


class QwenStreamParser:
    """Stateful frame extractor for one streaming response.

    Parameters:
        ctx: Optional log context attached to decode-error events.
        logger: Logger for decode-error and dropped-tail events.

    A parser instance belongs to exactly one stream and is not thread-safe.
    """

    def __init__(self, ctx: Optional[LogContext] = None, logger: Optional[logging.Logger] = None) -> None:
        self._ctx = ctx
        self._logger = logger or get_logger("qwen_providers.stream")
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self.dropped_frames = 0

    @property
    def pending(self) -> str:
        """Unterminated text waiting for the next chunk."""
        return self._buffer

    def feed(self, chunk: bytes) -> List[StreamEvent]:
        """Consume one chunk and return the events it completed, in order.

        Invalid byte sequences are replaced rather than rejected. A multi-byte
        character split across chunks is held by the decoder until complete.
        """
        self._buffer += self._decoder.decode(chunk)
        frames = self._buffer.split(STREAM_FRAME_TERMINATOR)
        # Last element is the unterminated tail ("" when the chunk ended on a terminator).
        self._buffer = frames.pop()
        events: List[StreamEvent] = []
        for frame in frames:
            event = self._parse_frame(frame)
            if event is not None:
                events.append(event)
        return events

    def close(self) -> None:
        """Finish the stream, discarding any unterminated trailing frame."""
        self._buffer += self._decoder.decode(b"", final=True)
        if self._buffer.strip():
            log_event(
                self._logger,
                "stream.partial_dropped",
                self._ctx,
                level=logging.WARNING,
                pending_chars=len(self._buffer),
            )
        self._buffer = ""

    def _parse_frame(self, frame: str) -> Optional[StreamEvent]:
        if not frame.startswith(STREAM_EVENT_PREFIX):
            return None
        payload = frame[len(STREAM_EVENT_PREFIX):]
        error: Optional[Exception] = None
        try:
            data = json.loads(payload)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError subclass.
            data, error = None, e
        if isinstance(data, dict) and "choices" in data:
            try:
                return StreamMessage.model_validate(data)
            except ValidationError as e:
                return self._drop(frame, e)
        if STREAM_DONE_SENTINEL in payload:
            return StreamDone()
        return self._drop(frame, error or ValueError("frame is not a completion chunk"))

    def _drop(self, frame: str, error: Exception) -> None:
        self.dropped_frames += 1
        log_event(
            self._logger,
            "stream.decode_error",
            self._ctx,
            level=logging.WARNING,
            code="DECODE",
            error=str(error),
            frame_preview=frame[:120],
        )
        return None


def iter_stream_events(
    chunks: Iterable[bytes],
    ctx: Optional[LogContext] = None,
    logger: Optional[logging.Logger] = None,
) -> Iterator[StreamEvent]:
    """Lazily parse a byte-chunk iterable into stream events.

    Events are yielded as soon as the chunk completing their frame arrives.
    Exceptions raised by ``chunks`` propagate to the caller after every event
    from earlier chunks has been yielded.
    """
    parser = QwenStreamParser(ctx=ctx, logger=logger)
    for chunk in chunks:
        yield from parser.feed(chunk)
    parser.close()


__all__ = ["QwenStreamParser", "iter_stream_events"]
