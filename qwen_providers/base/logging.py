"""Structured logging for the Qwen client.

Every library logger is a child of ``qwen_providers``. That base logger owns
the only console handler (stderr) and, optionally, one rotating file handler,
so each record is written once no matter which module emitted it.

Events are JSON objects with an ``event`` name plus context fields. Request
lifecycle events go through :func:`normalized_log_event`, which always carries
``structured``, ``phase``, ``attempt``, ``emitted`` and ``tokens`` so chat and
stream logs line up when aggregated.

The level comes from ``QWEN_PROVIDERS_LOG_LEVEL`` (default INFO) and can be
changed at runtime with :func:`configure_logger`.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "qwen_providers"
LOG_LEVEL_ENV = "QWEN_PROVIDERS_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_qwen_logger_initialized"
_LEVEL_OVERRIDE_ATTR = "_qwen_level_override"
_CONSOLE_HANDLER_ATTR = "_qwen_console_handler"
_FILE_HANDLER_ATTR = "_qwen_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
_LOG_FILE_BACKUPS = 5


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _console_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _is_console(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _CONSOLE_HANDLER_ATTR, False))


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Map a level name such as ``"debug"`` or ``"WARN"`` to its number.

    Unknown or empty names return ``default``.
    """
    if not value:
        return default
    resolved = logging.getLevelName(value.strip().upper())
    return resolved if isinstance(resolved, int) else default


def _refresh_console(logger: logging.Logger, handler: logging.Handler, json_mode: bool, level: int) -> None:
    """Point an existing console handler at the current ``sys.stderr``.

    A handler whose stream has been closed (stderr swapped by a capture
    fixture, for instance) is replaced outright.
    """
    stream = getattr(handler, "stream", None)
    if stream is None or getattr(stream, "closed", False):
        logger.removeHandler(handler)
        logger.addHandler(_console_handler(json_mode, level))
        return
    if stream is not sys.stderr and isinstance(handler, logging.StreamHandler):
        handler.setStream(sys.stderr)
    handler.setLevel(level)
    if json_mode != isinstance(handler.formatter, JsonFormatter):
        handler.setFormatter(_formatter(json_mode))


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Create the ``qwen_providers`` logger once and keep it in sync afterwards.

    A level set through :func:`configure_logger` wins over the environment.
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    wanted = getattr(logger, _LEVEL_OVERRIDE_ATTR, None)
    if wanted is None:
        wanted = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    logger.setLevel(wanted)
    if not getattr(logger, _BASE_LOGGER_ATTR, False):
        logger.handlers[:] = [_console_handler(json_mode, wanted)]
        logger.propagate = False
        setattr(logger, _BASE_LOGGER_ATTR, True)
        return logger
    for handler in [h for h in logger.handlers if _is_console(h)]:
        _refresh_console(logger, handler, json_mode, wanted)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a logger that writes through the shared base handler.

    Child loggers get no handlers of their own and propagate upwards; any
    console handler left on a child by older code is removed so lines are
    never duplicated.
    """
    base = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base
    logger = logging.getLogger(name)
    for stale in [h for h in logger.handlers if _is_console(h)]:
        logger.removeHandler(stale)
        with contextlib.suppress(Exception):
            stale.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def _sync_file_handler(logger: logging.Logger, file_path: Optional[str], json_mode: bool) -> None:
    """Attach, keep or drop the managed rotating file handler."""
    target = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    current: Optional[logging.Handler] = None
    for handler in [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]:
        if target is not None and getattr(handler, "baseFilename", None) == target:
            current = handler
            continue
        logger.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()
    if target is None:
        return
    if current is None:
        os.makedirs(os.path.dirname(target) or ".", exist_ok=True)
        current = RotatingFileHandler(
            target, maxBytes=_LOG_FILE_MAX_BYTES, backupCount=_LOG_FILE_BACKUPS, encoding="utf-8"
        )
        setattr(current, _FILE_HANDLER_ATTR, True)
        logger.addHandler(current)
    current.setFormatter(_formatter(json_mode))
    current.setLevel(logger.level)


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        New level, numeric or by name. ``None`` keeps the current level. Once
        set it outlives later :func:`get_logger` calls and
        ``QWEN_PROVIDERS_LOG_LEVEL``.
    file_path: Optional[str]
        Also write to this file (rotated at 10MB, 5 backups). ``None`` removes
        a file handler added by an earlier call.
    json_mode: bool
        Formatter for the file handler (and the console handler when the base
        logger is created by this call).

    Returns
    -------
    logging.Logger
        The ``qwen_providers`` base logger.
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if not getattr(logger, _BASE_LOGGER_ATTR, False):
        _ensure_base_logger(json_mode=json_mode, level=logging.INFO)

    if level is not None:
        numeric = _parse_level(level, default=logger.level) if isinstance(level, str) else int(level)
        setattr(logger, _LEVEL_OVERRIDE_ATTR, numeric)
        logger.setLevel(numeric)
        for handler in logger.handlers:
            handler.setLevel(numeric)

    _sync_file_handler(logger, file_path, json_mode)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``event`` as one JSON object.

    Context fields come first, then ``fields``. ``None`` values are dropped
    unless ``keep_none`` is set. Values that are not JSON-native are
    stringified.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event, **(ctx.to_dict() if ctx else {})}
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    """Turn a usage object (pydantic model or mapping) into a plain dict."""
    if tokens is None:
        return None
    if hasattr(tokens, "model_dump"):
        return tokens.model_dump()
    if isinstance(tokens, Mapping):
        return dict(tokens)
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Log a request lifecycle event with the normalized key set.

    ``error_code`` appears only when set; the other normalized keys are always
    present, ``None`` included. Extra fields cannot shadow a normalized key.
    """
    normalized: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is not None:
        normalized["error_code"] = error_code
    extras = {
        k: v for k, v in extra_fields.items() if v is not None and k not in REQUIRED_NORMALIZED_KEYS
    }
    log_event(logger, event, ctx, level=level, keep_none=True, **normalized, **extras)


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
