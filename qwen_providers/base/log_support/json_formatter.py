"""JSON line formatter for the ``qwen_providers`` logger.

Each record becomes one JSON object with ``ts``, ``level``, ``logger`` and
``msg``. Messages produced by ``log_event`` are themselves JSON objects; their
keys are merged into the top level so a line is never double encoded.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# Attributes every LogRecord has; anything else was passed via ``extra=``.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _as_object(text: str) -> Dict[str, Any] | None:
    if not text.startswith("{"):
        return None
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON.

    ``cli.*`` events drop the raw ``msg`` copy since a person reads them in a
    terminal.
    """

    def format(self, record: logging.LogRecord) -> str:
        text = record.getMessage()
        out: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
            "msg": text,
        }
        hoisted = _as_object(text)
        if hoisted is not None:
            out.update(hoisted)
            if str(hoisted.get("event", "")).startswith("cli."):
                del out["msg"]
        for key, value in vars(record).items():
            if key.startswith("_") or key in _STANDARD_ATTRS:
                continue
            out.setdefault(key, value)
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        return json.dumps(out, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
