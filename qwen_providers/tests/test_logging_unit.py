"""Structured logging: shared base handler, level control and event shape."""

from __future__ import annotations

import io
import json
import logging

import pytest

from qwen_providers.base.dto import Usage
from qwen_providers.base.log_support import JsonFormatter
from qwen_providers.base.logging import (
    BASE_LOGGER_NAME,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


@pytest.fixture()
def plain_sink():
    """Route the base logger into a StringIO with a bare ``%(message)s`` format."""
    base = get_logger()
    saved = list(base.handlers)
    sink = io.StringIO()
    handler = logging.StreamHandler(sink)
    handler.setFormatter(logging.Formatter("%(message)s"))
    base.handlers[:] = [handler]

    def lines() -> list:
        handler.flush()
        return sink.getvalue().splitlines()

    yield lines
    base.handlers[:] = saved


def _json_err(capsys) -> dict:
    return json.loads(capsys.readouterr().err.strip())


def test_level_env_var_wins_over_requested_level(monkeypatch, capsys):
    monkeypatch.setenv("QWEN_PROVIDERS_LOG_LEVEL", "ERROR")
    logger = get_logger(name="qwen_providers.test.env", json_mode=True, level=logging.DEBUG)
    logger.warning("below threshold")
    assert capsys.readouterr().err == ""  # nosec B101
    logger.error("boom")
    record = _json_err(capsys)
    assert (record["level"], record["logger"]) == ("ERROR", "qwen_providers.test.env")  # nosec B101


def test_log_event_hoists_fields_and_drops_none(capsys):
    logger = get_logger(name="qwen_providers.test.events")
    log_event(logger, "stream.start", LogContext(provider="qwen", model="qwen-plus"), kept=1, dropped=None)
    data = _json_err(capsys)
    assert data["event"] == "stream.start"  # nosec B101
    assert data["provider"] == "qwen"  # nosec B101
    assert data["kept"] == 1  # nosec B101
    assert "dropped" not in data  # nosec B101


def test_normalized_event_carries_lifecycle_keys(capsys):
    normalized_log_event(
        get_logger(name="qwen_providers.test.normalized"),
        "stream.end",
        LogContext(provider="qwen", model="qwen-plus", request_id="r1"),
        phase="finalize",
        emitted=True,
        tokens=Usage(prompt_tokens=1, completion_tokens=2, total_tokens=3),
        chunks=4,
    )
    data = _json_err(capsys)
    assert {"structured", "phase", "attempt", "emitted", "tokens"} <= set(data)  # nosec B101
    assert data["attempt"] is None  # nosec B101
    assert "error_code" not in data  # nosec B101
    assert data["tokens"] == {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3}  # nosec B101
    assert data["chunks"] == 4  # nosec B101
    assert data["request_id"] == "r1"  # nosec B101


def test_normalized_error_event_keeps_code_and_extras(capsys):
    logger = get_logger(name="qwen_providers.test.shadow")
    normalized_log_event(logger, "chat.error", phase="finalize", error_code="api_error", emitted=False, attempt_count=2)
    data = _json_err(capsys)
    assert data["error_code"] == "api_error"  # nosec B101
    assert data["emitted"] is False  # nosec B101
    assert data["attempt_count"] == 2  # nosec B101


def test_json_formatter_merges_event_payload():
    msg = json.dumps({"provider": "qwen", "event": "cli.prompt", "note": "café"})
    record = logging.makeLogRecord({"name": "qwen_providers.cli", "levelno": logging.INFO, "levelname": "INFO", "msg": msg})
    payload = json.loads(JsonFormatter().format(record))
    assert payload["note"] == "café"  # nosec B101
    assert payload["event"] == "cli.prompt"  # nosec B101
    assert "msg" not in payload  # nosec B101


def test_json_formatter_keeps_plain_messages():
    record = logging.LogRecord("qwen_providers.x", logging.WARNING, __file__, 0, "plain %s", ("text",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "plain text"  # nosec B101
    assert payload["level"] == "WARNING"  # nosec B101


def test_child_record_is_written_once(plain_sink):
    get_logger(name="qwen_providers.test.child", json_mode=False).info("alpha")
    assert plain_sink() == ["alpha"]  # nosec B101


def test_configure_logger_raises_threshold_for_children(plain_sink):
    child = get_logger(name="qwen_providers.test.levels", json_mode=False)
    configure_logger(level="warning")
    child.info("dropped")
    child.warning("kept")
    assert plain_sink() == ["kept"]  # nosec B101


def test_configure_logger_file_handler(tmp_path) -> None:
    target = tmp_path / "logs" / "qwen.log"
    logger = configure_logger(level="INFO", file_path=str(target))
    log_event(get_logger("qwen_providers.test.file"), "file.check", value=1)
    for h in logger.handlers:
        h.flush()
    lines = target.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["event"] == "file.check"  # nosec B101
    configure_logger(file_path=None)
    assert not any(getattr(h, "_qwen_file_handler", False) for h in logger.handlers)  # nosec B101


def test_configured_level_survives_later_get_logger(monkeypatch, capsys):
    monkeypatch.setenv("QWEN_PROVIDERS_LOG_LEVEL", "INFO")
    configure_logger(level="DEBUG")
    logger = get_logger(name="qwen_providers.test.pinned")
    assert logging.getLogger(BASE_LOGGER_NAME).level == logging.DEBUG  # nosec B101
    logger.debug("kept")
    assert json.loads(capsys.readouterr().err.strip())["msg"] == "kept"  # nosec B101
