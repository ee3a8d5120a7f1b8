"""Request composition: message filtering, reserved keys and the lossy fallback."""
from __future__ import annotations

import pytest

from qwen_providers.base.dto import QwenMessage, QwenRequest
from qwen_providers.base.models import ApiConfig, Message
from qwen_providers.config.defaults import QWEN_DEFAULT_MAX_TOKENS, QWEN_DEFAULT_MODEL
from qwen_providers.qwen import QwenProvider
from qwen_providers.qwen.helpers import to_qwen_messages


@pytest.fixture()
def provider() -> QwenProvider:
    return QwenProvider(api_key="sk-test")


CONVERSATION = [
    Message.system("be terse"),
    Message.user("hi"),
    Message.assistant("hello"),
    Message.system("second system turn"),
    Message.user("how are you?"),
]


def test_system_turns_are_never_sent(provider):
    req = provider.build_request(CONVERSATION, False, ApiConfig())
    roles = [m.role for m in req.messages]
    assert roles == ["user", "assistant", "user"]  # nosec B101
    assert "system" not in {m["role"] for m in req.to_payload()["messages"]}  # nosec B101


def test_to_qwen_messages_preserves_order_and_content():
    out = to_qwen_messages(CONVERSATION)
    assert out == [  # nosec B101
        QwenMessage(role="user", content="hi"),
        QwenMessage(role="assistant", content="hello"),
        QwenMessage(role="user", content="how are you?"),
    ]


def test_defaults_apply_without_config(provider):
    req = provider.build_request([Message.user("x")], False, ApiConfig())
    assert req.model == QWEN_DEFAULT_MODEL  # nosec B101
    assert req.max_tokens == QWEN_DEFAULT_MAX_TOKENS  # nosec B101
    assert req.stream is False  # nosec B101


def test_configured_model_and_max_tokens_win(provider):
    req = provider.build_request([Message.user("x")], True, ApiConfig(body={"model": "qwen-max", "max_tokens": 256}))
    assert req.model == "qwen-max"  # nosec B101
    assert req.max_tokens == 256  # nosec B101


@pytest.mark.parametrize("stream", [True, False])
def test_reserved_keys_cannot_be_overridden(provider, stream):
    body = {
        "stream": not stream,
        "messages": [{"role": "user", "content": "injected"}],
        "system": "injected system prompt",
    }
    req = provider.build_request([Message.user("real")], stream, ApiConfig(body=body))
    payload = req.to_payload()
    assert payload["stream"] is stream  # nosec B101
    assert payload["messages"] == [{"role": "user", "content": "real"}]  # nosec B101
    assert "system" not in payload  # nosec B101


def test_extra_fields_pass_through(provider):
    cfg = ApiConfig(body={"temperature": 0.2, "top_p": 0.9, "enable_search": True})
    payload = provider.build_request([Message.user("x")], False, cfg).to_payload()
    assert payload["temperature"] == 0.2  # nosec B101
    assert payload["top_p"] == 0.9  # nosec B101
    assert payload["enable_search"] is True  # nosec B101


def test_config_is_not_mutated(provider):
    body = {"model": "qwen-turbo", "stream": True}
    provider.build_request([Message.user("x")], False, ApiConfig(body=body))
    assert body == {"model": "qwen-turbo", "stream": True}  # nosec B101


def test_invalid_typed_field_falls_back_instead_of_failing(provider):
    cfg = ApiConfig(body={"model": "qwen-max", "max_tokens": "lots", "temperature": 0.5, "stream": False, "system": "x"})
    req = provider.build_request([Message.system("s"), Message.user("x")], True, cfg)
    assert isinstance(req, QwenRequest)  # nosec B101
    payload = req.to_payload()
    assert payload["messages"] == [{"role": "user", "content": "x"}]  # nosec B101
    assert payload["stream"] is True  # nosec B101
    assert payload["model"] == "qwen-max"  # nosec B101
    assert payload["max_tokens"] == "lots"  # nosec B101
    assert payload["temperature"] == 0.5  # nosec B101
    assert "system" not in payload  # nosec B101


def test_fallback_is_logged(capsys):
    QwenProvider(api_key="sk-test").build_request([Message.user("x")], False, ApiConfig(body={"model": 123.5}))
    lines = [line for line in capsys.readouterr().err.splitlines() if "request.fallback" in line]
    assert lines, "expected a request.fallback log event"


def test_unknown_role_is_rejected_at_construction():
    with pytest.raises(ValueError):
        Message(role="tool", content="x")  # type: ignore[arg-type]
