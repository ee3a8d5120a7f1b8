"""Wire DTO validation: response shape, stream events and the event union."""
from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from qwen_providers.base.dto import QwenRequest, QwenResponse, StreamDone, StreamEvent, StreamMessage
from qwen_providers.base.models import ApiConfig, Message
from qwen_providers.tests.utils import completion_body, completion_chunk

_EVENT = TypeAdapter(StreamEvent)


def test_response_ignores_unknown_fields():
    body = completion_body("x")
    body["system_fingerprint"] = "fp"
    assert QwenResponse.model_validate(body).text == "x"  # nosec B101


def test_response_text_is_none_without_choices():
    body = completion_body()
    body["choices"] = []
    assert QwenResponse.model_validate(body).text is None  # nosec B101


def test_response_requires_usage():
    body = completion_body()
    del body["usage"]
    with pytest.raises(ValidationError):
        QwenResponse.model_validate(body)


def test_stream_message_optional_fields():
    chunk = completion_chunk("x")
    chunk["system_fingerprint"] = "fp-1"
    msg = StreamMessage.model_validate(chunk)
    assert msg.kind == "data"  # nosec B101
    assert msg.usage is None  # nosec B101
    assert msg.system_fingerprint == "fp-1"  # nosec B101
    assert msg.choices[0].delta.role is None  # nosec B101


def test_event_union_discriminates_on_kind():
    assert isinstance(_EVENT.validate_python({"kind": "none"}), StreamDone)  # nosec B101
    data = _EVENT.validate_python({**completion_chunk("y"), "kind": "data"})
    assert isinstance(data, StreamMessage)  # nosec B101
    with pytest.raises(ValidationError):
        _EVENT.validate_python({"kind": "other"})


def test_request_payload_includes_extras():
    req = QwenRequest.model_validate({"messages": [], "stream": False, "top_p": 0.5})
    assert req.to_payload() == {  # nosec B101
        "messages": [],
        "stream": False,
        "model": "qwen-plus",
        "max_tokens": 8192,
        "top_p": 0.5,
    }


def test_message_and_config_are_immutable():
    msg = Message.user("hi")
    with pytest.raises(AttributeError):
        msg.content = "changed"  # type: ignore[misc]
    cfg = ApiConfig()
    assert cfg.body == {} and cfg.headers == {}  # nosec B101
