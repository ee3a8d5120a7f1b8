"""qwen_providers.config.defaults
==============================

Central place for small, stable default values used across the package. These
defaults can be overridden via environment variables or an external config
file, but provide sensible fallbacks for local development and tests.

This module intentionally avoids importing from other package modules to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Provider endpoint ----
# DashScope OpenAI-compatible mode; the chat path is appended to the base URL.
QWEN_DEFAULT_BASE_URL = "https://dashscope.aliyuncs.com/compatible-mode/v1"
QWEN_CHAT_PATH = "/chat/completions"

# ---- Request defaults ----
QWEN_DEFAULT_MODEL = "qwen-plus"
QWEN_DEFAULT_MAX_TOKENS = 8192

# ---- Streaming wire format ----
STREAM_FRAME_TERMINATOR = "\n\n"
STREAM_EVENT_PREFIX = "data: "
STREAM_DONE_SENTINEL = "[DONE]"

# ---- Transport timeouts (seconds) ----
HTTP_DEFAULT_TIMEOUT_SECONDS = 30.0
HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0


__all__ = [
    "QWEN_DEFAULT_BASE_URL",
    "QWEN_CHAT_PATH",
    "QWEN_DEFAULT_MODEL",
    "QWEN_DEFAULT_MAX_TOKENS",
    "STREAM_FRAME_TERMINATOR",
    "STREAM_EVENT_PREFIX",
    "STREAM_DONE_SENTINEL",
    "HTTP_DEFAULT_TIMEOUT_SECONDS",
    "HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS",
]
