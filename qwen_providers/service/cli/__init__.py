"""qwen-cli entrypoint.

Sends one prompt (optionally preceded by a JSON history file) and prints the
answer. Streaming is the default; deltas are written as they arrive.

Exit codes: 0 success, 1 provider error, 2 usage/configuration error.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...base.errors import ProviderError
from ...base.logging import configure_logger
from ...base.models import ApiConfig, Message
from ...base.streaming import StreamItem, accumulate_events
from ...base.dto import StreamMessage
from ...config import get_provider_config
from ...qwen import QwenProvider
from .cli_parser import build_parser


def _load_history(path: Optional[str]) -> List[Message]:
    """Read a JSON list of ``{"role", "content"}`` objects into messages.

    Raises:
        ValueError: On unreadable files, invalid JSON or invalid turns.
    """
    if not path:
        return []
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise ValueError(f"cannot read history file: {e}") from e
    if not isinstance(data, list):
        raise ValueError("history file must contain a JSON list")
    try:
        return [Message(role=item["role"], content=item["content"]) for item in data]
    except (KeyError, TypeError) as e:
        raise ValueError(f"invalid history entry: {e}") from e


def _build_config(args) -> ApiConfig:
    body: Dict[str, Any] = {
        "model": args.model or get_provider_config().get("model"),
        "max_tokens": args.max_tokens,
        "temperature": args.temperature,
    }
    return ApiConfig(body={k: v for k, v in body.items() if v is not None})


def _run_stream(provider: QwenProvider, messages: List[Message], config: ApiConfig, as_json: bool) -> int:
    items: List[StreamItem] = []
    for item in provider.stream_chat(messages, config):
        if isinstance(item, ProviderError):
            if not as_json:
                print()
            print(f"error: {item}", file=sys.stderr)
            return 1
        if as_json:
            items.append(item)
        elif isinstance(item, StreamMessage):
            print(item.delta_text, end="", flush=True)
    if as_json:
        print(accumulate_events(items).model_dump_json(indent=2))
    else:
        print()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    if args.log_level:
        configure_logger(level=args.log_level)

    if not get_provider_config().get("api_key"):
        print("error: no API key; set DASHSCOPE_API_KEY (or QWEN_API_KEY)", file=sys.stderr)
        return 2
    prompt = sys.stdin.read() if args.prompt == "-" else args.prompt
    try:
        messages = _load_history(args.history) + [Message(role="user", content=prompt)]
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    provider = QwenProvider()
    config = _build_config(args)
    if args.stream:
        return _run_stream(provider, messages, config, args.json)
    try:
        response = provider.chat(messages, config)
    except ProviderError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(response.model_dump_json(indent=2) if args.json else (response.text or ""))
    return 0


__all__ = ["main"]
