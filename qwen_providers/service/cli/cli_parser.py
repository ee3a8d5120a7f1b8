"""Argument parser for qwen-cli.

Only argument shapes live here; execution is in ``qwen_providers.service.cli``.
"""

from __future__ import annotations

import argparse

from ...config.defaults import QWEN_DEFAULT_MAX_TOKENS

_TRUE_WORDS = frozenset({"1", "t", "true", "y", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "f", "false", "n", "no", "off"})


def _str2bool(v: str | None) -> bool:
    """Parse ``--stream`` values; a bare flag (``None``) means True."""
    if v is None:
        return True
    word = v.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean, got {v!r}")


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Add ``--stream [BOOL]`` and ``--no-stream``; streaming is on unless disabled."""
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=True, help="Stream deltas (default)")
    grp.add_argument("--no-stream", dest="stream", action="store_false", help="Wait for the complete answer")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="qwen-cli", description="Send a prompt to a Qwen model")
    p.add_argument("prompt", help="User prompt; '-' reads it from stdin")
    p.add_argument("--model", default=None, help="Model id (default: config or qwen-plus)")
    p.add_argument(
        "--max-tokens", type=int, default=None, help=f"Completion token limit (default: {QWEN_DEFAULT_MAX_TOKENS})"
    )
    p.add_argument("--temperature", type=float, default=None)
    p.add_argument("--history", default=None, help="JSON file with a list of {role, content} turns sent before the prompt")
    add_stream_flags(p)
    p.add_argument("--json", action="store_true", help="Print the full response as JSON")
    p.add_argument("--log-level", default=None, help="Override QWEN_PROVIDERS_LOG_LEVEL for this run")
    return p


__all__ = ["build_parser", "add_stream_flags"]
