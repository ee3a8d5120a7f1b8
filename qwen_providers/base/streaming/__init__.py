"""Streaming package for the provider layer."""

from .streaming import StreamItem, accumulate_events

__all__ = [
    "StreamItem",
    "accumulate_events",
]
