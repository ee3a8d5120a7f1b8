"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``qwen_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import Phase, classify_exception

__all__ = ["ErrorCode", "Phase", "ProviderError", "classify_exception"]
