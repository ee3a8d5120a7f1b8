"""Provider-agnostic caller-facing models.

Re-exports the dataclasses under ``qwen_providers.base.models_parts`` to keep a
stable import path.
"""

from .models_parts import ApiConfig, Message, Role, ROLES

__all__ = ["ApiConfig", "Message", "Role", "ROLES"]
