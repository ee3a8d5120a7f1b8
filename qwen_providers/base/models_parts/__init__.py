"""Models parts package: one dataclass per file, re-exported by ``base.models``."""

from .api_config import ApiConfig
from .message import Message, Role, ROLES

__all__ = ["ApiConfig", "Message", "Role", "ROLES"]
