"""
Message DTO used by the provider.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Messages are owned by the caller and only read by the provider for the
duration of one request.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple, get_args


# Closed set of participant kinds.
Role = Literal["system", "user", "assistant"]

ROLES: Tuple[str, ...] = get_args(Role)


@dataclass(frozen=True)
class Message:
    """A chat message.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"`` or
            ``"assistant"``).
        content: Plain text content.

    Raises:
        ValueError: If ``role`` is not one of :data:`ROLES`.
    """

    role: Role
    content: str

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"unknown message role: {self.role!r}")

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role="assistant", content=content)

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role="system", content=content)


__all__ = [
    "Message",
    "Role",
    "ROLES",
]
