"""Message entity."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class Role(Enum):
    """Author role of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"

    @classmethod
    def parse(cls, value: "str | Role") -> "Role":
        """Parse a stored role name.

        Storage written by older clients uses ``bot`` for assistant turns.

        Raises:
            ValueError: If the role is unknown.
        """
        if isinstance(value, Role):
            return value
        if value == "bot":
            return cls.ASSISTANT
        return cls(value)


@dataclass(frozen=True)
class Message:
    """Message entity.

    Attributes:
        role: Who wrote the message.
        content: Message text.
        timestamp: When the message was written, if known.
    """

    role: Role
    content: str
    timestamp: datetime | None = None

    @property
    def is_user(self) -> bool:
        """Check if this message was written by the user."""
        return self.role is Role.USER

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Message":
        """Build a message from a stored record.

        Args:
            data: Mapping with ``role``, ``content`` and optional ISO ``timestamp``.

        Returns:
            Message instance.

        Raises:
            ValueError: If the role is unknown.
        """
        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        return cls(
            role=Role.parse(data.get("role", "user")),
            content=str(data.get("content") or ""),
            timestamp=timestamp,
        )
