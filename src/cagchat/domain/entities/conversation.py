"""Conversation entity and its title state machine."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from cagchat.domain.entities.message import Message
from cagchat.domain.exceptions import InvalidTitleTransitionError


class TitleState(Enum):
    """タイトルの状態"""

    INITIAL = "initial"
    GENERATED = "generated"
    IMPROVED = "improved"
    LOCKED = "locked"


_ALLOWED_TRANSITIONS: dict[TitleState, set[TitleState]] = {
    TitleState.INITIAL: {TitleState.GENERATED, TitleState.IMPROVED, TitleState.LOCKED},
    TitleState.GENERATED: {
        TitleState.GENERATED,
        TitleState.IMPROVED,
        TitleState.LOCKED,
    },
    TitleState.IMPROVED: {
        TitleState.GENERATED,
        TitleState.IMPROVED,
        TitleState.LOCKED,
    },
    TitleState.LOCKED: {TitleState.LOCKED},
}


def can_transition(current: TitleState, target: TitleState) -> bool:
    """タイトル状態の遷移が許可されているかを判定

    Args:
        current: 現在の状態
        target: 遷移先の状態

    Returns:
        許可されている場合 True
    """
    return target in _ALLOWED_TRANSITIONS[current]


@dataclass(frozen=True)
class TitleHistoryEntry:
    """A title the conversation carried at some point.

    Attributes:
        title: The title text.
        message_count: Number of messages when the title was recorded.
        timestamp: When the title was recorded.
    """

    title: str
    message_count: int
    timestamp: datetime


@dataclass
class Conversation:
    """Conversation with the title bookkeeping used by the title engine.

    The engine mutates ``title``, ``title_history``, ``last_topics``,
    ``title_generated_at`` and ``title_state`` in place; persisting them is
    the caller's job.

    Attributes:
        id: Conversation ID.
        title: Current title, if any.
        messages: Messages in chronological order.
        title_edited: True once the user renamed the conversation.
        title_generated_at: Message count when the title was last generated.
        title_history: Distinct titles, oldest first. Append-only.
        last_topics: Topics detected the last time the title was improved.
        language: Declared conversation language code.
        title_state: Current state of the title state machine.
    """

    id: str = ""
    title: str | None = None
    messages: list[Message] = field(default_factory=list)
    title_edited: bool = False
    title_generated_at: int = 0
    title_history: list[TitleHistoryEntry] = field(default_factory=list)
    last_topics: list[str] | None = None
    language: str | None = None
    title_state: TitleState = TitleState.INITIAL

    def __post_init__(self) -> None:
        if self.title_edited:
            self.title_state = TitleState.LOCKED
        elif self.title_state is TitleState.LOCKED:
            self.title_edited = True

    @property
    def user_messages(self) -> list[str]:
        """Contents of the user messages, oldest first."""
        return [m.content for m in self.messages if m.is_user]

    @property
    def is_locked(self) -> bool:
        return self.title_state is TitleState.LOCKED

    def record_title(self, title: str | None = None) -> None:
        """Append a title to the history unless it repeats the last entry.

        Args:
            title: Title to record. Defaults to the current title.
        """
        title = self.title if title is None else title
        if not title:
            return
        if self.title_history and self.title_history[-1].title == title:
            return
        self.title_history.append(
            TitleHistoryEntry(
                title=title,
                message_count=len(self.messages),
                timestamp=datetime.now(timezone.utc),
            )
        )

    def apply_title(self, title: str, state: TitleState) -> bool:
        """Set an automatically produced title.

        Args:
            title: New title.
            state: GENERATED or IMPROVED.

        Returns:
            True if the title text changed.

        Raises:
            InvalidTitleTransitionError: If the title is locked.
        """
        self._transition(state)
        changed = title != self.title
        self.title = title
        self.title_generated_at = len(self.messages)
        self.record_title()
        return changed

    def lock_title(self, title: str) -> None:
        """Rename the conversation by hand and stop automatic updates."""
        self._transition(TitleState.LOCKED)
        self.title = title
        self.title_edited = True
        self.record_title()

    def unlock_title(self) -> None:
        """Re-enable automatic title updates."""
        self.title_edited = False
        self.title_state = TitleState.GENERATED if self.title else TitleState.INITIAL

    def _transition(self, target: TitleState) -> None:
        if not can_transition(self.title_state, target):
            raise InvalidTitleTransitionError(
                f"Invalid title transition: {self.title_state.value} -> {target.value}"
            )
        self.title_state = target

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Conversation":
        """Build a conversation from a stored record (camelCase keys)."""
        history = [
            TitleHistoryEntry(
                title=entry["title"],
                message_count=int(entry.get("messageCount", 0)),
                timestamp=_parse_timestamp(entry.get("timestamp")),
            )
            for entry in data.get("titleHistory") or []
        ]
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title"),
            messages=[Message.from_dict(m) for m in data.get("messages") or []],
            title_edited=bool(data.get("titleEdited", False)),
            title_generated_at=int(data.get("titleGeneratedAt") or 0),
            title_history=history,
            last_topics=data.get("lastTopics"),
            language=data.get("language"),
        )


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return datetime.now(timezone.utc)
