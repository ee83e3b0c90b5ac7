"""Context entities.

The raw context map arrives from the analysis services as a plain mapping
(entity extraction, memory stores, document processing, global memory).
These types are the validated view of it that prompt assembly works on.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _item_name(value: Any) -> str | None:
    """Name of an item given either as a bare string or a mapping."""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        for key in ("name", "word"):
            if value.get(key):
                return str(value[key])
    return None


@dataclass(frozen=True)
class Entity:
    """Named entity extracted from a message or a document.

    The lower-cased name identifies the entity.
    """

    name: str
    type: str | None = None
    description: str | None = None
    confidence: float | None = None

    @property
    def key(self) -> str:
        return self.name.lower()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Entity":
        return cls(
            name=str(data["name"]),
            type=data.get("type"),
            description=data.get("description") or None,
            confidence=_as_float(data.get("confidence")),
        )


@dataclass(frozen=True)
class TopicItem:
    """Topic with an optional confidence.

    Global memory stores topics as bare names, so confidence may be absent.
    """

    name: str
    confidence: float | None = None

    @classmethod
    def from_value(cls, value: Any) -> "TopicItem | None":
        """Build a topic from a mapping or a bare topic name."""
        name = _item_name(value)
        if name is None:
            return None
        confidence = value.get("confidence") if isinstance(value, Mapping) else None
        return cls(name=name, confidence=_as_float(confidence))


@dataclass(frozen=True)
class MemoryItem:
    """A remembered exchange from short- or long-term memory."""

    user_message: str | None = None
    bot_response: str | None = None
    entity_names: list[str] = field(default_factory=list)
    relevance: float | None = None
    timestamp: datetime | str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MemoryItem":
        raw_entities = data.get("entities")
        names = []
        if isinstance(raw_entities, list):
            names = [n for n in (_item_name(e) for e in raw_entities) if n]
        return cls(
            user_message=data.get("userMessage") or data.get("user_message"),
            bot_response=data.get("botResponse") or data.get("bot_response"),
            entity_names=names,
            relevance=_as_float(data.get("relevance")),
            timestamp=data.get("timestamp"),
        )


@dataclass(frozen=True)
class DocumentSummary:
    """Summary of a document the user uploaded."""

    name: str
    summary: str
    key_concepts: list[str] = field(default_factory=list)
    entities: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], max_items: int) -> "DocumentSummary":
        """Build a summary, keeping at most ``max_items`` concepts and entities."""
        concepts = data.get("keyConcepts") or data.get("key_concepts") or []
        entities = data.get("entities") or []
        return cls(
            name=str(data.get("name") or data.get("originalName") or ""),
            summary=str(data.get("summary") or ""),
            key_concepts=_names(concepts)[:max_items],
            entities=_names(entities)[:max_items],
        )


def _names(values: Any) -> list[str]:
    if not isinstance(values, list):
        return []
    return [n for n in (_item_name(v) for v in values) if n]


@dataclass(frozen=True)
class MessageStructure:
    """Shape of the current message as seen by the analyzer."""

    is_question: bool = False
    is_command: bool = False
    complexity: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MessageStructure":
        return cls(
            is_question=bool(data.get("isQuestion") or data.get("is_question")),
            is_command=bool(data.get("isCommand") or data.get("is_command")),
            complexity=data.get("complexity"),
        )


@dataclass(frozen=True)
class Sentiment:
    """Sentiment label of the current message (e.g. ``urgent``, ``confused``)."""

    label: str | None = None
    score: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Sentiment":
        return cls(label=data.get("sentiment"), score=_as_float(data.get("score")))


@dataclass(frozen=True)
class LanguageTag:
    """Declared or detected language of the current message."""

    code: str
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.code

    @classmethod
    def from_value(cls, value: Any) -> "LanguageTag | None":
        """Accept a bare code (``"en"``) or a mapping (``{"code": "en", ...}``)."""
        if isinstance(value, str) and value:
            return cls(code=value)
        if isinstance(value, Mapping) and value.get("code"):
            return cls(code=str(value["code"]), name=value.get("name"))
        return None


@dataclass(frozen=True)
class EnhancedContext:
    """Bounded context ready to be rendered into a system prompt.

    Attributes:
        entities: Confident entities, local first, unique by lower-cased name.
        topics: Confident local topics followed by global-memory topics.
        memory: Relevant short-term items followed by long-term items.
        documents: Document summaries with capped concept and entity lists.
        current_message: Message being answered.
        message_structure: Question/command analysis of the current message.
        sentiment: Sentiment of the current message.
        language: Language of the current message.
        question_type: Category of the question, when the message is one.
        recent_messages: Raw conversation history, oldest first.
    """

    entities: list[Entity] = field(default_factory=list)
    topics: list[TopicItem] = field(default_factory=list)
    memory: list[MemoryItem] = field(default_factory=list)
    documents: list[DocumentSummary] = field(default_factory=list)
    current_message: Any = None
    message_structure: MessageStructure | None = None
    sentiment: Sentiment | None = None
    language: LanguageTag | None = None
    question_type: str | None = None
    recent_messages: list[Any] = field(default_factory=list)
