"""Filter, rank and cap the raw context map."""

import logging
from collections.abc import Mapping
from typing import Any

from cagchat.config.models import ContextLimits
from cagchat.domain.entities.context import (
    DocumentSummary,
    EnhancedContext,
    Entity,
    LanguageTag,
    MemoryItem,
    MessageStructure,
    Sentiment,
    TopicItem,
)
from cagchat.domain.exceptions import MalformedContextError

logger = logging.getLogger(__name__)


def _get(data: Mapping[str, Any], *keys: str) -> Any:
    """First present value among camelCase/snake_case spellings of a key."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _list(data: Mapping[str, Any] | None, *keys: str) -> list[Any]:
    """A list field, or an empty list when absent or not a list."""
    if not isinstance(data, Mapping):
        return []
    value = _get(data, *keys)
    if value is None:
        return []
    if not isinstance(value, list):
        logger.debug("Ignoring non-list context field %s", keys[0])
        return []
    return value


def _mappings(items: list[Any]) -> list[Mapping[str, Any]]:
    return [item for item in items if isinstance(item, Mapping)]


def _at_least(value: float | None, threshold: float) -> bool:
    return value is not None and value >= threshold


class ContextNormalizer:
    """Turn a raw context map into a bounded :class:`EnhancedContext`.

    Missing optional fields are read as empty; only a context map that is
    not a mapping at all is an error.
    """

    def __init__(self, limits: ContextLimits | None = None) -> None:
        self._limits = limits or ContextLimits()

    def normalize(self, context_map: Any) -> EnhancedContext:
        """Normalize a raw context map.

        Args:
            context_map: Mapping produced by the analysis services.

        Returns:
            EnhancedContext with capped lists.

        Raises:
            MalformedContextError: If ``context_map`` is not a mapping.
        """
        if not isinstance(context_map, Mapping):
            raise MalformedContextError(
                f"Context map must be a mapping, got {type(context_map).__name__}"
            )

        global_memory = _get(context_map, "globalMemory", "global_memory")
        if not isinstance(global_memory, Mapping):
            global_memory = None

        structure = _get(context_map, "messageStructure", "message_structure")
        sentiment = context_map.get("sentiment")
        question_type = _get(context_map, "questionType", "question_type")

        enhanced = EnhancedContext(
            entities=self._entities(context_map, global_memory),
            topics=self._topics(context_map, global_memory),
            memory=self._memory(context_map.get("memory")),
            documents=self._documents(context_map),
            current_message=_get(context_map, "currentMessage", "current_message"),
            message_structure=(
                MessageStructure.from_dict(structure)
                if isinstance(structure, Mapping)
                else None
            ),
            sentiment=(
                Sentiment.from_dict(sentiment) if isinstance(sentiment, Mapping) else None
            ),
            language=LanguageTag.from_value(context_map.get("language")),
            question_type=self._question_type(question_type),
            recent_messages=_list(context_map, "recentMessages", "recent_messages"),
        )
        logger.debug(
            "Normalized context: %d entities, %d topics, %d memory items, %d documents",
            len(enhanced.entities),
            len(enhanced.topics),
            len(enhanced.memory),
            len(enhanced.documents),
        )
        return enhanced

    def _entities(
        self, context_map: Mapping[str, Any], global_memory: Mapping[str, Any] | None
    ) -> list[Entity]:
        limit = self._limits.max_entities
        local = [
            Entity.from_dict(item)
            for item in _mappings(_list(context_map, "entities"))
            if item.get("name")
        ]
        entities = [
            e for e in local if _at_least(e.confidence, self._limits.entity_confidence)
        ][:limit]

        seen = {e.key for e in entities}
        for item in _mappings(_list(global_memory, "entities")):
            if len(entities) >= limit:
                break
            if not item.get("name"):
                continue
            entity = Entity.from_dict(item)
            if entity.key in seen:
                continue
            seen.add(entity.key)
            entities.append(entity)
        return entities

    def _topics(
        self, context_map: Mapping[str, Any], global_memory: Mapping[str, Any] | None
    ) -> list[TopicItem]:
        local = [TopicItem.from_value(v) for v in _list(context_map, "topics")]
        topics = [
            t
            for t in local
            if t is not None and _at_least(t.confidence, self._limits.topic_confidence)
        ][: self._limits.max_local_topics]

        global_topics = [TopicItem.from_value(v) for v in _list(global_memory, "topics")]
        topics.extend(
            t for t in global_topics[: self._limits.max_global_topics] if t is not None
        )
        return topics[: self._limits.max_topics]

    def _memory(self, memory: Any) -> list[MemoryItem]:
        if not isinstance(memory, Mapping):
            return []

        short_term = [
            m
            for m in map(
                MemoryItem.from_dict, _mappings(_list(memory, "shortTerm", "short_term"))
            )
            if _at_least(m.relevance, self._limits.short_term_relevance)
        ][: self._limits.max_short_term]
        long_term = [
            m
            for m in map(
                MemoryItem.from_dict, _mappings(_list(memory, "longTerm", "long_term"))
            )
            if _at_least(m.relevance, self._limits.long_term_relevance)
        ][: self._limits.max_long_term]
        return short_term + long_term

    def _documents(self, context_map: Mapping[str, Any]) -> list[DocumentSummary]:
        return [
            DocumentSummary.from_dict(doc, self._limits.max_document_items)
            for doc in _mappings(_list(context_map, "documents"))
        ]

    @staticmethod
    def _question_type(value: Any) -> str | None:
        if isinstance(value, Mapping):
            value = value.get("type")
        return str(value) if value else None
