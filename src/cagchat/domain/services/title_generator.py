"""Conversation title engine."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from cagchat.config.models import TitleConfig
from cagchat.domain.entities.context import EnhancedContext, Entity
from cagchat.domain.entities.conversation import Conversation, TitleState
from cagchat.domain.entities.message import Message
from cagchat.domain.services.text_analysis import TextAnalysis
from cagchat.domain.services.title_composer import TitleComposer
from cagchat.domain.services.title_policy import TitleUpdatePolicy

logger = logging.getLogger(__name__)

TITLE_ENTITY_TYPES = frozenset({"person", "organization"})
MAX_TITLE_ENTITIES = 2
MAX_TITLE_WORDS = 3


def _context_entities(context: EnhancedContext | Mapping[str, Any] | None) -> list[Entity]:
    if context is None:
        return []
    if isinstance(context, EnhancedContext):
        return list(context.entities)
    raw = context.get("entities") or []
    if not isinstance(raw, list):
        return []
    return [
        Entity.from_dict(item)
        for item in raw
        if isinstance(item, Mapping) and item.get("name")
    ]


class TitleGenerator:
    """Generate, improve and gate conversation titles.

    None of the public methods raise: any internal failure is logged and
    the current (or default) title is returned instead.
    """

    def __init__(self, analysis: TextAnalysis, config: TitleConfig | None = None) -> None:
        self._analysis = analysis
        self._config = config or TitleConfig()
        self._composer = TitleComposer(analysis, self._config)
        self._policy = TitleUpdatePolicy(analysis, self._config)

    def detect_language(self, text: str | None) -> str:
        return self._analysis.detect_language(text)

    def generate_title(
        self,
        messages: Sequence[Message | Mapping[str, Any]] | None,
        language: str | None = None,
    ) -> str:
        """Generate a title from the first user message.

        Args:
            messages: Conversation messages, as entities or role/content dicts.
            language: Force a language instead of detecting it.

        Returns:
            Generated title.
        """
        try:
            return self._composer.compose(messages or [], language)
        except Exception:
            logger.exception("Title generation failed")
            return self._analysis.profile(language).default_title

    def needs_title_update(self, conversation: Conversation) -> bool:
        try:
            return self._policy.needs_update(conversation)
        except Exception:
            logger.exception("Title update check failed for %s", conversation.id)
            return False

    def improve_title(
        self,
        conversation: Conversation,
        context: EnhancedContext | Mapping[str, Any] | None = None,
    ) -> str:
        """Improve the title of a conversation that has grown.

        Priority: people or organizations from the analysis context, then
        topics of all user messages, then TF-IDF significant words. If none
        apply the current title is kept. The conversation's title bookkeeping
        is updated in place.

        Args:
            conversation: Conversation with at least two messages.
            context: Analysis context holding extracted entities.

        Returns:
            The conversation's title after the improvement.
        """
        try:
            return self._improve(conversation, context)
        except Exception:
            logger.exception("Title improvement failed for %s", conversation.id)
            return conversation.title or self._analysis.profile(
                conversation.language
            ).default_title

    def _improve(
        self,
        conversation: Conversation,
        context: EnhancedContext | Mapping[str, Any] | None,
    ) -> str:
        profile = self._analysis.profile(conversation.language)
        if len(conversation.messages) < 2 or conversation.is_locked:
            return conversation.title or profile.default_title

        conversation.record_title()

        user_messages = conversation.user_messages
        if not user_messages:
            return conversation.title or profile.default_title

        combined = " ".join(user_messages)
        code = conversation.language or self._analysis.detect_language(combined)
        profile = self._analysis.profile(code)

        candidate = self._candidate(conversation, context, combined, profile.code)
        if candidate is None:
            if conversation.title:
                return conversation.title
            candidate = self._composer.from_message(user_messages[0], profile)

        if conversation.apply_title(candidate, TitleState.IMPROVED):
            logger.info("Conversation %s retitled: %s", conversation.id, candidate)
        return candidate

    def _candidate(
        self,
        conversation: Conversation,
        context: EnhancedContext | Mapping[str, Any] | None,
        combined: str,
        code: str,
    ) -> str | None:
        profile = self._analysis.profile(code)

        names = [
            e.name for e in _context_entities(context) if e.type in TITLE_ENTITY_TYPES
        ][:MAX_TITLE_ENTITIES]
        if names:
            return self._composer.from_entities(names, profile)

        topics = self._analysis.topics(combined, code)
        conversation.last_topics = topics
        if topics:
            return self._composer.from_topics(topics, profile)

        words = self._analysis.significant_words(
            combined, code, self._config.max_significant_words
        )[:MAX_TITLE_WORDS]
        if words:
            return self._composer.from_words(words, profile)
        return None
