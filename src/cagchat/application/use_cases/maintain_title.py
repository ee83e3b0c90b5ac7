"""Conversation title upkeep use case."""

import logging
from collections.abc import Mapping
from typing import Any

from cagchat.domain.entities import Conversation, EnhancedContext, TitleState
from cagchat.domain.services import TitleGenerator

logger = logging.getLogger(__name__)

# Conversations up to this size get a fresh title instead of an improved one.
MAX_MESSAGES_FOR_GENERATION = 3


class MaintainTitleUseCase:
    """Keep a conversation's title in step with its content.

    The caller persists the conversation afterwards and must not run this
    concurrently for the same conversation.
    """

    def __init__(self, title_generator: TitleGenerator) -> None:
        """Initialize the use case.

        Args:
            title_generator: Title engine.
        """
        self._titles = title_generator

    def execute(
        self,
        conversation: Conversation,
        context: EnhancedContext | Mapping[str, Any] | None = None,
    ) -> bool:
        """Update the title if the update policy asks for it.

        Processing flow:
        1. Skip unless an update is due (never for hand-edited titles)
        2. Short conversations: generate from the first user message
        3. Longer conversations: improve from the whole history

        Args:
            conversation: Conversation to update in place.
            context: Analysis context of the latest turn.

        Returns:
            True if the title changed.
        """
        if not self._titles.needs_title_update(conversation):
            return False

        previous = conversation.title
        if len(conversation.messages) <= MAX_MESSAGES_FOR_GENERATION:
            title = self._titles.generate_title(
                conversation.messages, conversation.language
            )
            conversation.apply_title(title, TitleState.GENERATED)
        else:
            self._titles.improve_title(conversation, context)

        changed = conversation.title != previous
        if changed:
            logger.info(
                "Title of %s updated: %r -> %r",
                conversation.id,
                previous,
                conversation.title,
            )
        return changed

    def rename(self, conversation: Conversation, title: str) -> None:
        """Rename a conversation by hand, locking its title.

        Raises:
            ValueError: If the title is empty.
        """
        title = title.strip()
        if not title:
            raise ValueError("Title must not be empty")
        conversation.lock_title(title)

    def unlock(self, conversation: Conversation) -> None:
        """Allow automatic title updates again."""
        conversation.unlock_title()
