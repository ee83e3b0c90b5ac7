"""Decide when a conversation title should be regenerated."""

from cagchat.config.models import TitleConfig
from cagchat.domain.entities.conversation import Conversation
from cagchat.domain.services.text_analysis import TextAnalysis

# Below this many messages a title is never considered stale.
MIN_MESSAGES_FOR_REFRESH = 4


class TitleUpdatePolicy:
    """Gatekeeper for automatic title changes.

    A locked (hand-edited) title is never updated. Otherwise an update is
    due when the title is missing or a placeholder, when enough messages
    arrived since the title was generated, or when the topics of the
    conversation drifted away from those seen at the last improvement.
    """

    def __init__(self, analysis: TextAnalysis, config: TitleConfig | None = None) -> None:
        self._analysis = analysis
        self._config = config or TitleConfig()
        self._generic_titles = analysis.registry.generic_titles()

    def needs_update(self, conversation: Conversation) -> bool:
        """Check if the conversation title should be regenerated.

        Args:
            conversation: Conversation to inspect.

        Returns:
            True if an automatic update is due.
        """
        if conversation.is_locked or conversation.title_edited:
            return False

        if not conversation.title or conversation.title in self._generic_titles:
            return True

        return self._has_enough_new_messages(conversation) or self._topics_drifted(
            conversation
        )

    def _has_enough_new_messages(self, conversation: Conversation) -> bool:
        generated_at = conversation.title_generated_at
        total = len(conversation.messages)
        if not generated_at or generated_at >= total:
            return False
        if total < MIN_MESSAGES_FOR_REFRESH:
            return False
        return total - generated_at >= self._config.min_update_messages

    def _topics_drifted(self, conversation: Conversation) -> bool:
        """Fewer than half of the comparable topics are still present."""
        if not conversation.title_generated_at or conversation.last_topics is None:
            return False

        user_messages = conversation.user_messages
        if not user_messages:
            return False

        combined = " ".join(user_messages)
        language = conversation.language or self._analysis.detect_language(
            conversation.messages[0].content
        )
        current = self._analysis.topics(combined, language)
        if not current:
            return False

        previous = conversation.last_topics
        common = sum(1 for topic in current if topic in previous)
        return common < min(len(current), len(previous)) / 2
