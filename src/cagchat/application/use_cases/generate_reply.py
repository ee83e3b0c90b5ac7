"""Generate reply use case."""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from cagchat.application.use_cases.maintain_title import MaintainTitleUseCase
from cagchat.domain.entities import Conversation, Message, Role
from cagchat.infrastructure.llm import ContextualResponseGenerator


class GenerateReplyUseCase:
    """Answer the latest user message of a conversation.

    The prompt is enriched with the analysis context of the turn, the reply
    is appended to the conversation and the title is kept up to date.
    """

    def __init__(
        self,
        response_generator: ContextualResponseGenerator,
        maintain_title: MaintainTitleUseCase,
    ) -> None:
        """Initialize the use case.

        Args:
            response_generator: Prompt assembly plus model call.
            maintain_title: Title upkeep use case.
        """
        self._response_generator = response_generator
        self._maintain_title = maintain_title

    def execute(
        self,
        conversation: Conversation,
        context_map: Any,
        user_config: Mapping[str, Any] | None = None,
    ) -> Message:
        """Execute the use case.

        Processing flow:
        1. Fill the context map's history from the conversation if missing
        2. Generate the reply
        3. Append the reply to the conversation
        4. Update the title if needed

        Args:
            conversation: Conversation being answered.
            context_map: Raw context map of the current turn.
            user_config: Per-user prompt and sampling settings.

        Returns:
            The assistant message that was appended.

        Raises:
            LLMError: If the model call fails.
        """
        context_map = self._with_history(conversation, context_map)

        text = self._response_generator.generate(context_map, user_config)

        reply = Message(
            role=Role.ASSISTANT,
            content=text,
            timestamp=datetime.now(timezone.utc),
        )
        conversation.messages.append(reply)

        context = context_map if isinstance(context_map, Mapping) else None
        self._maintain_title.execute(conversation, context)
        return reply

    @staticmethod
    def _with_history(conversation: Conversation, context_map: Any) -> Any:
        if not isinstance(context_map, Mapping):
            return context_map
        if context_map.get("recentMessages") or context_map.get("recent_messages"):
            return context_map
        return {**context_map, "recentMessages": list(conversation.messages)}
