"""LLM response generator."""

import logging
from collections.abc import Mapping
from typing import Any

from cagchat.infrastructure.llm.client import LLMClient
from cagchat.infrastructure.llm.prompt_builder import PromptAssembler

logger = logging.getLogger(__name__)


class ContextualResponseGenerator:
    """LiteLLM-based response generator.

    Assembles the context-augmented prompt and sends it to the model.
    """

    def __init__(
        self,
        client: LLMClient,
        assembler: PromptAssembler,
        *,
        debug_llm_messages: bool = False,
    ) -> None:
        """Initialize the generator.

        Args:
            client: LLMClient instance.
            assembler: Prompt assembler.
            debug_llm_messages: If True, log LLM messages at INFO level.
        """
        self._client = client
        self._assembler = assembler
        self._debug_llm_messages = debug_llm_messages

    def generate(
        self,
        context_map: Any,
        user_config: Mapping[str, Any] | None = None,
    ) -> str:
        """Generate a response.

        Args:
            context_map: Raw context map of the current turn.
            user_config: Per-user settings (system_prompt, temperature, max_tokens).

        Returns:
            Generated response text.

        Raises:
            LLMError: If response generation fails.
        """
        messages = self._assembler.build_prompt(context_map, user_config)

        if self._should_log():
            self._log_messages(messages)

        response = self._client.complete(messages, user_config)

        if self._should_log():
            self._log_response(response)

        return response

    def _should_log(self) -> bool:
        """Check if logging should occur."""
        return self._debug_llm_messages or logger.isEnabledFor(logging.DEBUG)

    def _log_messages(self, messages: list[dict[str, str]]) -> None:
        """Log LLM request messages."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Request Messages ===")
        for i, msg in enumerate(messages):
            role = msg.get("role", "unknown")
            content = msg.get("content", "")
            log_func("[%d] role=%s", i, role)
            log_func("    content: %s", content)
        log_func("=== End of Messages ===")

    def _log_response(self, response: str) -> None:
        """Log LLM response."""
        log_func = logger.info if self._debug_llm_messages else logger.debug
        log_func("=== LLM Response ===")
        log_func("response: %s", response)
        log_func("=== End of Response ===")
