"""LLM integration."""

from cagchat.infrastructure.llm.client import LLMClient
from cagchat.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMContextWindowError,
    LLMError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from cagchat.infrastructure.llm.prompt_builder import PromptAssembler
from cagchat.infrastructure.llm.response_generator import ContextualResponseGenerator

__all__ = [
    "ContextualResponseGenerator",
    "LLMAuthenticationError",
    "LLMClient",
    "LLMContextWindowError",
    "LLMError",
    "LLMRateLimitError",
    "LLMTimeoutError",
    "PromptAssembler",
]
