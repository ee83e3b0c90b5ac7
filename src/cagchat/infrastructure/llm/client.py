"""Blocking chat completion over LiteLLM."""

import logging
from collections.abc import Mapping
from typing import Any

import litellm
from litellm.exceptions import (
    AuthenticationError,
    ContextWindowExceededError,
    RateLimitError,
    Timeout,
)

from cagchat.config import LLMConfig
from cagchat.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMContextWindowError,
    LLMError,
    LLMRateLimitError,
    LLMTimeoutError,
)

logger = logging.getLogger(__name__)

# user_config keys that may override the model profile, with their parser
SAMPLING_OVERRIDES = {"temperature": float, "max_tokens": int}


class LLMClient:
    """Send an assembled prompt to the configured model.

    One call is one blocking completion request. Per-user sampling
    settings take precedence over the model profile.
    """

    def __init__(self, config: LLMConfig) -> None:
        """Initialize the client.

        Args:
            config: Model profile (model, temperature, max_tokens).
        """
        self._config = config

    @property
    def model(self) -> str:
        return self._config.model

    def request_params(
        self, user_config: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Sampling parameters for one request.

        Unparseable per-user values are logged and ignored.

        Args:
            user_config: Per-user settings; only ``temperature`` and
                ``max_tokens`` are read here.

        Returns:
            Keyword arguments for ``litellm.completion`` minus the messages.
        """
        params: dict[str, Any] = {
            "model": self._config.model,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }
        if not isinstance(user_config, Mapping):
            return params

        for key, parse in SAMPLING_OVERRIDES.items():
            value = user_config.get(key)
            if value is None or isinstance(value, bool):
                continue
            try:
                params[key] = parse(value)
            except (TypeError, ValueError):
                logger.warning("Ignoring invalid %s in user config: %r", key, value)
        return params

    def complete(
        self,
        messages: list[dict[str, str]],
        user_config: Mapping[str, Any] | None = None,
    ) -> str:
        """Run one chat completion.

        Args:
            messages: OpenAI-format message list, system message first.
            user_config: Per-user sampling overrides.

        Returns:
            Reply text; empty when the model returned no content.

        Raises:
            LLMAuthenticationError: Invalid API key.
            LLMRateLimitError: Rate limit exceeded.
            LLMContextWindowError: Prompt too long for the model.
            LLMTimeoutError: Request timed out.
            LLMError: Empty prompt or any other API error.
        """
        if not messages:
            raise LLMError("Cannot send an empty prompt")

        params = self.request_params(user_config)
        logger.debug(
            "LLM request: model=%s, %d messages, temperature=%s, max_tokens=%s",
            params["model"],
            len(messages),
            params["temperature"],
            params["max_tokens"],
        )

        try:
            response = litellm.completion(messages=messages, **params)
            choice = response.choices[0]
        except AuthenticationError as e:
            logger.error("LLM authentication error: %s", e)
            raise LLMAuthenticationError(str(e)) from e
        except RateLimitError as e:
            logger.warning("LLM rate limit exceeded: %s", e)
            raise LLMRateLimitError(str(e)) from e
        except ContextWindowExceededError as e:
            logger.error("Prompt of %d messages exceeds the context window", len(messages))
            raise LLMContextWindowError(str(e)) from e
        except Timeout as e:
            logger.warning("LLM request timed out: %s", e)
            raise LLMTimeoutError(str(e)) from e
        except Exception as e:
            logger.error("LLM error: %s", e)
            raise LLMError(str(e)) from e

        if choice.finish_reason == "length":
            logger.warning("LLM reply cut at max_tokens=%s", params["max_tokens"])

        content = choice.message.content
        if content is None:
            logger.warning("LLM returned no content")
            return ""
        return content
