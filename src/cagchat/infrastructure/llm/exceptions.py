"""Errors raised by the inference call."""


class LLMError(Exception):
    """The model could not produce a reply."""


class LLMRateLimitError(LLMError):
    """The provider throttled the request."""


class LLMAuthenticationError(LLMError):
    """The provider rejected the credentials."""


class LLMTimeoutError(LLMError):
    """The provider did not answer in time."""


class LLMContextWindowError(LLMError):
    """The assembled prompt does not fit the model's context window.

    Lowering the context limits (history, memory and document caps)
    shrinks the system prompt.
    """
