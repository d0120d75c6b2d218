"""LLM port — outbound interface for text-completion calls."""

from typing import Protocol

from domain.model.token_usage import LLMCallResult


class LLMError(Exception):
    """Base exception for LLM port errors."""


class LLMTimeoutError(LLMError):
    """LLM request timed out."""


class LLMRateLimitError(LLMError):
    """LLM provider rate limit exceeded."""


class LLMAuthError(LLMError):
    """LLM provider authentication failed."""


class LLMPort(Protocol):
    """Port for raw prompt-in/text-out completion calls."""

    async def complete(
        self,
        prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 500,
        stop: list[str] | None = None,
        timeout: float = 30.0,
    ) -> tuple[str, LLMCallResult]:
        """Return the first choice's text (stripped) and call metadata."""
        ...
