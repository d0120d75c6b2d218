"""Domain model for completion call results."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LLMCallResult:
    """Result metadata from a single completion call (Value Object).

    Attributes:
        model: The model name used for the call.
        prompt_tokens: Number of tokens in the prompt.
        completion_tokens: Number of tokens in the completion.
        total_tokens: Total tokens used (prompt + completion).
        finish_reason: Why generation stopped ("stop", "length", ...).
        provider: Optional provider name (e.g., "hosted_vllm", "openai").
    """
    model: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    finish_reason: str | None = None
    provider: str | None = field(default=None)

    def as_log_extra(self) -> dict:
        """Flatten into logging ``extra`` fields."""
        return {
            "model": self.model,
            "provider": self.provider,
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
            "finish_reason": self.finish_reason,
        }
