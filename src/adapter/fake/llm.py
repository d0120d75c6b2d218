"""In-memory implementation of LLMPort for testing."""

from domain.model.token_usage import LLMCallResult


class FakeLLMAdapter:
    """Fake LLM adapter that returns a preconfigured completion or raises."""

    def __init__(
        self,
        response: str = "{}",
        error: Exception | None = None,
        stats: LLMCallResult | None = None,
    ):
        self.response = response
        self.error = error
        self._stats = stats
        self.calls: list[dict] = []

    async def complete(
        self,
        prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 500,
        stop: list[str] | None = None,
        timeout: float = 30.0,
    ) -> tuple[str, LLMCallResult]:
        self.calls.append({
            "prompt": prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "stop": stop,
            "timeout": timeout,
        })
        if self.error is not None:
            raise self.error
        stats = self._stats or LLMCallResult(
            model="fake/model",
            prompt_tokens=10,
            completion_tokens=5,
            total_tokens=15,
            finish_reason="stop",
        )
        return self.response, stats
