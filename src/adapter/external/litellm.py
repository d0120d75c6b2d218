"""LiteLLM adapter — implements LLMPort with LiteLLM text completion.

The default target is a vLLM server exposing an OpenAI-compatible
``/v1/completions`` endpoint, addressed through the ``hosted_vllm/`` prefix.
"""

import logging
import os

import litellm
from litellm import atext_completion

from domain.model.token_usage import LLMCallResult
from port.llm import LLMAuthError, LLMError, LLMRateLimitError, LLMTimeoutError

# Suppress LiteLLM's verbose logging (proxy server warnings, etc.)
litellm.suppress_debug_info = True
litellm.set_verbose = False
logging.getLogger("LiteLLM").setLevel(logging.CRITICAL)

logger = logging.getLogger(__name__)

LLM_MODEL = os.getenv("LLM_MODEL", "hosted_vllm/microsoft/Phi-3-mini-4k-instruct")
LLM_API_BASE = os.getenv("LLM_API_BASE", "http://localhost:8000/v1")
LLM_API_KEY = os.getenv("LLM_API_KEY")


def _extract_provider_from_model(model: str) -> str | None:
    """Extract provider name from model string.

    Args:
        model: Model string (e.g., "hosted_vllm/microsoft/Phi-3-mini-4k-instruct")

    Returns:
        Provider name or None if not specified in model string.
    """
    if "/" in model:
        return model.split("/")[0]
    return None


class LiteLLMAdapter:
    """Adapter that implements LLMPort using LiteLLM text completion."""

    def __init__(
        self,
        model: str = LLM_MODEL,
        api_base: str | None = LLM_API_BASE,
        api_key: str | None = LLM_API_KEY,
    ):
        self.model = model
        self.api_base = api_base
        self.api_key = api_key

    async def complete(
        self,
        prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 500,
        stop: list[str] | None = None,
        timeout: float = 30.0,
    ) -> tuple[str, LLMCallResult]:
        """Run a prompt through the completion endpoint.

        Args:
            prompt: Full prompt text, delimiter tokens included.
            temperature: Sampling temperature.
            max_tokens: Completion token cap.
            stop: Stop sequences.
            timeout: Request timeout in seconds.

        Returns:
            Tuple of (text, stats). Text is the first choice, stripped.

        Raises:
            ValueError: If the prompt is empty.
            LLMTimeoutError: If the request times out.
            LLMAuthError / LLMRateLimitError / LLMError: Provider failures.
        """
        if not prompt:
            raise ValueError("prompt cannot be empty")

        try:
            response = await atext_completion(
                model=self.model,
                prompt=prompt,
                api_base=self.api_base,
                api_key=self.api_key,
                temperature=temperature,
                max_tokens=max_tokens,
                stop=stop,
                timeout=timeout,
            )
        except litellm.Timeout as e:
            raise LLMTimeoutError(str(e)) from e
        except litellm.AuthenticationError as e:
            raise LLMAuthError(str(e)) from e
        except litellm.RateLimitError as e:
            raise LLMRateLimitError(str(e)) from e
        except litellm.ServiceUnavailableError as e:
            raise LLMError(str(e)) from e
        except litellm.APIError as e:
            raise LLMError(str(e)) from e
        except litellm.APIConnectionError as e:
            raise LLMError(str(e)) from e
        except Exception as e:
            # BadRequestError, NotFoundError and friends are not APIError subclasses
            raise LLMError(str(e)) from e

        text = ""
        finish_reason = None
        if response.choices and len(response.choices) > 0:
            choice = response.choices[0]
            finish_reason = getattr(choice, "finish_reason", None)
            if choice.text:
                text = choice.text.strip()

        if not text:
            logger.error("No text in completion response", extra={
                "model": self.model,
                "response_id": getattr(response, "id", None),
            })
            raise LLMError("No content returned from LLM")

        usage = getattr(response, "usage", None)
        stats = LLMCallResult(
            model=self.model,
            prompt_tokens=usage.prompt_tokens if usage else 0,
            completion_tokens=usage.completion_tokens if usage else 0,
            total_tokens=usage.total_tokens if usage else 0,
            finish_reason=finish_reason,
            provider=_extract_provider_from_model(self.model),
        )

        logger.debug("LLM completion finished", extra=stats.as_log_extra())

        return text, stats
