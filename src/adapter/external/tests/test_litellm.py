"""Tests for LiteLLMAdapter.complete() with litellm mocked out."""

import unittest
from unittest.mock import AsyncMock, Mock, patch

import litellm

from adapter.external.litellm import LiteLLMAdapter, _extract_provider_from_model
from domain.model.token_usage import LLMCallResult
from port.llm import LLMAuthError, LLMError, LLMRateLimitError, LLMTimeoutError


def _completion_response(text="  {\"word\": \"hi\"}  ", finish_reason="stop"):
    choice = Mock()
    choice.text = text
    choice.finish_reason = finish_reason

    usage = Mock()
    usage.prompt_tokens = 40
    usage.completion_tokens = 12
    usage.total_tokens = 52

    response = Mock()
    response.choices = [choice]
    response.usage = usage
    response.id = "cmpl-1"
    return response


class TestLiteLLMAdapter(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.adapter = LiteLLMAdapter(
            model="hosted_vllm/microsoft/Phi-3-mini-4k-instruct",
            api_base="http://vllm:8000/v1",
            api_key=None,
        )

    async def test_returns_stripped_text_and_stats(self):
        with patch("adapter.external.litellm.atext_completion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = _completion_response()

            text, stats = await self.adapter.complete("prompt", max_tokens=1500, stop=["<|end|>"])

        self.assertEqual(text, '{"word": "hi"}')
        self.assertIsInstance(stats, LLMCallResult)
        self.assertEqual(stats.total_tokens, 52)
        self.assertEqual(stats.finish_reason, "stop")
        self.assertEqual(stats.provider, "hosted_vllm")

    async def test_passes_parameters_through(self):
        with patch("adapter.external.litellm.atext_completion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = _completion_response()

            await self.adapter.complete("prompt", temperature=0.3, max_tokens=500, stop=["<|user|>"], timeout=30.0)

        kwargs = mock_completion.call_args.kwargs
        self.assertEqual(kwargs["model"], "hosted_vllm/microsoft/Phi-3-mini-4k-instruct")
        self.assertEqual(kwargs["prompt"], "prompt")
        self.assertEqual(kwargs["api_base"], "http://vllm:8000/v1")
        self.assertEqual(kwargs["temperature"], 0.3)
        self.assertEqual(kwargs["max_tokens"], 500)
        self.assertEqual(kwargs["stop"], ["<|user|>"])
        self.assertEqual(kwargs["timeout"], 30.0)

    async def test_empty_prompt_raises_value_error(self):
        with self.assertRaises(ValueError):
            await self.adapter.complete("")

    async def test_empty_completion_raises_llm_error(self):
        with patch("adapter.external.litellm.atext_completion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = _completion_response(text="   ")

            with self.assertRaises(LLMError):
                await self.adapter.complete("prompt")

    async def test_provider_errors_are_mapped(self):
        cases = [
            (litellm.Timeout("timed out", model="m", llm_provider="hosted_vllm"), LLMTimeoutError),
            (litellm.AuthenticationError("bad key", llm_provider="hosted_vllm", model="m"), LLMAuthError),
            (litellm.RateLimitError("slow down", llm_provider="hosted_vllm", model="m"), LLMRateLimitError),
            (litellm.APIError(status_code=500, message="boom", llm_provider="hosted_vllm", model="m"), LLMError),
            (litellm.ServiceUnavailableError(message="down", llm_provider="hosted_vllm", model="m"), LLMError),
            (litellm.BadRequestError(message="bad prompt", model="m", llm_provider="hosted_vllm"), LLMError),
            (litellm.NotFoundError(message="no such model", model="m", llm_provider="hosted_vllm"), LLMError),
            (RuntimeError("socket closed"), LLMError),
        ]
        for raised, expected in cases:
            with self.subTest(raised=type(raised).__name__):
                with patch("adapter.external.litellm.atext_completion", new_callable=AsyncMock) as mock_completion:
                    mock_completion.side_effect = raised
                    with self.assertRaises(expected):
                        await self.adapter.complete("prompt")


class TestExtractProvider(unittest.TestCase):

    def test_prefixed_model(self):
        self.assertEqual(_extract_provider_from_model("hosted_vllm/microsoft/Phi-3"), "hosted_vllm")

    def test_bare_model(self):
        self.assertIsNone(_extract_provider_from_model("phi-3"))


if __name__ == '__main__':
    unittest.main()
