"""Generation service — dictionary entries and translations from the LLM.

Both operations run a fixed prompt through the completion port. Entry
generation additionally extracts and validates a JSON object from the
free-text completion.
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from domain.model.errors import (
    DomainError,
    GenerationUnparsableError,
    TranslationFailedError,
    UpstreamError,
    UpstreamTimeoutError,
)
from domain.model.generated_entry import GeneratedEntry
from domain.model.language import get_language_name
from port.llm import LLMError, LLMPort, LLMTimeoutError
from utils.json_parsing import extract_json_span, parse_json_span
from utils.prompts import STOP_SEQUENCES, build_dictionary_entry_prompt, build_translation_prompt

logger = logging.getLogger(__name__)

GENERATION_TEMPERATURE = 0.3
GENERATION_TIMEOUT_SECONDS = 30.0
ENTRY_MAX_TOKENS = 1500
TRANSLATION_MAX_TOKENS = 500


@dataclass(frozen=True)
class TranslationResult:
    original_text: str
    translated_text: str
    source_lang: str
    target_lang: str


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

async def generate_entry(llm: LLMPort, word: str) -> dict[str, Any]:
    """Generate a dictionary entry for ``word``.

    Returns the parsed JSON object unchanged once it passes schema
    validation.

    Raises:
        UpstreamTimeoutError: The completion call timed out.
        UpstreamError: The completion call failed otherwise.
        GenerationUnparsableError: No valid entry could be read from the text.
    """
    prompt = build_dictionary_entry_prompt(word)
    text = await _complete(llm, prompt, ENTRY_MAX_TOKENS, operation="generate_entry", word=word)

    logger.debug("Completion received", extra={"word": word, "content_preview": text[:200]})

    span = extract_json_span(text)
    if span is None:
        logger.warning("No JSON object in completion", extra={"word": word})
        raise GenerationUnparsableError(word)

    data = parse_json_span(span)
    if data is None:
        logger.warning("Completion JSON is not a valid object", extra={"word": word})
        raise GenerationUnparsableError(word)

    try:
        GeneratedEntry.model_validate(data)
    except ValidationError as e:
        logger.warning("Completion JSON failed schema validation", extra={
            "word": word,
            "error_count": e.error_count(),
            "errors": [err["loc"] for err in e.errors()],
        })
        raise GenerationUnparsableError(word) from e

    logger.info("Entry generated", extra={
        "word": word,
        "definition_count": len(data.get("definitions", [])),
    })
    return data


async def translate(
    llm: LLMPort,
    text: str,
    source_lang: str = "en",
    target_lang: str = "vi",
) -> TranslationResult:
    """Translate free text between two language codes.

    Unknown codes are passed to the model as-is.
    """
    prompt = build_translation_prompt(
        text, get_language_name(source_lang), get_language_name(target_lang),
    )
    try:
        translated = await _complete(llm, prompt, TRANSLATION_MAX_TOKENS, operation="translate")
    except DomainError:
        raise
    except Exception as e:
        logger.error("Translation failed", extra={
            "source_lang": source_lang, "target_lang": target_lang, "error": str(e),
        }, exc_info=True)
        raise TranslationFailedError(str(e)) from e

    return TranslationResult(
        original_text=text,
        translated_text=translated.strip(),
        source_lang=source_lang,
        target_lang=target_lang,
    )


# ---------------------------------------------------------------------------
# Completion call
# ---------------------------------------------------------------------------

async def _complete(llm: LLMPort, prompt: str, max_tokens: int, operation: str, **log_extra) -> str:
    """Run one completion, mapping port errors to domain errors."""
    try:
        text, stats = await llm.complete(
            prompt,
            temperature=GENERATION_TEMPERATURE,
            max_tokens=max_tokens,
            stop=STOP_SEQUENCES,
            timeout=GENERATION_TIMEOUT_SECONDS,
        )
    except LLMTimeoutError as e:
        logger.error("Completion timed out", extra={"operation": operation, **log_extra})
        raise UpstreamTimeoutError(f"Completion timed out: {e}") from e
    except LLMError as e:
        logger.error("Completion failed", extra={
            "operation": operation, "error": str(e), **log_extra,
        })
        raise UpstreamError(f"Completion failed: {e}") from e

    logger.info("LLM usage", extra={"operation": operation, **stats.as_log_extra()})
    return text
