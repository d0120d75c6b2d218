"""Import sources — build import payloads from external dictionary data.

Converts Free Dictionary API entries into ImportedEntry values (translating
definitions and examples to Vietnamese on the way) and converts between
ImportedEntry and its JSON payload form.
"""

import asyncio
import logging
from typing import Any

from domain.model.entry import (
    Accent,
    DEFAULT_LANGUAGE,
    DifficultyLevel,
    ImportedDefinition,
    ImportedEntry,
    ImportedExample,
    ImportedPronunciation,
)
from domain.model.errors import DomainError
from port.dictionary import DictionaryPort
from port.llm import LLMPort
from services.generation_service import translate

logger = logging.getLogger(__name__)

MAX_MEANINGS = 3
MAX_DEFINITIONS_PER_MEANING = 2
MAX_SYNONYMS = 5
TARGET_LANGUAGE = "vi"

# Pause between translation calls
TRANSLATION_DELAY_SECONDS = 0.1


# ---------------------------------------------------------------------------
# Free Dictionary → ImportedEntry
# ---------------------------------------------------------------------------

def accent_from_audio(audio_url: str | None) -> str:
    """Infer the accent tag from an audio file name, US by default."""
    if audio_url and "-us" in audio_url:
        return Accent.US.value
    if audio_url and "-uk" in audio_url:
        return Accent.UK.value
    return Accent.US.value


def extract_pronunciations(api_entry: dict[str, Any]) -> tuple[ImportedPronunciation, ...]:
    """Phonetics carrying IPA text, tagged by accent."""
    return tuple(
        ImportedPronunciation(
            accent=accent_from_audio(phonetic.get("audio")),
            ipa=phonetic["text"],
            audio_url=phonetic.get("audio") or None,
        )
        for phonetic in api_entry.get("phonetics") or []
        if phonetic.get("text")
    )


def extract_synonyms(api_entry: dict[str, Any]) -> tuple[str, ...]:
    """Synonyms of the first definition of the first meaning."""
    meanings = api_entry.get("meanings") or []
    if not meanings:
        return ()
    definitions = meanings[0].get("definitions") or []
    if not definitions:
        return ()
    return tuple((definitions[0].get("synonyms") or [])[:MAX_SYNONYMS])


async def translate_or_keep(llm: LLMPort, text: str) -> str:
    """Translate English text to Vietnamese; keep the original on failure."""
    try:
        result = await translate(llm, text, DEFAULT_LANGUAGE, TARGET_LANGUAGE)
        return result.translated_text
    except DomainError as e:
        logger.warning("Translation failed, keeping English text", extra={
            "text_preview": text[:80], "error": str(e),
        })
        return text


async def build_imported_entry(
    api_entry: dict[str, Any],
    rank: int,
    llm: LLMPort,
    word: str | None = None,
    delay: float = TRANSLATION_DELAY_SECONDS,
) -> ImportedEntry:
    """Turn one Free Dictionary entry into an import payload.

    Takes up to 3 meanings with 2 definitions each. ``rank`` becomes the
    frequency rank.
    """
    word = word or api_entry["word"]

    definitions: list[ImportedDefinition] = []
    for meaning in (api_entry.get("meanings") or [])[:MAX_MEANINGS]:
        pos = meaning.get("partOfSpeech", "")
        for raw in (meaning.get("definitions") or [])[:MAX_DEFINITIONS_PER_MEANING]:
            definition_en = raw.get("definition", "")
            definition_vi = await translate_or_keep(llm, definition_en)

            examples: tuple[ImportedExample, ...] = ()
            if raw.get("example"):
                example_vi = await translate_or_keep(llm, raw["example"])
                examples = (ImportedExample(en=raw["example"], vi=example_vi),)

            definitions.append(ImportedDefinition(
                pos=pos,
                definition_en=definition_en,
                definition_vi=definition_vi,
                level=DifficultyLevel.INTERMEDIATE.value,
                examples=examples,
            ))
            if delay:
                await asyncio.sleep(delay)

    return ImportedEntry(
        word=word,
        word_normalized=word.lower(),
        language=DEFAULT_LANGUAGE,
        frequency_rank=rank,
        pronunciations=extract_pronunciations(api_entry),
        definitions=tuple(definitions),
        synonyms=extract_synonyms(api_entry),
    )


async def fetch_imported_entry(
    dictionary: DictionaryPort,
    llm: LLMPort,
    word: str,
    rank: int,
    delay: float = TRANSLATION_DELAY_SECONDS,
) -> ImportedEntry | None:
    """Fetch ``word`` from the dictionary port and build its payload.

    Returns None when the dictionary has no data for the word.
    """
    entries = await dictionary.fetch(word)
    if not entries:
        logger.warning("No dictionary data for word", extra={"word": word})
        return None
    return await build_imported_entry(entries[0], rank, llm, word=word, delay=delay)


# ---------------------------------------------------------------------------
# JSON payload ↔ ImportedEntry
# ---------------------------------------------------------------------------

def entry_from_payload(payload: dict[str, Any]) -> ImportedEntry:
    """Build an ImportedEntry from its JSON payload form."""
    return ImportedEntry(
        word=payload["word"],
        word_normalized=payload.get("word_normalized"),
        language=payload.get("language"),
        frequency_rank=payload.get("frequency_rank"),
        pronunciations=tuple(
            ImportedPronunciation(accent=p["accent"], ipa=p["ipa"], audio_url=p.get("audio_url"))
            for p in payload.get("pronunciations") or []
        ),
        definitions=tuple(
            ImportedDefinition(
                pos=d["pos"],
                definition_en=d["definition_en"],
                definition_vi=d["definition_vi"],
                level=d.get("level"),
                examples=tuple(
                    ImportedExample(en=ex["en"], vi=ex["vi"], source=ex.get("source"))
                    for ex in d.get("examples") or []
                ),
            )
            for d in payload.get("definitions") or []
        ),
        synonyms=tuple(payload.get("synonyms") or []),
        word_forms=dict(payload.get("word_forms") or {}),
    )


def entry_to_payload(entry: ImportedEntry) -> dict[str, Any]:
    """JSON payload form of an ImportedEntry, as accepted by entry_from_payload."""
    payload: dict[str, Any] = {
        "word": entry.word,
        "word_normalized": entry.normalized_key,
        "language": entry.language or DEFAULT_LANGUAGE,
        "frequency_rank": entry.frequency_rank,
        "pronunciations": [
            {"accent": p.accent, "ipa": p.ipa, "audio_url": p.audio_url}
            for p in entry.pronunciations
        ],
        "definitions": [
            {
                "pos": d.pos,
                "definition_en": d.definition_en,
                "definition_vi": d.definition_vi,
                "level": d.level or DifficultyLevel.INTERMEDIATE.value,
                "examples": [{"en": ex.en, "vi": ex.vi} for ex in d.examples],
            }
            for d in entry.definitions
        ],
        "synonyms": list(entry.synonyms),
    }
    if entry.word_forms:
        payload["word_forms"] = dict(entry.word_forms)
    return payload
