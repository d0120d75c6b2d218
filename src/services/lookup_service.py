"""Lookup service — store-first dictionary lookup with generative fallback.

Pipeline: normalize → store lookup →
    hit:  backfill missing audio (parallel) → assemble
    miss: generate with the LLM (not persisted)
"""

import asyncio
import logging
from typing import Any

from domain.model.entry import Entry, Pronunciation, normalize_word
from domain.model.errors import DomainError, LookupFailedError, StorageError
from port.dictionary import DictionaryPort
from port.entry_repository import EntryRepository
from port.llm import LLMPort
from services.audio_service import resolve_audio_url
from services.generation_service import generate_entry

logger = logging.getLogger(__name__)

# Suggestions offered when the store has no prefix match
COMMON_WORDS = [
    'hello', 'world', 'dictionary', 'learn', 'example', 'language',
    'practice', 'study', 'vocabulary', 'grammar', 'pronunciation',
    'definition', 'translation', 'english', 'vietnamese', 'word',
    'sentence', 'phrase', 'meaning', 'synonym', 'antonym', 'help',
    'helicopter', 'history', 'house', 'home', 'hand', 'happy', 'hard',
    'have', 'heart', 'heavy', 'high', 'hold',
]


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

async def lookup(
    word: str,
    repo: EntryRepository,
    dictionary: DictionaryPort,
    llm: LLMPort,
) -> dict[str, Any]:
    """Look up a word, generating an entry when the store has none.

    Raises:
        DomainError subclasses unchanged; anything else as LookupFailedError.
    """
    normalized = normalize_word(word)
    try:
        entry = repo.find_by_word(normalized)
        if entry is None:
            logger.info("Word not in store, generating", extra={"word": normalized})
            return await generate_entry(llm, normalized)

        await _backfill_audio(normalized, entry, dictionary, repo)
        synonyms = repo.find_synonyms(entry.id)
        logger.info("Word found in store", extra={"word": entry.word, "entry_id": entry.id})
        return assemble_response(entry, synonyms)
    except DomainError:
        raise
    except Exception as e:
        logger.error("Failed to lookup word", extra={
            "word": normalized, "operation": "lookup", "error": str(e),
        }, exc_info=True)
        raise LookupFailedError(normalized, str(e)) from e


def search_words(repo: EntryRepository, query: str, limit: int = 10) -> list[str]:
    """Prefix suggestions, most frequent first.

    Falls back to a static word list when the store has no match.
    """
    query = query.lower()
    words = repo.search_prefix(query, limit)
    if words:
        return words
    return [w for w in COMMON_WORDS if w.startswith(query)][:limit]


def assemble_response(entry: Entry, synonyms: list[str]) -> dict[str, Any]:
    """Shape a stored entry into the lookup response.

    Optional keys are omitted when empty.
    """
    result: dict[str, Any] = {
        'word': entry.word,
        'pronunciations': [
            {'accent': p.accent, 'ipa': p.ipa, 'audio_url': p.audio_url}
            for p in entry.pronunciations
        ],
        'definitions': [
            {
                'pos': d.pos,
                'definition_en': d.definition_en,
                'definition_vi': d.definition_vi,
                'level': d.level,
                'examples': [{'en': ex.example_en, 'vi': ex.example_vi} for ex in d.examples],
            }
            for d in entry.sorted_definitions
        ],
    }

    word_forms = entry.word_forms_map
    if word_forms:
        result['word_forms'] = word_forms
    if synonyms:
        result['synonyms'] = synonyms
    if entry.frequency_rank is not None:
        result['frequency_rank'] = entry.frequency_rank
    return result


# ---------------------------------------------------------------------------
# Audio backfill
# ---------------------------------------------------------------------------

async def _backfill_audio(
    word: str, entry: Entry, dictionary: DictionaryPort, repo: EntryRepository,
) -> None:
    """Resolve audio for every pronunciation lacking it, all in parallel.

    Best effort: every branch runs to completion and a failing one is
    logged without failing the lookup.
    """
    missing = [p for p in entry.pronunciations if not p.audio_url]
    if not missing:
        return
    results = await asyncio.gather(*(
        _backfill_one(word, p, dictionary, repo) for p in missing
    ), return_exceptions=True)
    for pronunciation, result in zip(missing, results):
        if isinstance(result, Exception):
            logger.warning("Audio backfill failed", extra={
                "word": word, "accent": pronunciation.accent, "error": str(result),
            })


async def _backfill_one(
    word: str,
    pronunciation: Pronunciation,
    dictionary: DictionaryPort,
    repo: EntryRepository,
) -> None:
    audio_url = await resolve_audio_url(dictionary, word, pronunciation.accent)
    if not audio_url:
        return

    pronunciation.audio_url = audio_url
    try:
        repo.set_pronunciation_audio(pronunciation.id, audio_url)
    except StorageError as e:
        logger.warning("Failed to persist audio URL", extra={
            "word": word, "accent": pronunciation.accent, "error": str(e),
        })
        return

    logger.info("Audio URL backfilled", extra={"word": word, "accent": pronunciation.accent})
