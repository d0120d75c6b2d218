"""Import service — folds externally sourced entries into the entry store.

Flow: entry (get or create) → pronunciations → definitions + examples →
word forms → synonyms. Everything except definitions is insert-if-absent,
so re-importing the same payload only appends definitions.
"""

import logging

from domain.model.entry import DEFAULT_LANGUAGE, DifficultyLevel, ImportedEntry
from domain.model.errors import ImportFailedError
from port.entry_repository import EntryRepository

logger = logging.getLogger(__name__)


def import_entry(repo: EntryRepository, entry: ImportedEntry) -> str:
    """Merge ``entry`` into the store and return its word.

    Writes are not transactional: on failure, rows written before the
    failing step stay in place.

    Raises:
        ImportFailedError: Any step failed.
    """
    try:
        entry_id, created = repo.get_or_create_entry(
            word=entry.word,
            word_normalized=entry.normalized_key,
            language=entry.language or DEFAULT_LANGUAGE,
            frequency_rank=entry.frequency_rank,
            part_of_speech=entry.pos_tags,
        )

        added_pronunciations = sum(
            repo.add_pronunciation(entry_id, p.accent, p.ipa, p.audio_url)
            for p in entry.pronunciations
        )

        for order, definition in enumerate(entry.definitions, start=1):
            definition_id = repo.add_definition(
                entry_id,
                pos=definition.pos,
                definition_en=definition.definition_en,
                definition_vi=definition.definition_vi,
                level=definition.level or DifficultyLevel.INTERMEDIATE.value,
                order=order,
            )
            for example in definition.examples:
                repo.add_example(definition_id, example.en, example.vi, example.source)

        added_forms = sum(
            repo.add_word_form(entry_id, form_type, form_word)
            for form_type, form_word in entry.word_forms.items()
        )

        added_synonyms = sum(repo.add_synonym(entry_id, s) for s in entry.synonyms)
    except Exception as e:
        logger.error("Failed to import word", extra={
            "word": entry.word, "operation": "import", "error": str(e),
        }, exc_info=True)
        raise ImportFailedError(entry.word, str(e)) from e

    logger.info("Word imported", extra={
        "word": entry.word,
        "entry_id": entry_id,
        "entry_created": created,
        "pronunciations_added": added_pronunciations,
        "definitions_added": len(entry.definitions),
        "word_forms_added": added_forms,
        "synonyms_added": added_synonyms,
    })
    return entry.word
