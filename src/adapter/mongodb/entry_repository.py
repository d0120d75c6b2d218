"""MongoDB implementation of EntryRepository.

Each record type lives in its own collection. Children point at their
parent through ``word_id`` / ``definition_id``. Natural-key uniqueness is
enforced by unique indexes plus ``$setOnInsert`` upserts, so concurrent
imports cannot duplicate rows.
"""

import re
import uuid
from datetime import datetime, timezone
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import (
    DEFINITIONS_COLLECTION_NAME,
    EXAMPLES_COLLECTION_NAME,
    PRONUNCIATIONS_COLLECTION_NAME,
    SYNONYMS_COLLECTION_NAME,
    WORD_FORMS_COLLECTION_NAME,
    WORDS_COLLECTION_NAME,
)
from domain.model.entry import Definition, Entry, Example, Pronunciation, WordForm
from domain.model.errors import StorageError

logger = getLogger(__name__)

# Sort key for entries without a frequency rank (they go last)
_UNRANKED = 2 ** 31 - 1


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MongoEntryRepository:
    def __init__(self, db: Database):
        self.words = db[WORDS_COLLECTION_NAME]
        self.pronunciations = db[PRONUNCIATIONS_COLLECTION_NAME]
        self.definitions = db[DEFINITIONS_COLLECTION_NAME]
        self.examples = db[EXAMPLES_COLLECTION_NAME]
        self.word_forms = db[WORD_FORMS_COLLECTION_NAME]
        self.synonyms = db[SYNONYMS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for all dictionary collections.

        Each index is attempted even when an earlier one fails; returns
        False if any of them could not be created.
        """
        from adapter.mongodb.indexes import create_index_safe

        specs = [
            (self.words, [('word', 1)], 'idx_words_word', {'unique': True}),
            (self.words, [('word_normalized', 1)], 'idx_words_normalized', {}),
            (self.words, [('frequency_rank', 1)], 'idx_words_frequency', {'sparse': True}),
            (self.pronunciations, [('word_id', 1), ('accent', 1)], 'idx_pronunciations_word_accent', {'unique': True}),
            (self.definitions, [('word_id', 1), ('order', 1)], 'idx_definitions_word', {}),
            (self.examples, [('definition_id', 1)], 'idx_examples_definition', {}),
            (self.word_forms, [('word_id', 1), ('form_type', 1)], 'idx_word_forms_word_type', {'unique': True}),
            (self.synonyms, [('word_id', 1), ('synonym_word', 1)], 'idx_synonyms_word_synonym', {'unique': True}),
        ]

        success = True
        for collection, keys, name, options in specs:
            try:
                success = create_index_safe(collection, keys, name, **options) and success
            except Exception as e:
                logger.error("Failed to create dictionary index", extra={"index": name, "error": str(e)})
                success = False
        return success

    # ── mapping ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Entry:
        """Convert an aggregated word document (with joined children) to an Entry."""
        entry_id = doc['_id']
        return Entry(
            id=entry_id,
            word=doc['word'],
            word_normalized=doc['word_normalized'],
            language=doc.get('language', 'en'),
            frequency_rank=doc.get('frequency_rank'),
            part_of_speech=doc.get('part_of_speech') or [],
            created_at=doc.get('created_at'),
            pronunciations=[
                Pronunciation(
                    id=p['_id'],
                    entry_id=entry_id,
                    accent=p['accent'],
                    ipa=p['ipa'],
                    audio_url=p.get('audio_url'),
                )
                for p in doc.get('pronunciations', [])
            ],
            definitions=[
                Definition(
                    id=d['_id'],
                    entry_id=entry_id,
                    pos=d['part_of_speech'],
                    definition_en=d['definition_en'],
                    definition_vi=d['definition_vi'],
                    level=d.get('level', 'intermediate'),
                    order=d.get('order', 1),
                    examples=[
                        Example(
                            id=ex['_id'],
                            definition_id=d['_id'],
                            example_en=ex['example_en'],
                            example_vi=ex['example_vi'],
                            source=ex.get('source'),
                        )
                        for ex in d.get('examples', [])
                    ],
                )
                for d in doc.get('definitions', [])
            ],
            word_forms=[
                WordForm(
                    id=f['_id'],
                    entry_id=entry_id,
                    form_type=f['form_type'],
                    form_word=f['form_word'],
                )
                for f in doc.get('word_forms', [])
            ],
        )

    def _insert_if_absent(self, collection, key: dict, doc: dict) -> bool:
        """Atomically insert ``key | doc`` unless a row matching key exists.

        A DuplicateKeyError means a concurrent writer won the race, which
        counts as "already present".
        """
        fields = {k: v for k, v in doc.items() if k not in key}
        try:
            result = collection.update_one(key, {'$setOnInsert': fields}, upsert=True)
            return result.upserted_id is not None
        except DuplicateKeyError:
            return False

    # ── reads ────────────────────────────────────────────────

    def find_by_word(self, word: str) -> Entry | None:
        """Find an entry by literal word or normalized key, joined in one aggregation."""
        children_by_word = lambda collection, sort: {  # noqa: E731
            '$lookup': {
                'from': collection,
                'let': {'word_id': '$_id'},
                'pipeline': [
                    {'$match': {'$expr': {'$eq': ['$word_id', '$$word_id']}}},
                    {'$sort': sort},
                ],
                'as': collection,
            }
        }
        pipeline = [
            {'$match': {'$or': [{'word': word}, {'word_normalized': word}]}},
            {'$addFields': {'_exact': {'$eq': ['$word', word]}}},
            {'$sort': {'_exact': -1, 'created_at': 1}},
            {'$limit': 1},
            children_by_word(PRONUNCIATIONS_COLLECTION_NAME, {'created_at': 1}),
            children_by_word(WORD_FORMS_COLLECTION_NAME, {'created_at': 1}),
            {
                '$lookup': {
                    'from': DEFINITIONS_COLLECTION_NAME,
                    'let': {'word_id': '$_id'},
                    'pipeline': [
                        {'$match': {'$expr': {'$eq': ['$word_id', '$$word_id']}}},
                        {'$sort': {'created_at': 1}},
                        {
                            '$lookup': {
                                'from': EXAMPLES_COLLECTION_NAME,
                                'localField': '_id',
                                'foreignField': 'definition_id',
                                'as': 'examples',
                            }
                        },
                    ],
                    'as': DEFINITIONS_COLLECTION_NAME,
                }
            },
        ]
        try:
            docs = list(self.words.aggregate(pipeline))
        except PyMongoError as e:
            logger.error("Failed to find word", extra={"word": word, "error": str(e)})
            raise StorageError(f"Failed to find word: {e}") from e
        return self._to_domain(docs[0]) if docs else None

    def find_synonyms(self, entry_id: str) -> list[str]:
        try:
            cursor = self.synonyms.find({'word_id': entry_id}).sort('created_at', 1)
            return [doc['synonym_word'] for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to find synonyms", extra={"entry_id": entry_id, "error": str(e)})
            raise StorageError(f"Failed to find synonyms: {e}") from e

    def search_prefix(self, prefix: str, limit: int = 10) -> list[str]:
        pattern = {'$regex': f'^{re.escape(prefix)}'}
        pipeline = [
            {'$match': {'$or': [{'word_normalized': pattern}, {'word': pattern}]}},
            {'$addFields': {'_rank': {'$ifNull': ['$frequency_rank', _UNRANKED]}}},
            {'$sort': {'_rank': 1, 'word': 1}},
            {'$limit': limit},
            {'$project': {'_id': 0, 'word': 1}},
        ]
        try:
            return [doc['word'] for doc in self.words.aggregate(pipeline)]
        except PyMongoError as e:
            logger.error("Failed to search words", extra={"prefix": prefix, "error": str(e)})
            raise StorageError(f"Failed to search words: {e}") from e

    # ── writes ───────────────────────────────────────────────

    def get_or_create_entry(
        self,
        word: str,
        word_normalized: str,
        language: str,
        frequency_rank: int | None = None,
        part_of_speech: list[str] | None = None,
    ) -> tuple[str, bool]:
        doc = {
            '_id': _new_id(),
            'word': word,
            'word_normalized': word_normalized,
            'language': language,
            'frequency_rank': frequency_rank,
            'part_of_speech': part_of_speech or [],
            'created_at': _now(),
        }
        try:
            if self._insert_if_absent(self.words, {'word': word}, doc):
                logger.info("Word created", extra={"word": word, "entry_id": doc['_id']})
                return doc['_id'], True

            existing = self.words.find_one({'word': word}, {'_id': 1})
        except PyMongoError as e:
            logger.error("Failed to create word", extra={"word": word, "error": str(e)})
            raise StorageError(f"Failed to create word: {e}") from e

        if existing is None:
            raise StorageError(f"Word '{word}' vanished during upsert")
        return existing['_id'], False

    def add_pronunciation(
        self, entry_id: str, accent: str, ipa: str, audio_url: str | None = None,
    ) -> bool:
        try:
            return self._insert_if_absent(
                self.pronunciations,
                {'word_id': entry_id, 'accent': accent},
                {'_id': _new_id(), 'ipa': ipa, 'audio_url': audio_url, 'created_at': _now()},
            )
        except PyMongoError as e:
            logger.error("Failed to add pronunciation", extra={
                "entry_id": entry_id, "accent": accent, "error": str(e),
            })
            raise StorageError(f"Failed to add pronunciation: {e}") from e

    def add_definition(
        self,
        entry_id: str,
        pos: str,
        definition_en: str,
        definition_vi: str,
        level: str,
        order: int,
    ) -> str:
        doc = {
            '_id': _new_id(),
            'word_id': entry_id,
            'part_of_speech': pos,
            'definition_en': definition_en,
            'definition_vi': definition_vi,
            'level': level,
            'order': order,
            'created_at': _now(),
        }
        try:
            self.definitions.insert_one(doc)
            return doc['_id']
        except PyMongoError as e:
            logger.error("Failed to add definition", extra={"entry_id": entry_id, "error": str(e)})
            raise StorageError(f"Failed to add definition: {e}") from e

    def add_example(
        self, definition_id: str, example_en: str, example_vi: str, source: str | None = None,
    ) -> str:
        doc = {
            '_id': _new_id(),
            'definition_id': definition_id,
            'example_en': example_en,
            'example_vi': example_vi,
            'source': source,
            'created_at': _now(),
        }
        try:
            self.examples.insert_one(doc)
            return doc['_id']
        except PyMongoError as e:
            logger.error("Failed to add example", extra={"definition_id": definition_id, "error": str(e)})
            raise StorageError(f"Failed to add example: {e}") from e

    def add_word_form(self, entry_id: str, form_type: str, form_word: str) -> bool:
        try:
            return self._insert_if_absent(
                self.word_forms,
                {'word_id': entry_id, 'form_type': form_type},
                {'_id': _new_id(), 'form_word': form_word, 'created_at': _now()},
            )
        except PyMongoError as e:
            logger.error("Failed to add word form", extra={
                "entry_id": entry_id, "form_type": form_type, "error": str(e),
            })
            raise StorageError(f"Failed to add word form: {e}") from e

    def add_synonym(self, entry_id: str, synonym: str) -> bool:
        try:
            return self._insert_if_absent(
                self.synonyms,
                {'word_id': entry_id, 'synonym_word': synonym},
                {'_id': _new_id(), 'created_at': _now()},
            )
        except PyMongoError as e:
            logger.error("Failed to add synonym", extra={
                "entry_id": entry_id, "synonym": synonym, "error": str(e),
            })
            raise StorageError(f"Failed to add synonym: {e}") from e

    def set_pronunciation_audio(self, pronunciation_id: str, audio_url: str) -> bool:
        try:
            result = self.pronunciations.update_one(
                {'_id': pronunciation_id, 'audio_url': {'$in': [None, '']}},
                {'$set': {'audio_url': audio_url, 'updated_at': _now()}},
            )
            return result.modified_count > 0
        except PyMongoError as e:
            logger.error("Failed to set pronunciation audio", extra={
                "pronunciation_id": pronunciation_id, "error": str(e),
            })
            raise StorageError(f"Failed to set pronunciation audio: {e}") from e

    def delete_entry(self, entry_id: str) -> bool:
        try:
            if self.words.find_one({'_id': entry_id}, {'_id': 1}) is None:
                return False

            definition_ids = [
                d['_id'] for d in self.definitions.find({'word_id': entry_id}, {'_id': 1})
            ]
            if definition_ids:
                self.examples.delete_many({'definition_id': {'$in': definition_ids}})
            self.definitions.delete_many({'word_id': entry_id})
            self.pronunciations.delete_many({'word_id': entry_id})
            self.word_forms.delete_many({'word_id': entry_id})
            self.synonyms.delete_many({'word_id': entry_id})
            result = self.words.delete_one({'_id': entry_id})

            logger.info("Word deleted", extra={"entry_id": entry_id})
            return result.deleted_count > 0
        except PyMongoError as e:
            logger.error("Failed to delete word", extra={"entry_id": entry_id, "error": str(e)})
            raise StorageError(f"Failed to delete word: {e}") from e
