"""Unit tests for FakeEntryRepository — verifies Port contract compliance."""

import unittest

from adapter.fake.entry_repository import FakeEntryRepository
from domain.model.entry import Entry


class TestFakeEntryRepository(unittest.TestCase):
    """Tests that FakeEntryRepository correctly implements EntryRepository Protocol."""

    def setUp(self):
        self.repo = FakeEntryRepository()

    def _create(self, word: str, rank: int | None = None) -> str:
        entry_id, _ = self.repo.get_or_create_entry(word, word.lower(), 'en', frequency_rank=rank)
        return entry_id

    # ── get_or_create_entry + find_by_word ────────────────────

    def test_create_and_find(self):
        entry_id, created = self.repo.get_or_create_entry('hello', 'hello', 'en', 5, ['noun'])

        self.assertTrue(created)
        entry = self.repo.find_by_word('hello')
        self.assertIsInstance(entry, Entry)
        self.assertEqual(entry.id, entry_id)
        self.assertEqual(entry.frequency_rank, 5)
        self.assertEqual(entry.part_of_speech, ['noun'])

    def test_get_existing_does_not_overwrite(self):
        first_id, _ = self.repo.get_or_create_entry('hello', 'hello', 'en', 5)
        second_id, created = self.repo.get_or_create_entry('hello', 'hello', 'en', 99)

        self.assertFalse(created)
        self.assertEqual(first_id, second_id)
        self.assertEqual(self.repo.find_by_word('hello').frequency_rank, 5)

    def test_find_by_normalized_key(self):
        self._create('Paris')
        self.assertEqual(self.repo.find_by_word('paris').word, 'Paris')

    def test_literal_match_wins_over_normalized(self):
        self._create('Polish')
        self._create('polish')
        self.assertEqual(self.repo.find_by_word('polish').word, 'polish')
        self.assertEqual(self.repo.find_by_word('Polish').word, 'Polish')

    def test_find_missing_returns_none(self):
        self.assertIsNone(self.repo.find_by_word('nothing'))

    # ── conditional inserts ───────────────────────────────────

    def test_add_pronunciation_once_per_accent(self):
        entry_id = self._create('hello')
        self.assertTrue(self.repo.add_pronunciation(entry_id, 'US', '/həˈloʊ/'))
        self.assertFalse(self.repo.add_pronunciation(entry_id, 'US', '/other/'))
        self.assertTrue(self.repo.add_pronunciation(entry_id, 'UK', '/həˈləʊ/'))

        entry = self.repo.find_by_word('hello')
        self.assertEqual([p.ipa for p in entry.pronunciations], ['/həˈloʊ/', '/həˈləʊ/'])

    def test_add_word_form_once_per_type(self):
        entry_id = self._create('run')
        self.assertTrue(self.repo.add_word_form(entry_id, 'past', 'ran'))
        self.assertFalse(self.repo.add_word_form(entry_id, 'past', 'runned'))
        self.assertEqual(self.repo.find_by_word('run').word_forms_map, {'past': 'ran'})

    def test_add_synonym_once(self):
        entry_id = self._create('happy')
        self.assertTrue(self.repo.add_synonym(entry_id, 'glad'))
        self.assertFalse(self.repo.add_synonym(entry_id, 'glad'))
        self.assertEqual(self.repo.find_synonyms(entry_id), ['glad'])

    def test_definitions_and_examples_append(self):
        entry_id = self._create('run')
        def_id = self.repo.add_definition(entry_id, 'verb', 'move fast', 'chạy', 'beginner', 1)
        self.repo.add_example(def_id, 'I run.', 'Tôi chạy.')
        self.repo.add_definition(entry_id, 'verb', 'move fast', 'chạy', 'beginner', 1)

        entry = self.repo.find_by_word('run')
        self.assertEqual(len(entry.definitions), 2)
        self.assertEqual(entry.definitions[0].examples[0].example_vi, 'Tôi chạy.')

    # ── set_pronunciation_audio ───────────────────────────────

    def test_set_audio_only_when_empty(self):
        entry_id = self._create('hello')
        self.repo.add_pronunciation(entry_id, 'US', '/h/')
        pron_id = self.repo.find_by_word('hello').pronunciations[0].id

        self.assertTrue(self.repo.set_pronunciation_audio(pron_id, 'url-1'))
        self.assertFalse(self.repo.set_pronunciation_audio(pron_id, 'url-2'))
        self.assertEqual(self.repo.find_by_word('hello').pronunciations[0].audio_url, 'url-1')

    def test_find_returns_snapshot(self):
        entry_id = self._create('hello')
        snapshot = self.repo.find_by_word('hello')
        self.repo.add_pronunciation(entry_id, 'US', '/h/')
        self.assertEqual(snapshot.pronunciations, [])

    # ── search_prefix ─────────────────────────────────────────

    def test_search_prefix_orders_by_rank_unranked_last(self):
        self._create('help', rank=20)
        self._create('hello', rank=3)
        self._create('helium')
        self._create('world', rank=1)

        self.assertEqual(self.repo.search_prefix('hel'), ['hello', 'help', 'helium'])
        self.assertEqual(self.repo.search_prefix('hel', limit=1), ['hello'])

    # ── delete_entry ──────────────────────────────────────────

    def test_delete_entry_cascades(self):
        entry_id = self._create('hello')
        self.repo.add_synonym(entry_id, 'hi')

        self.assertTrue(self.repo.delete_entry(entry_id))
        self.assertIsNone(self.repo.find_by_word('hello'))
        self.assertEqual(self.repo.find_synonyms(entry_id), [])

    def test_delete_missing_returns_false(self):
        self.assertFalse(self.repo.delete_entry('nonexistent'))


if __name__ == '__main__':
    unittest.main()
