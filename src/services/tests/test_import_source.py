"""Tests for import_source — Free Dictionary data → import payloads."""

import unittest

from adapter.fake.dictionary import FakeDictionaryAdapter
from adapter.fake.llm import FakeLLMAdapter
from domain.model.entry import ImportedEntry
from port.llm import LLMError
from services.import_source import (
    accent_from_audio,
    build_imported_entry,
    entry_from_payload,
    entry_to_payload,
    fetch_imported_entry,
)

API_ENTRY = {
    "word": "run",
    "phonetics": [
        {"text": "/ɹʌn/", "audio": "https://x/run-us.mp3"},
        {"text": "/rʌn/", "audio": "https://x/run-uk.mp3"},
        {"audio": "https://x/run-au.mp3"},
    ],
    "meanings": [
        {
            "partOfSpeech": "verb",
            "definitions": [
                {"definition": "To move swiftly.", "example": "I run daily.",
                 "synonyms": ["sprint", "dash", "race", "hurry", "rush", "bolt"]},
                {"definition": "To flee."},
                {"definition": "Ignored third definition."},
            ],
        },
        {"partOfSpeech": "noun", "definitions": [{"definition": "An act of running."}]},
        {"partOfSpeech": "adjective", "definitions": [{"definition": "Liquid."}]},
        {"partOfSpeech": "adverb", "definitions": [{"definition": "Ignored fourth meaning."}]},
    ],
}


class TestAccentFromAudio(unittest.TestCase):

    def test_markers(self):
        self.assertEqual(accent_from_audio("https://x/a-us.mp3"), "US")
        self.assertEqual(accent_from_audio("https://x/a-uk.mp3"), "UK")

    def test_default_us(self):
        self.assertEqual(accent_from_audio("https://x/a-au.mp3"), "US")
        self.assertEqual(accent_from_audio(None), "US")


class TestBuildImportedEntry(unittest.IsolatedAsyncioTestCase):

    async def test_builds_payload(self):
        llm = FakeLLMAdapter(response="bản dịch")

        entry = await build_imported_entry(API_ENTRY, rank=7, llm=llm, delay=0)

        self.assertEqual(entry.word, "run")
        self.assertEqual(entry.frequency_rank, 7)
        self.assertEqual([(p.accent, p.ipa) for p in entry.pronunciations], [("US", "/ɹʌn/"), ("UK", "/rʌn/")])
        self.assertEqual([d.pos for d in entry.definitions], ["verb", "verb", "noun", "adjective"])
        self.assertTrue(all(d.level == "intermediate" for d in entry.definitions))
        self.assertEqual(entry.definitions[0].definition_vi, "bản dịch")
        self.assertEqual(entry.definitions[0].examples[0].en, "I run daily.")
        self.assertEqual(entry.definitions[1].examples, ())
        self.assertEqual(entry.synonyms, ("sprint", "dash", "race", "hurry", "rush"))
        # 4 definitions + 1 example
        self.assertEqual(len(llm.calls), 5)

    async def test_failed_translation_keeps_english(self):
        llm = FakeLLMAdapter(error=LLMError("down"))

        entry = await build_imported_entry(API_ENTRY, rank=1, llm=llm, delay=0)

        self.assertEqual(entry.definitions[0].definition_vi, "To move swiftly.")
        self.assertEqual(entry.definitions[0].examples[0].vi, "I run daily.")

    async def test_fetch_imported_entry_without_data(self):
        result = await fetch_imported_entry(FakeDictionaryAdapter(None), FakeLLMAdapter(), "zzz", 1)
        self.assertIsNone(result)

    async def test_fetch_imported_entry_keeps_requested_word(self):
        dictionary = FakeDictionaryAdapter([API_ENTRY])
        entry = await fetch_imported_entry(dictionary, FakeLLMAdapter(response="x"), "Run", 3, delay=0)
        self.assertEqual(entry.word, "Run")
        self.assertEqual(entry.word_normalized, "run")
        self.assertEqual(dictionary.fetched, ["Run"])


class TestPayloadConversion(unittest.TestCase):

    def test_from_payload_defaults(self):
        entry = entry_from_payload({
            "word": "hello",
            "definitions": [{"pos": "noun", "definition_en": "a", "definition_vi": "b"}],
        })
        self.assertIsInstance(entry, ImportedEntry)
        self.assertIsNone(entry.language)
        self.assertIsNone(entry.definitions[0].level)
        self.assertEqual(entry.definitions[0].examples, ())
        self.assertEqual(entry.word_forms, {})

    def test_payload_shape(self):
        entry = entry_from_payload({
            "word": "Hello",
            "pronunciations": [{"accent": "UK", "ipa": "/h/"}],
            "definitions": [{
                "pos": "noun", "definition_en": "a", "definition_vi": "b",
                "examples": [{"en": "Hi", "vi": "Chào"}],
            }],
            "word_forms": {"plural": "hellos"},
            "synonyms": ["hi"],
        })

        payload = entry_to_payload(entry)

        self.assertEqual(payload["word_normalized"], "hello")
        self.assertEqual(payload["language"], "en")
        self.assertEqual(payload["pronunciations"], [{"accent": "UK", "ipa": "/h/", "audio_url": None}])
        self.assertEqual(payload["definitions"][0]["level"], "intermediate")
        self.assertEqual(payload["definitions"][0]["examples"], [{"en": "Hi", "vi": "Chào"}])
        self.assertEqual(payload["word_forms"], {"plural": "hellos"})
        self.assertEqual(payload["synonyms"], ["hi"])


if __name__ == '__main__':
    unittest.main()
