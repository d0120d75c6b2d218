"""Unit tests for admin import/delete routes."""

import unittest
from unittest.mock import MagicMock
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from fastapi.testclient import TestClient
from api.main import app
from api.dependencies import get_entry_repo, get_dictionary_port, get_llm_port
from adapter.fake.dictionary import FakeDictionaryAdapter
from adapter.fake.entry_repository import FakeEntryRepository
from adapter.fake.llm import FakeLLMAdapter
from domain.model.errors import StorageError

HELLO_PAYLOAD = {
    "word": "hello",
    "frequency_rank": 5,
    "pronunciations": [
        {"accent": "US", "ipa": "/həˈloʊ/"},
        {"accent": "UK", "ipa": "/həˈləʊ/"},
    ],
    "definitions": [{
        "pos": "exclamation",
        "definition_en": "used as a greeting",
        "definition_vi": "dùng để chào",
        "examples": [{"en": "Hello, John!", "vi": "Chào John!"}],
    }],
    "word_forms": {"plural": "hellos"},
    "synonyms": ["hi", "greetings"],
}


class TestImportRoute(unittest.TestCase):
    """POST /dictionary/admin/import"""

    def setUp(self):
        self.client = TestClient(app)
        self.repo = FakeEntryRepository()
        app.dependency_overrides[get_entry_repo] = lambda: self.repo

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_import(self):
        response = self.client.post("/dictionary/admin/import", json=HELLO_PAYLOAD)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "word": "hello"})
        entry = self.repo.find_by_word("hello")
        self.assertEqual(entry.frequency_rank, 5)
        self.assertEqual(entry.definitions[0].level, "intermediate")
        self.assertEqual(self.repo.find_synonyms(entry.id), ["hi", "greetings"])

    def test_import_twice_keeps_one_pronunciation_per_accent(self):
        self.client.post("/dictionary/admin/import", json=HELLO_PAYLOAD)
        response = self.client.post("/dictionary/admin/import", json=HELLO_PAYLOAD)

        self.assertEqual(response.status_code, 200)
        entry = self.repo.find_by_word("hello")
        self.assertEqual(len(entry.pronunciations), 2)
        self.assertEqual(len(entry.word_forms), 1)
        self.assertEqual(len(entry.definitions), 2)

    def test_imported_word_served_by_lookup(self):
        self.client.post("/dictionary/admin/import", json=HELLO_PAYLOAD)

        llm = FakeLLMAdapter()
        app.dependency_overrides[get_dictionary_port] = lambda: FakeDictionaryAdapter(None)
        app.dependency_overrides[get_llm_port] = lambda: llm

        data = self.client.get("/dictionary/word/hello").json()

        self.assertEqual(data["word_forms"], {"plural": "hellos"})
        self.assertEqual(data["synonyms"], ["hi", "greetings"])
        self.assertEqual(llm.calls, [])

    def test_validation(self):
        cases = [
            {"word": "   "},
            {"word": ""},
            {"word": "x", "frequency_rank": 0},
            {"word": "x", "definitions": [{"pos": "noun", "definition_en": "a", "definition_vi": "b", "level": "expert"}]},
            {"word": "x", "pronunciations": [{"accent": "US"}]},
        ]
        for payload in cases:
            with self.subTest(payload=payload):
                response = self.client.post("/dictionary/admin/import", json=payload)
                self.assertEqual(response.status_code, 422)
        self.assertEqual(self.repo.entries, {})

    def test_storage_failure_returns_500(self):
        self.repo.add_pronunciation = MagicMock(side_effect=StorageError("write failed"))

        response = self.client.post("/dictionary/admin/import", json=HELLO_PAYLOAD)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["detail"], "Failed to import word 'hello': write failed")


class TestDeleteRoute(unittest.TestCase):
    """DELETE /dictionary/admin/words/{word}"""

    def setUp(self):
        self.client = TestClient(app)
        self.repo = FakeEntryRepository()
        app.dependency_overrides[get_entry_repo] = lambda: self.repo

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_delete(self):
        self.client.post("/dictionary/admin/import", json=HELLO_PAYLOAD)

        response = self.client.delete("/dictionary/admin/words/Hello")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "word": "hello"})
        self.assertIsNone(self.repo.find_by_word("hello"))
        self.assertEqual(self.repo.synonyms, {})

    def test_delete_unknown_word(self):
        response = self.client.delete("/dictionary/admin/words/nothing")
        self.assertEqual(response.status_code, 404)

    def test_storage_failure_returns_503(self):
        self.repo.find_by_word = MagicMock(side_effect=StorageError("down"))
        response = self.client.delete("/dictionary/admin/words/hello")
        self.assertEqual(response.status_code, 503)


if __name__ == '__main__':
    unittest.main()
