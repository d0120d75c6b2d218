"""In-memory implementation of EntryRepository for testing."""

import copy
import uuid
from datetime import datetime, timezone

from domain.model.entry import Definition, Entry, Example, Pronunciation, WordForm


class FakeEntryRepository:
    def __init__(self):
        self.entries: dict[str, Entry] = {}
        self.synonyms: dict[str, list[str]] = {}

    def _new_id(self) -> str:
        return str(uuid.uuid4())

    def _find_pronunciation(self, pronunciation_id: str) -> Pronunciation | None:
        for entry in self.entries.values():
            for p in entry.pronunciations:
                if p.id == pronunciation_id:
                    return p
        return None

    def _find_definition(self, definition_id: str) -> Definition | None:
        for entry in self.entries.values():
            for d in entry.definitions:
                if d.id == definition_id:
                    return d
        return None

    # ── read operations ──────────────────────────────────────

    def find_by_word(self, word: str) -> Entry | None:
        # Snapshot, like a real read: later writes don't leak into it
        for entry in self.entries.values():
            if entry.word == word:
                return copy.deepcopy(entry)
        for entry in sorted(self.entries.values(), key=lambda e: e.created_at):
            if entry.word_normalized == word:
                return copy.deepcopy(entry)
        return None

    def find_synonyms(self, entry_id: str) -> list[str]:
        return list(self.synonyms.get(entry_id, []))

    def search_prefix(self, prefix: str, limit: int = 10) -> list[str]:
        matches = [
            e for e in self.entries.values()
            if e.word_normalized.startswith(prefix) or e.word.startswith(prefix)
        ]
        matches.sort(key=lambda e: (
            e.frequency_rank if e.frequency_rank is not None else float('inf'),
            e.word,
        ))
        return [e.word for e in matches[:limit]]

    # ── write operations ─────────────────────────────────────

    def get_or_create_entry(
        self,
        word: str,
        word_normalized: str,
        language: str,
        frequency_rank: int | None = None,
        part_of_speech: list[str] | None = None,
    ) -> tuple[str, bool]:
        for entry in self.entries.values():
            if entry.word == word:
                return entry.id, False

        entry = Entry(
            id=self._new_id(),
            word=word,
            word_normalized=word_normalized,
            language=language,
            frequency_rank=frequency_rank,
            part_of_speech=list(part_of_speech or []),
            created_at=datetime.now(timezone.utc),
        )
        self.entries[entry.id] = entry
        return entry.id, True

    def add_pronunciation(
        self, entry_id: str, accent: str, ipa: str, audio_url: str | None = None,
    ) -> bool:
        entry = self.entries[entry_id]
        if any(p.accent == accent for p in entry.pronunciations):
            return False
        entry.pronunciations.append(Pronunciation(
            id=self._new_id(), entry_id=entry_id, accent=accent, ipa=ipa, audio_url=audio_url,
        ))
        return True

    def add_definition(
        self,
        entry_id: str,
        pos: str,
        definition_en: str,
        definition_vi: str,
        level: str,
        order: int,
    ) -> str:
        definition = Definition(
            id=self._new_id(),
            entry_id=entry_id,
            pos=pos,
            definition_en=definition_en,
            definition_vi=definition_vi,
            level=level,
            order=order,
        )
        self.entries[entry_id].definitions.append(definition)
        return definition.id

    def add_example(
        self, definition_id: str, example_en: str, example_vi: str, source: str | None = None,
    ) -> str:
        definition = self._find_definition(definition_id)
        if definition is None:
            raise KeyError(definition_id)
        example = Example(
            id=self._new_id(),
            definition_id=definition_id,
            example_en=example_en,
            example_vi=example_vi,
            source=source,
        )
        definition.examples.append(example)
        return example.id

    def add_word_form(self, entry_id: str, form_type: str, form_word: str) -> bool:
        entry = self.entries[entry_id]
        if any(f.form_type == form_type for f in entry.word_forms):
            return False
        entry.word_forms.append(WordForm(
            id=self._new_id(), entry_id=entry_id, form_type=form_type, form_word=form_word,
        ))
        return True

    def add_synonym(self, entry_id: str, synonym: str) -> bool:
        existing = self.synonyms.setdefault(entry_id, [])
        if synonym in existing:
            return False
        existing.append(synonym)
        return True

    def set_pronunciation_audio(self, pronunciation_id: str, audio_url: str) -> bool:
        pronunciation = self._find_pronunciation(pronunciation_id)
        if pronunciation is None or pronunciation.audio_url:
            return False
        pronunciation.audio_url = audio_url
        return True

    def delete_entry(self, entry_id: str) -> bool:
        if entry_id not in self.entries:
            return False
        del self.entries[entry_id]
        self.synonyms.pop(entry_id, None)
        return True
