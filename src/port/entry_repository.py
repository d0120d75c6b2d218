"""Port for dictionary entry data access."""

from typing import Protocol

from domain.model.entry import Entry


class EntryRepository(Protocol):
    """Protocol for the entry store.

    Read methods return None / empty on a miss and raise StorageError on
    infrastructure failures. Conditional inserts are atomic per natural key.
    """

    def find_by_word(self, word: str) -> Entry | None:
        """Find an entry by its literal word or normalized key.

        Returns the full graph (pronunciations, definitions with examples,
        word forms). A literal match wins over a normalized-key match.
        """
        ...

    def find_synonyms(self, entry_id: str) -> list[str]:
        """Get the synonym strings stored for an entry."""
        ...

    def search_prefix(self, prefix: str, limit: int = 10) -> list[str]:
        """Words starting with prefix, most frequent first, unranked last."""
        ...

    def get_or_create_entry(
        self,
        word: str,
        word_normalized: str,
        language: str,
        frequency_rank: int | None = None,
        part_of_speech: list[str] | None = None,
    ) -> tuple[str, bool]:
        """Insert the entry if its literal word is absent.

        Returns (entry_id, created). An existing entry is never modified.
        """
        ...

    def add_pronunciation(
        self, entry_id: str, accent: str, ipa: str, audio_url: str | None = None,
    ) -> bool:
        """Insert unless (entry_id, accent) exists. True if inserted."""
        ...

    def add_definition(
        self,
        entry_id: str,
        pos: str,
        definition_en: str,
        definition_vi: str,
        level: str,
        order: int,
    ) -> str:
        """Append a definition. Returns its ID."""
        ...

    def add_example(
        self, definition_id: str, example_en: str, example_vi: str, source: str | None = None,
    ) -> str:
        """Append an example to a definition. Returns its ID."""
        ...

    def add_word_form(self, entry_id: str, form_type: str, form_word: str) -> bool:
        """Insert unless (entry_id, form_type) exists. True if inserted."""
        ...

    def add_synonym(self, entry_id: str, synonym: str) -> bool:
        """Insert unless (entry_id, synonym) exists. True if inserted."""
        ...

    def set_pronunciation_audio(self, pronunciation_id: str, audio_url: str) -> bool:
        """Set the audio URL if the row still has none. True if updated."""
        ...

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry and all of its children. False if not found."""
        ...
