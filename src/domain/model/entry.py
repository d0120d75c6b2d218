# domain/model/entry.py

"""Dictionary entry domain models.

An Entry owns its pronunciations, definitions (each owning examples) and
word forms. Synonyms are bare strings read separately from the store.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Accent(str, Enum):
    """Canonical accent tags. Stored accents are free-form strings."""
    US = 'US'
    UK = 'UK'


class DifficultyLevel(str, Enum):
    """Difficulty level of a single definition."""
    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'


DEFAULT_LANGUAGE = 'en'


def normalize_word(word: str) -> str:
    """Lowercase and trim a word to its lookup key."""
    return word.strip().lower()


# ── Stored graph ─────────────────────────────────────────


@dataclass
class Example:
    id: str
    definition_id: str
    example_en: str
    example_vi: str
    source: str | None = None


@dataclass
class Definition:
    id: str
    entry_id: str
    pos: str
    definition_en: str
    definition_vi: str
    level: str = DifficultyLevel.INTERMEDIATE.value
    order: int = 1
    examples: list[Example] = field(default_factory=list)


@dataclass
class Pronunciation:
    id: str
    entry_id: str
    accent: str
    ipa: str
    audio_url: str | None = None


@dataclass
class WordForm:
    id: str
    entry_id: str
    form_type: str
    form_word: str


@dataclass
class Entry:
    """Root record for one word, as read from the store."""
    id: str
    word: str
    word_normalized: str
    language: str = DEFAULT_LANGUAGE
    frequency_rank: int | None = None
    part_of_speech: list[str] = field(default_factory=list)
    pronunciations: list[Pronunciation] = field(default_factory=list)
    definitions: list[Definition] = field(default_factory=list)
    word_forms: list[WordForm] = field(default_factory=list)
    created_at: datetime | None = None

    @property
    def sorted_definitions(self) -> list[Definition]:
        """Definitions in presentation order."""
        return sorted(self.definitions, key=lambda d: d.order)

    @property
    def word_forms_map(self) -> dict[str, str]:
        """Fold the word form list into a type → word mapping."""
        return {form.form_type: form.form_word for form in self.word_forms}


# ── Import payload ───────────────────────────────────────


@dataclass(frozen=True)
class ImportedExample:
    en: str
    vi: str
    source: str | None = None


@dataclass(frozen=True)
class ImportedDefinition:
    pos: str
    definition_en: str
    definition_vi: str
    level: str | None = None
    examples: tuple[ImportedExample, ...] = ()


@dataclass(frozen=True)
class ImportedPronunciation:
    accent: str
    ipa: str
    audio_url: str | None = None


@dataclass(frozen=True)
class ImportedEntry:
    """An externally sourced entry to be merged into the store."""
    word: str
    word_normalized: str | None = None
    language: str | None = None
    frequency_rank: int | None = None
    pronunciations: tuple[ImportedPronunciation, ...] = ()
    definitions: tuple[ImportedDefinition, ...] = ()
    synonyms: tuple[str, ...] = ()
    word_forms: dict[str, str] = field(default_factory=dict)

    @property
    def normalized_key(self) -> str:
        return self.word_normalized or normalize_word(self.word)

    @property
    def pos_tags(self) -> list[str]:
        """Distinct definition POS tags in first-seen order."""
        return list(dict.fromkeys(d.pos for d in self.definitions if d.pos))
