"""Pydantic models for API request/response validation."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


# ── Lookup ───────────────────────────────────────────────


class ExampleResponse(BaseModel):
    en: str = Field(..., description="English example sentence")
    vi: str = Field(..., description="Vietnamese example sentence")


class PronunciationResponse(BaseModel):
    accent: str = Field(..., description="Accent tag (US, UK, ...)")
    ipa: str = Field(..., description="IPA transcription")
    audio_url: Optional[str] = Field(None, description="Audio file URL if known")


class DefinitionResponse(BaseModel):
    pos: str = Field(..., description="Part of speech")
    definition_en: str = Field(..., description="English definition")
    definition_vi: str = Field(..., description="Vietnamese definition")
    level: str = Field("intermediate", description="beginner, intermediate or advanced")
    examples: list[ExampleResponse] = Field(default_factory=list)


class LookupResponse(BaseModel):
    """Dictionary entry returned by word lookup (stored or generated)."""
    word: str = Field(..., description="Headword")
    pronunciations: list[PronunciationResponse] = Field(default_factory=list)
    definitions: list[DefinitionResponse] = Field(default_factory=list)
    word_forms: Optional[dict[str, str]] = Field(None, description="Inflected forms by form type")
    synonyms: Optional[list[str]] = Field(None, description="Synonyms")
    frequency_rank: Optional[int] = Field(None, description="Frequency rank, lower is more common")


class SearchSuggestionsResponse(BaseModel):
    suggestions: list[str] = Field(..., description="Words starting with the query")


class AudioResponse(BaseModel):
    audio_url: Optional[str] = Field(None, description="Audio file URL, null when unavailable")


# ── Translation ──────────────────────────────────────────


class TranslateRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=5000, description="Text to translate")
    source_lang: str = Field("en", min_length=2, max_length=10, description="Source language code")
    target_lang: str = Field("vi", min_length=2, max_length=10, description="Target language code")


class TranslateResponse(BaseModel):
    original_text: str
    translated_text: str
    source_lang: str
    target_lang: str


# ── Import ───────────────────────────────────────────────


class ImportExample(BaseModel):
    en: str = Field(..., min_length=1)
    vi: str = Field(..., min_length=1)
    source: Optional[str] = None


class ImportPronunciation(BaseModel):
    accent: str = Field(..., min_length=1, description="Accent tag, US and UK are canonical")
    ipa: str = Field(..., min_length=1, description="IPA transcription")
    audio_url: Optional[str] = None


class ImportDefinition(BaseModel):
    pos: str = Field(..., min_length=1, description="Part of speech")
    definition_en: str = Field(..., min_length=1)
    definition_vi: str = Field(..., min_length=1)
    level: Optional[Literal["beginner", "intermediate", "advanced"]] = None
    examples: list[ImportExample] = Field(default_factory=list)


class ImportRequest(BaseModel):
    """Externally sourced entry to merge into the store."""
    word: str = Field(..., min_length=1, max_length=100, description="Headword, case preserved")
    word_normalized: Optional[str] = Field(None, max_length=100, description="Lookup key, defaults to lowercased word")
    language: Optional[str] = Field(None, max_length=10, description="Language code, defaults to en")
    frequency_rank: Optional[int] = Field(None, ge=1, description="Frequency rank, lower is more common")
    pronunciations: list[ImportPronunciation] = Field(default_factory=list)
    definitions: list[ImportDefinition] = Field(default_factory=list)
    word_forms: dict[str, str] = Field(default_factory=dict)
    synonyms: list[str] = Field(default_factory=list)

    @field_validator('word')
    @classmethod
    def word_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("word must not be blank")
        return v


class ImportResponse(BaseModel):
    success: bool
    word: str


class DeleteResponse(BaseModel):
    success: bool
    word: str
