"""Pydantic schema for model-generated dictionary entries."""

from typing import Optional

from pydantic import BaseModel, Field


class GeneratedExample(BaseModel):
    """An example sentence pair"""
    en: str = Field(description="English example sentence")
    vi: str = Field(description="Vietnamese translation of the example")


class GeneratedPronunciation(BaseModel):
    """A pronunciation for one accent"""
    accent: str = Field(description="Accent tag, US or UK")
    ipa: str = Field(description="IPA transcription")


class GeneratedDefinition(BaseModel):
    """A single sense of the word"""
    pos: str = Field(description="Part of speech")
    definition_en: str = Field(description="English definition")
    definition_vi: str = Field(description="Vietnamese definition")
    level: str = Field(description="beginner, intermediate or advanced", default="intermediate")
    examples: list[GeneratedExample] = Field(description="Usage examples", default=[])


class GeneratedEntry(BaseModel):
    """A complete dictionary entry as produced by the model"""
    word: str = Field(description="Headword")
    pronunciations: list[GeneratedPronunciation] = Field(description="Pronunciations by accent")
    definitions: list[GeneratedDefinition] = Field(description="Definitions", min_length=1)
    word_forms: Optional[dict[str, str]] = Field(description="Inflected forms by form type", default=None)
    synonyms: Optional[list[str]] = Field(description="Synonyms", default=None)
