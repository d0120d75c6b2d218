"""Audio service — resolves pronunciation audio URLs by accent.

URLs come from the dictionary port's phonetics and are bucketed into US and
UK by their file naming (``-us.mp3``, ``/uk/`` ...).
"""

import logging
from dataclasses import dataclass
from typing import Any

from domain.model.entry import Accent, normalize_word
from port.dictionary import DictionaryPort
from port.entry_repository import EntryRepository

logger = logging.getLogger(__name__)


@dataclass
class AudioUrls:
    us: str | None = None
    uk: str | None = None

    def preferred(self, accent: str) -> str | None:
        """Preferred bucket for the accent, then the other one."""
        if accent.upper() == Accent.UK.value:
            return self.uk or self.us
        return self.us or self.uk


def classify_audio_urls(entries: list[dict[str, Any]]) -> AudioUrls:
    """Sort every phonetics audio URL into the US or UK bucket.

    A later match overwrites an earlier one. A URL with no accent marker
    goes to US only while both buckets are still empty.
    """
    urls = AudioUrls()
    for entry in entries:
        for phonetic in entry.get("phonetics") or []:
            audio = phonetic.get("audio")
            if not audio:
                continue
            if "-us.mp3" in audio or "/us/" in audio:
                urls.us = audio
            elif "-uk.mp3" in audio or "/uk/" in audio:
                urls.uk = audio
            elif not urls.us and not urls.uk:
                urls.us = audio
    return urls


async def fetch_audio_urls(dictionary: DictionaryPort, word: str) -> AudioUrls:
    """Fetch and classify audio URLs. Empty buckets when nothing is found."""
    entries = await dictionary.fetch(word)
    if not entries:
        return AudioUrls()
    return classify_audio_urls(entries)


async def resolve_audio_url(dictionary: DictionaryPort, word: str, accent: str) -> str | None:
    """Best audio URL for ``word`` in ``accent``, or None.

    Never raises; failures are logged and reported as no audio.
    """
    try:
        urls = await fetch_audio_urls(dictionary, word)
    except Exception as e:
        logger.warning("Audio lookup failed", extra={
            "word": word, "accent": accent, "error": str(e),
        })
        return None
    return urls.preferred(accent)


async def get_word_audio(
    repo: EntryRepository,
    dictionary: DictionaryPort,
    word: str,
    accent: str = Accent.US.value,
) -> str | None:
    """Audio URL for a word, preferring a stored one.

    Falls back to the dictionary port without persisting the result.
    """
    try:
        entry = repo.find_by_word(word) or repo.find_by_word(normalize_word(word))
        if entry is not None:
            for pronunciation in entry.pronunciations:
                if pronunciation.accent == accent and pronunciation.audio_url:
                    return pronunciation.audio_url

        return await resolve_audio_url(dictionary, word, accent)
    except Exception as e:
        logger.error("Failed to get word audio", extra={
            "word": word, "accent": accent, "error": str(e),
        })
        return None
