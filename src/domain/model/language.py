"""Language names used by the translation prompt.

Codes follow the ones the client sends (ISO 639-1, plus ``zh-cn``).
"""

from types import MappingProxyType
from typing import Mapping

LANGUAGE_NAMES: Mapping[str, str] = MappingProxyType({
    'en': 'English',
    'vi': 'Vietnamese',
    'zh-cn': 'Chinese',
    'es': 'Spanish',
    'hi': 'Hindi',
    'bn': 'Bengali',
    'pt': 'Portuguese',
    'ru': 'Russian',
    'ja': 'Japanese',
    'ko': 'Korean',
    'fr': 'French',
})


def get_language_name(code: str) -> str:
    """Return the display name for a language code.

    Unknown codes are returned unchanged so the prompt still names something.

    Example:
        get_language_name('vi') → 'Vietnamese'
        get_language_name('de') → 'de'
    """
    return LANGUAGE_NAMES.get(code, code)
