"""Dictionary port — outbound interface for the phonetic-data source."""

from typing import Any, Protocol


class DictionaryPort(Protocol):
    """Port for fetching raw entries from an external dictionary.

    Each entry is a dict shaped like
    ``{word, phonetics: [{text?, audio?}], meanings: [...]}``.
    """

    async def fetch(self, word: str) -> list[dict[str, Any]] | None:
        """Return entries for ``word``, or None when unavailable.

        Implementations absorb network errors and report them as None.
        """
        ...
