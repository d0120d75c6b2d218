"""In-memory implementation of DictionaryPort for testing."""


class FakeDictionaryAdapter:
    """Fake dictionary adapter that returns preconfigured entries."""

    def __init__(self, entries: list[dict] | None = None, error: Exception | None = None):
        self.entries = entries
        self.error = error
        self.fetched: list[str] = []

    async def fetch(self, word: str) -> list[dict] | None:
        self.fetched.append(word)
        if self.error is not None:
            raise self.error
        return self.entries
