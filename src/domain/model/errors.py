"""Domain-level exceptions.

Services raise these errors to express business rule violations and
infrastructure failures. Route handlers catch them and map them to
appropriate HTTP status codes (see api/errors.py).
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class StorageError(DomainError):
    """The persistence layer failed (distinct from a plain miss)."""


class UpstreamError(DomainError):
    """An external service (completion endpoint, phonetics API) failed."""


class UpstreamTimeoutError(UpstreamError):
    """An external call exceeded its deadline."""


class GenerationUnparsableError(DomainError):
    """The model's completion did not contain a usable dictionary entry."""

    def __init__(self, word: str, reason: str = "Failed to parse dictionary data"):
        self.word = word
        self.reason = reason
        super().__init__(reason)


class ImportFailedError(DomainError):
    """An import step failed. Steps committed before the failure are kept."""

    def __init__(self, word: str, message: str):
        self.word = word
        self.message = message
        super().__init__(f"Failed to import word '{word}': {message}")


class LookupFailedError(DomainError):
    """Unclassified failure while looking up a word."""

    def __init__(self, word: str, message: str):
        self.word = word
        self.message = message
        super().__init__(f"Failed to lookup word: {message}")


class TranslationFailedError(DomainError):
    """Unclassified failure while translating text."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Failed to translate text: {message}")
