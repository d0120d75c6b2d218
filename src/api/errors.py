"""Domain error → HTTP status mapping for route handlers."""

from domain.model.errors import (
    DomainError,
    GenerationUnparsableError,
    ImportFailedError,
    LookupFailedError,
    NotFoundError,
    StorageError,
    TranslationFailedError,
    UpstreamError,
    UpstreamTimeoutError,
)


def get_error_response(e: Exception) -> tuple[int, str]:
    """Get HTTP status code and detail message for a service exception.

    Args:
        e: Exception raised by a service call

    Returns:
        Tuple of (status_code, detail_message)
    """
    if isinstance(e, NotFoundError):
        return (404, str(e) or "Not found")
    elif isinstance(e, UpstreamTimeoutError):
        return (504, "Upstream service timeout")
    elif isinstance(e, UpstreamError):
        return (502, "Upstream service error")
    elif isinstance(e, GenerationUnparsableError):
        return (502, e.reason)
    elif isinstance(e, StorageError):
        return (503, "Database unavailable")
    elif isinstance(e, (ImportFailedError, LookupFailedError, TranslationFailedError)):
        return (500, str(e))
    elif isinstance(e, DomainError):
        return (500, str(e) or "Internal server error")
    else:
        return (500, "Internal server error")
