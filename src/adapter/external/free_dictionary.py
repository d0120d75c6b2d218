"""Free Dictionary API adapter (https://dictionaryapi.dev).

Implements DictionaryPort. Used for pronunciation audio URLs at lookup
time and as the data source for bulk import.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

logger = logging.getLogger(__name__)

FREE_DICTIONARY_API_BASE_URL = "https://api.dictionaryapi.dev/api/v2/entries/en"
API_TIMEOUT_SECONDS = 5.0

# Connection-level failures worth another attempt; HTTP errors are not retried
_TRANSIENT_ERRORS = (httpx.TimeoutException, httpx.ConnectError)


class FreeDictionaryAdapter:
    """DictionaryPort backed by the public Free Dictionary API.

    Every failure (404, bad payload, network error) is reported as None.
    """

    def __init__(self, base_url: str = FREE_DICTIONARY_API_BASE_URL, timeout: float = API_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def url_for(self, word: str) -> str:
        return f"{self.base_url}/{quote(word, safe='')}"

    async def fetch(self, word: str) -> list[dict[str, Any]] | None:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await _fetch_with_retry(client, self.url_for(word))
            if response.status_code == 404:
                logger.debug("Word unknown to Free Dictionary", extra={"word": word})
                return None
            response.raise_for_status()
            return _entries_from_payload(word, response.json())
        except httpx.HTTPStatusError as e:
            logger.warning("Free Dictionary returned an error status", extra={
                "word": word, "status_code": e.response.status_code,
            })
        except httpx.RequestError as e:
            logger.warning("Free Dictionary request failed", extra={
                "word": word, "error_type": type(e).__name__,
            })
        except Exception as e:
            logger.error("Unexpected Free Dictionary failure", extra={
                "word": word, "error": str(e),
            }, exc_info=True)
        return None


def _entries_from_payload(word: str, payload: Any) -> list[dict[str, Any]] | None:
    """Accept only a non-empty JSON array of entries."""
    if not isinstance(payload, list):
        logger.warning("Free Dictionary payload is not a list", extra={
            "word": word, "type": type(payload).__name__,
        })
        return None
    if not payload:
        return None
    logger.debug("Free Dictionary entries fetched", extra={"word": word, "entry_count": len(payload)})
    return payload


@retry(
    retry=retry_if_exception_type(_TRANSIENT_ERRORS),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
async def _fetch_with_retry(client: httpx.AsyncClient, url: str) -> httpx.Response:
    return await client.get(url)
