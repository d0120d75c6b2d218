"""Dictionary API routes.

Endpoints:
- GET /dictionary/word/{word}: Look up a word (store first, LLM fallback)
- GET /dictionary/search: Prefix autocomplete
- GET /dictionary/audio/{word}: Audio URL for one accent
- POST /dictionary/translate: Free-text translation
- GET /dictionary/health: Service liveness
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_dictionary_port, get_entry_repo, get_llm_port
from api.errors import get_error_response
from api.models import (
    AudioResponse,
    LookupResponse,
    SearchSuggestionsResponse,
    TranslateRequest,
    TranslateResponse,
)
from domain.model.entry import Accent
from domain.model.errors import DomainError
from port.dictionary import DictionaryPort
from port.entry_repository import EntryRepository
from port.llm import LLMPort
from services import audio_service, generation_service, lookup_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dictionary", tags=["dictionary"])


def _http_error(e: DomainError, operation: str, **log_extra) -> HTTPException:
    status_code, detail = get_error_response(e)
    logger.error(f"{operation} failed", extra={
        "operation": operation, "status_code": status_code, "error": str(e), **log_extra,
    })
    return HTTPException(status_code=status_code, detail=detail)


@router.get("/word/{word}", responses={200: {"model": LookupResponse}})
async def lookup_word(
    word: str,
    repo: EntryRepository = Depends(get_entry_repo),
    dictionary: DictionaryPort = Depends(get_dictionary_port),
    llm: LLMPort = Depends(get_llm_port),
) -> dict[str, Any]:
    """Look up a word.

    Stored entries come back with audio backfilled; unknown words are
    generated by the LLM and returned without being stored.
    """
    if not word.strip():
        raise HTTPException(status_code=400, detail="Word must not be empty")

    try:
        return await lookup_service.lookup(word, repo, dictionary, llm)
    except DomainError as e:
        raise _http_error(e, "lookup", word=word) from e


@router.get("/search", response_model=SearchSuggestionsResponse)
async def search_words(
    q: str = Query(..., min_length=1, max_length=100, description="Prefix to search"),
    limit: int = Query(10, ge=1, le=50, description="Maximum number of suggestions"),
    repo: EntryRepository = Depends(get_entry_repo),
):
    """Autocomplete words by prefix, most frequent first."""
    try:
        suggestions = lookup_service.search_words(repo, q, limit)
    except DomainError as e:
        raise _http_error(e, "search", query=q) from e
    return SearchSuggestionsResponse(suggestions=suggestions)


@router.get("/audio/{word}", response_model=AudioResponse)
async def get_word_audio(
    word: str,
    accent: Accent = Query(Accent.US, description="US or UK"),
    repo: EntryRepository = Depends(get_entry_repo),
    dictionary: DictionaryPort = Depends(get_dictionary_port),
):
    """Audio URL for a word in the given accent, null when none is found."""
    audio_url = await audio_service.get_word_audio(repo, dictionary, word, accent.value)
    return AudioResponse(audio_url=audio_url)


@router.post("/translate", response_model=TranslateResponse)
async def translate_text(
    request: TranslateRequest,
    llm: LLMPort = Depends(get_llm_port),
):
    """Translate text between two language codes."""
    try:
        result = await generation_service.translate(
            llm, request.text, request.source_lang, request.target_lang,
        )
    except DomainError as e:
        raise _http_error(e, "translate", source_lang=request.source_lang, target_lang=request.target_lang) from e

    return TranslateResponse(
        original_text=result.original_text,
        translated_text=result.translated_text,
        source_lang=result.source_lang,
        target_lang=result.target_lang,
    )


@router.get("/health")
async def dictionary_health():
    return {"status": "healthy", "service": "dictionary"}
