"""Administrative dictionary routes: bulk import and deletion."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_entry_repo
from api.errors import get_error_response
from api.models import DeleteResponse, ImportRequest, ImportResponse
from domain.model.entry import normalize_word
from domain.model.errors import DomainError, NotFoundError
from port.entry_repository import EntryRepository
from services import import_service
from services.import_source import entry_from_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dictionary/admin", tags=["admin"])


@router.post("/import", response_model=ImportResponse)
async def import_word(
    request: ImportRequest,
    repo: EntryRepository = Depends(get_entry_repo),
):
    """Merge an externally sourced entry into the store.

    Re-importing the same word keeps existing pronunciations, word forms and
    synonyms but appends its definitions again.
    """
    entry = entry_from_payload(request.model_dump())
    try:
        word = import_service.import_entry(repo, entry)
    except DomainError as e:
        status_code, detail = get_error_response(e)
        raise HTTPException(status_code=status_code, detail=detail) from e

    return ImportResponse(success=True, word=word)


@router.delete("/words/{word}", response_model=DeleteResponse)
async def delete_word(
    word: str,
    repo: EntryRepository = Depends(get_entry_repo),
):
    """Delete an entry and everything it owns."""
    try:
        entry = repo.find_by_word(word) or repo.find_by_word(normalize_word(word))
        if entry is None:
            raise NotFoundError(f"Word '{word}' not found")
        repo.delete_entry(entry.id)
    except DomainError as e:
        status_code, detail = get_error_response(e)
        logger.warning("Delete word failed", extra={"word": word, "status_code": status_code})
        raise HTTPException(status_code=status_code, detail=detail) from e

    logger.info("Word deleted", extra={"word": entry.word, "entry_id": entry.id})
    return DeleteResponse(success=True, word=entry.word)
