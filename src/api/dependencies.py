from fastapi import HTTPException

from adapter.external.free_dictionary import FreeDictionaryAdapter
from adapter.external.litellm import LiteLLMAdapter
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.entry_repository import MongoEntryRepository
from port.dictionary import DictionaryPort
from port.entry_repository import EntryRepository
from port.llm import LLMPort


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_entry_repo() -> EntryRepository:
    return MongoEntryRepository(_get_db())


def get_dictionary_port() -> DictionaryPort:
    return FreeDictionaryAdapter()


def get_llm_port() -> LLMPort:
    return LiteLLMAdapter()
