"""Index creation that survives renamed or re-specified indexes."""

from logging import getLogger

from pymongo.errors import OperationFailure, PyMongoError

logger = getLogger(__name__)

# IndexOptionsConflict, IndexKeySpecsConflict
_CONFLICT_CODES = {85, 86}


def _is_conflict(e: PyMongoError) -> bool:
    if isinstance(e, OperationFailure) and e.code in _CONFLICT_CODES:
        return True
    return "already exists" in str(e) or "Conflict" in str(e)


def _conflicting_index(collection, keys: list, name: str) -> str | None:
    """Name of an existing index sharing either the name or the key spec."""
    wanted = dict(keys)
    for existing, info in collection.index_information().items():
        if existing == '_id_':
            continue
        if existing == name or dict(info.get('key', [])) == wanted:
            return existing
    return None


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing an older index that conflicts with it.

    A conflict is an index with the same name but other keys, or the same
    keys under another name or options (e.g. ``unique`` added later).
    Other driver errors propagate.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if not _is_conflict(e):
            raise

    existing = _conflicting_index(collection, keys, name)
    if existing is None:
        logger.error("Index conflict could not be resolved", extra={"index": name})
        return False

    logger.warning("Replacing conflicting index", extra={"index": name, "replaced": existing})
    collection.drop_index(existing)
    collection.create_index(keys, name=name, **kwargs)
    return True


def ensure_all_indexes(db) -> bool:
    """Create the dictionary store's indexes. Called at app startup."""
    from adapter.mongodb.entry_repository import MongoEntryRepository

    return MongoEntryRepository(db).ensure_indexes()
