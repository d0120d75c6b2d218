"""Process-wide MongoDB client for the dictionary store."""

import os
import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'envi_dictionary')

# Fail fast when the database is unreachable
CLIENT_OPTIONS = dict(
    serverSelectionTimeoutMS=5000,
    connectTimeoutMS=5000,
    socketTimeoutMS=30000,
    maxPoolSize=20,
    maxIdleTimeMS=30000,
    waitQueueTimeoutMS=10000,
    retryWrites=True,
    retryReads=True,
)

_client: MongoClient | None = None
_connected_once = False
_config_failed = False


def reset_client():
    """Forget the cached client and any earlier failure."""
    global _client, _connected_once, _config_failed
    _client = None
    _connected_once = False
    _config_failed = False


def _is_alive(client: MongoClient) -> bool:
    try:
        client.admin.command('ping')
        return True
    except PyMongoError:
        return False


def get_mongodb_client() -> MongoClient | None:
    """Return a live client, reconnecting when the cached one stops answering.

    Returns None when MONGO_URL is missing or the very first connection
    failed; those are configuration problems and are not retried.
    """
    global _client, _connected_once, _config_failed

    if _client is not None:
        if _is_alive(_client):
            return _client
        logger.debug("Cached MongoDB client lost its connection, reconnecting")
        _client = None

    if _config_failed:
        return None

    if not MONGO_URL:
        logger.error("MONGO_URL is not configured")
        _config_failed = True
        return None

    try:
        client = MongoClient(MONGO_URL, **CLIENT_OPTIONS)
        client.admin.command('ping')
    except (ConnectionFailure, PyMongoError) as e:
        if not _connected_once:
            logger.error("Initial MongoDB connection failed", extra={"error": str(e)[:200]})
            _config_failed = True
        return None

    if not _connected_once:
        logger.info("Connected to MongoDB", extra={"database": DATABASE_NAME})
    _connected_once = True
    _client = client
    return client
