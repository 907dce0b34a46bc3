"""MongoDB client management for the user store.

A single MongoClient is cached per process. A client that stops answering
pings is replaced on the next call; a missing or unreachable MONGO_URL at
first use is treated as configuration error and not retried.
"""

import os
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'user_directory')
USERS_COLLECTION_NAME = 'users'
COUNTERS_COLLECTION_NAME = 'counters'

CLIENT_OPTIONS = {
    'serverSelectionTimeoutMS': 5000,
    'connectTimeoutMS': 5000,
    'socketTimeoutMS': 30000,
    'maxPoolSize': 10,
    'minPoolSize': 0,
    'maxIdleTimeMS': 30000,
    'waitQueueTimeoutMS': 10000,
    'retryWrites': True,
    'retryReads': True,
}

_client: MongoClient | None = None
_ever_connected = False
_unavailable = False


def reset_client():
    """Forget the cached client and any previous connection failure."""
    global _client, _ever_connected, _unavailable
    _client = None
    _ever_connected = False
    _unavailable = False


def _is_alive(client: MongoClient) -> bool:
    try:
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.debug("[MONGODB] Ping failed", extra={"error": str(e)[:200]})
        return False


def get_mongodb_client() -> MongoClient | None:
    """Return a connected MongoClient, or None if MongoDB cannot be reached."""
    global _client, _ever_connected, _unavailable

    if _client is not None:
        if _is_alive(_client):
            return _client
        _client = None

    if _unavailable:
        return None

    if not MONGO_URL:
        logger.error("[MONGODB] MONGO_URL not configured, user store unavailable")
        _unavailable = True
        return None

    try:
        client = MongoClient(MONGO_URL, **CLIENT_OPTIONS)
    except PyMongoError as e:
        logger.error("[MONGODB] Invalid connection settings", extra={"error": str(e)[:200]})
        _unavailable = True
        return None

    if not _is_alive(client):
        if not _ever_connected:
            logger.error("[MONGODB] Initial connection failed", extra={"database": DATABASE_NAME})
            _unavailable = True
        return None

    if not _ever_connected:
        logger.info("[MONGODB] Connected", extra={"database": DATABASE_NAME})
    _ever_connected = True
    _client = client
    return client
