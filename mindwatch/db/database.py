import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError

from mindwatch.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

_client: Optional[MongoClient] = None
_db: Optional[Database] = None


def init_database(settings: Optional[Settings] = None) -> Optional[Database]:
    """Connect once at startup. The API still serves stateless routes if this fails."""
    global _client, _db
    settings = settings or get_settings()
    if not settings.mongo_uri:
        logger.warning("MONGO_URI is not set; journal and chat history are disabled.")
        return None

    try:
        _client = MongoClient(settings.mongo_uri)
        _client.admin.command('ping')
        _db = _client[settings.db_name]
        logger.info("Connected to MongoDB database '%s'", settings.db_name)
    except ConnectionFailure as e:
        logger.error("Could not connect to MongoDB: %s", e)
        _db = None
    except PyMongoError as e:
        logger.error("MongoDB initialisation failed: %s", e)
        _db = None
    return _db


def close_database() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None


def get_database() -> Database:
    if _db is None:
        raise ConnectionFailure("Database is not initialised. Check MONGO_URI.")
    return _db


def get_journal_collection() -> Collection:
    return get_database()["journal_entries"]


def get_chat_collection() -> Collection:
    return get_database()["chat_messages"]
