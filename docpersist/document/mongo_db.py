import os

from pymongo import MongoClient
from pymongo.database import Database

from ..utilities.setup_error import SetupError

# Module-level cache for the database instance
_mongo_db = None

def create_mongo_db() -> Database:
    global _mongo_db
    if _mongo_db is not None:
        return _mongo_db
    
    MONGO_URL = os.environ.get("MONGO_URL")
    if not MONGO_URL: raise SetupError("Please set MONGO_URL in your environment variables.")

    MONGO_DB_NAME = os.environ.get("MONGO_DB_NAME")
    if not MONGO_DB_NAME: raise SetupError("Please set MONGO_DB_NAME in your environment variables.")

    # Initialize database
    mongo_client = MongoClient(MONGO_URL)
    _mongo_db = mongo_client[MONGO_DB_NAME]
    return _mongo_db

def set_mongo_db(db: Database) -> None:
    """ Use an already configured database instead of reading the environment. """
    global _mongo_db
    _mongo_db = db

def reset_mongo_db() -> None:
    """ Forget the cached database. The next create_mongo_db() call reads the environment again. """
    global _mongo_db
    _mongo_db = None

def persist_in_safe_mode() -> bool:
    """ Whether writes should wait for the server's acknowledgement. Reads MONGO_PERSIST_IN_SAFE_MODE, defaulting to true. """
    value = os.environ.get("MONGO_PERSIST_IN_SAFE_MODE", "true").strip().lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    raise SetupError(f"MONGO_PERSIST_IN_SAFE_MODE must be 'true' or 'false', got '{value}'.")
