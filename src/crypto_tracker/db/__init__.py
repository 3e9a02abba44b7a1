"""Database package: local key-value storage models and sessions."""
from crypto_tracker.db.models import StorageItem
from crypto_tracker.db.sessions import create_db_engine, get_session, init_db
from crypto_tracker.db.storage import KeyValueStorage, SQLModelStorage

__all__ = [
    "KeyValueStorage",
    "SQLModelStorage",
    "StorageItem",
    "create_db_engine",
    "get_session",
    "init_db",
]
