"""String-keyed local storage holding JSON text."""
import logging
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy.engine import Engine

from crypto_tracker.db.models import StorageItem
from crypto_tracker.db.sessions import get_session, init_db

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Minimal local-storage interface used by the user state store."""

    def get_item(self, key: str) -> str | None:
        """Return the stored text for key, or None if absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store text under key, replacing any previous value."""
        ...

    def remove_item(self, key: str) -> None:
        """Delete key if present."""
        ...


class SQLModelStorage:
    """KeyValueStorage backed by a single SQLModel table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        init_db(engine)

    def get_item(self, key: str) -> str | None:
        with get_session(self._engine) as session:
            item = session.get(StorageItem, key)
            return item.value if item is not None else None

    def set_item(self, key: str, value: str) -> None:
        with get_session(self._engine) as session:
            item = session.get(StorageItem, key)
            if item is None:
                item = StorageItem(key=key, value=value)
            else:
                item.value = value
                item.updated_at = datetime.now(timezone.utc)
            session.add(item)
        logger.debug("Stored %s (%d bytes)", key, len(value))

    def remove_item(self, key: str) -> None:
        with get_session(self._engine) as session:
            item = session.get(StorageItem, key)
            if item is not None:
                session.delete(item)
