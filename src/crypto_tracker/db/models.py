"""Database models for local application state.

Only user state is persisted, as JSON text under a string key (the layout of
browser local storage). Market data is fetched on demand and never stored.
"""
from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


class StorageItem(SQLModel, table=True):
    """One key of local key-value storage."""

    key: str = Field(primary_key=True)
    value: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
