"""Shared utilities for market data providers."""
from datetime import datetime, timezone


def normalize_crypto_id(symbol: str) -> str:
    """Normalize a CoinGecko/crypto ID (lowercase, surrounding whitespace stripped)."""
    return symbol.strip().lower()


def timestamp_from_ms(ts_ms: float) -> datetime:
    """Convert a Unix timestamp in milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(ts_ms / 1000, tz=timezone.utc)


def date_label(ts: datetime) -> str:
    """Calendar date label used on chart axes (YYYY-MM-DD)."""
    return ts.date().isoformat()
