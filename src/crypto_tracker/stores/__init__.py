"""Stores holding market data, history series and user state."""
from crypto_tracker.stores.history import HistorySeriesCache
from crypto_tracker.stores.market_data import MarketDataStore
from crypto_tracker.stores.notifications import TransientMessage
from crypto_tracker.stores.polling import PeriodicTask
from crypto_tracker.stores.user_state import UserStateStore

__all__ = [
    "HistorySeriesCache",
    "MarketDataStore",
    "PeriodicTask",
    "TransientMessage",
    "UserStateStore",
]
