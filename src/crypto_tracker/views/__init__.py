"""Derived views and navigation state."""
from crypto_tracker.views.derived import (DerivedViewEngine, favorite_coins,
                                          filtered_coins, market_rows,
                                          portfolio_value, portfolio_view)
from crypto_tracker.views.navigation import ViewSelector

__all__ = [
    "DerivedViewEngine",
    "ViewSelector",
    "favorite_coins",
    "filtered_coins",
    "market_rows",
    "portfolio_value",
    "portfolio_view",
]
