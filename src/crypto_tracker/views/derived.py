"""Views derived from the market snapshot and user state.

The module-level functions are pure. DerivedViewEngine memoizes them on their
(hashable) inputs so a render only recomputes what actually changed.
"""
from collections.abc import Iterable
from functools import lru_cache

from crypto_tracker.schemas import (Coin, MarketRow, PortfolioRow,
                                    PortfolioView)

Holdings = tuple[tuple[str, float], ...]


def filtered_coins(coins: tuple[Coin, ...], search_text: str) -> tuple[Coin, ...]:
    """Coins whose name contains search_text, case-insensitively, in snapshot order."""
    needle = search_text.casefold()
    return tuple(coin for coin in coins if needle in coin.name.casefold())


def portfolio_value(portfolio: Holdings, coins: tuple[Coin, ...]) -> float:
    """Sum of quantity x current price; holdings missing from the snapshot count as zero."""
    return portfolio_view(portfolio, coins).total_value


def portfolio_view(portfolio: Holdings, coins: tuple[Coin, ...]) -> PortfolioView:
    """Priced rows in portfolio order, their total, and the ids that could not be priced."""
    by_id = {coin.id: coin for coin in coins}
    rows: list[PortfolioRow] = []
    unpriced: list[str] = []
    total = 0.0
    for coin_id, amount in portfolio:
        coin = by_id.get(coin_id)
        if coin is None:
            unpriced.append(coin_id)
            continue
        value = amount * coin.current_price
        total += value
        rows.append(PortfolioRow(coin=coin, amount=amount, value=value))
    return PortfolioView(total_value=total, rows=tuple(rows), unpriced=tuple(unpriced))


def favorite_coins(filtered: tuple[Coin, ...], favorites: Iterable[str]) -> tuple[Coin, ...]:
    """Subset of filtered whose id is a favorite, in filtered order."""
    wanted = set(favorites)
    return tuple(coin for coin in filtered if coin.id in wanted)


def market_rows(filtered: tuple[Coin, ...], favorites: Iterable[str]) -> list[MarketRow]:
    """Filtered coins flagged with their favorite status."""
    wanted = set(favorites)
    return [MarketRow(coin=coin, is_favorite=coin.id in wanted) for coin in filtered]


class DerivedViewEngine:
    """Memoized access to the derived views, keyed on their inputs."""

    def __init__(self, maxsize: int = 16) -> None:
        self._filtered = lru_cache(maxsize=maxsize)(filtered_coins)
        self._portfolio = lru_cache(maxsize=maxsize)(portfolio_view)
        self._favorites = lru_cache(maxsize=maxsize)(favorite_coins)

    def filtered_coins(self, coins: tuple[Coin, ...], search_text: str) -> tuple[Coin, ...]:
        return self._filtered(coins, search_text)

    def portfolio_view(self, portfolio: dict[str, float], coins: tuple[Coin, ...]) -> PortfolioView:
        return self._portfolio(tuple(portfolio.items()), coins)

    def portfolio_value(self, portfolio: dict[str, float], coins: tuple[Coin, ...]) -> float:
        return self.portfolio_view(portfolio, coins).total_value

    def favorite_coins(self, filtered: tuple[Coin, ...], favorites: Iterable[str]) -> tuple[Coin, ...]:
        return self._favorites(filtered, frozenset(favorites))

    def market_rows(self, filtered: tuple[Coin, ...], favorites: Iterable[str]) -> list[MarketRow]:
        return market_rows(filtered, favorites)

    def cache_info(self) -> dict[str, object]:
        return {
            "filtered_coins": self._filtered.cache_info(),
            "portfolio_view": self._portfolio.cache_info(),
            "favorite_coins": self._favorites.cache_info(),
        }
