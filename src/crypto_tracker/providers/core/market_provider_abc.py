"""Abstract base class for market data providers."""
from abc import ABC, abstractmethod

from crypto_tracker.schemas import Coin, PriceSeries


class MarketProviderABC(ABC):
    """Base interface for market data providers.

    A provider answers two questions: which coins lead the market right now,
    and how did one coin's price move over the last few days.
    """

    @abstractmethod
    async def get_top_coins(self, limit: int) -> list[Coin]:
        """Fetch the top coins by market capitalization in a single request.

        Args:
            limit: Page size (number of coins to return).

        Returns:
            Coins ordered by market capitalization, descending.
        """

    @abstractmethod
    async def get_price_series(self, coin_id: str, days: int) -> PriceSeries:
        """Fetch a daily price series for one coin.

        Args:
            coin_id: Provider coin id (e.g. "bitcoin").
            days: Number of days of history.

        Returns:
            A PriceSeries ascending by timestamp.
        """

    async def close(self) -> None:
        """Clean up resources (connections, clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "MarketProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()
