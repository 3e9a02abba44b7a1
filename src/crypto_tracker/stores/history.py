"""Lazily populated per-coin cache of historical price series."""
import asyncio
import logging

from crypto_tracker.providers.core import (PROVIDER_EXCEPTIONS,
                                           MarketProviderABC,
                                           normalize_crypto_id)
from crypto_tracker.schemas import PriceSeries
from crypto_tracker.stores.base import ChangeNotifier

logger = logging.getLogger(__name__)


class HistorySeriesCache(ChangeNotifier):
    """Caches one series per coin for the whole session.

    Entries are never evicted or refreshed. A failed fetch leaves the entry
    absent so the next request tries again. Concurrent requests for the same
    coin share one in-flight fetch.
    """

    def __init__(self, provider: MarketProviderABC, days: int = 7) -> None:
        super().__init__()
        self._provider = provider
        self._days = days
        self._series: dict[str, PriceSeries] = {}
        self._pending: dict[str, asyncio.Task] = {}

    def get(self, coin_id: str) -> PriceSeries | None:
        """Return the cached series, or None if it has not been fetched yet."""
        return self._series.get(normalize_crypto_id(coin_id))

    def __contains__(self, coin_id: str) -> bool:
        return normalize_crypto_id(coin_id) in self._series

    def is_pending(self, coin_id: str) -> bool:
        return normalize_crypto_id(coin_id) in self._pending

    async def fetch_if_absent(self, coin_id: str) -> PriceSeries | None:
        """Return the series for coin_id, fetching it only if it is not cached.

        Returns:
            The series, or None if the fetch failed.
        """
        coin_id = normalize_crypto_id(coin_id)
        cached = self._series.get(coin_id)
        if cached is not None:
            return cached

        pending = self._pending.get(coin_id)
        if pending is None:
            pending = asyncio.create_task(self._fetch(coin_id), name=f"history:{coin_id}")
            self._pending[coin_id] = pending
            pending.add_done_callback(lambda _t, cid=coin_id: self._pending.pop(cid, None))
        # One waiter being cancelled must not cancel the shared fetch.
        return await asyncio.shield(pending)

    async def close(self) -> None:
        """Cancel fetches still in flight."""
        tasks = list(self._pending.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._pending.clear()

    async def _fetch(self, coin_id: str) -> PriceSeries | None:
        try:
            series = await self._provider.get_price_series(coin_id, self._days)
        except PROVIDER_EXCEPTIONS:
            logger.exception("Error fetching chart data for %s", coin_id)
            return None
        self._series[coin_id] = series
        logger.info("Cached %d-day series for %s | points=%d", self._days, coin_id, len(series.points))
        self._notify()
        return series
