"""Last-fetched market snapshot, refreshed from the provider."""
import logging
from datetime import datetime, timezone

from crypto_tracker.providers.core import PROVIDER_EXCEPTIONS, MarketProviderABC
from crypto_tracker.schemas import MarketSnapshot
from crypto_tracker.stores.base import ChangeNotifier

logger = logging.getLogger(__name__)


class MarketDataStore(ChangeNotifier):
    """Holds the latest snapshot of the top coins by market cap.

    Every refresh() takes the next generation number. A response is applied
    only if its generation is still the latest issued, so when refreshes
    overlap the newest request wins regardless of completion order.
    """

    def __init__(self, provider: MarketProviderABC, limit: int = 30) -> None:
        super().__init__()
        self._provider = provider
        self._limit = limit
        self._snapshot = MarketSnapshot()
        self._generation = 0
        self._loading = True

    @property
    def snapshot(self) -> MarketSnapshot:
        return self._snapshot

    @property
    def loading(self) -> bool:
        """True until the first refresh attempt has completed."""
        return self._loading

    @property
    def generation(self) -> int:
        """Generation number of the most recently issued refresh."""
        return self._generation

    async def refresh(self) -> bool:
        """Fetch the top coins and replace the snapshot.

        Failures are logged and leave the previous snapshot in place.

        Returns:
            True if the response was applied, False on failure or when a newer
            refresh was issued while this one was in flight.
        """
        self._generation += 1
        generation = self._generation
        try:
            coins = await self._provider.get_top_coins(self._limit)
        except PROVIDER_EXCEPTIONS:
            logger.exception("Error fetching market data (generation %d)", generation)
            self._finish_loading()
            return False

        if generation != self._generation:
            logger.debug(
                "Discarding stale snapshot: generation %d, latest %d",
                generation,
                self._generation,
            )
            return False

        self._snapshot = MarketSnapshot(
            coins=tuple(coins),
            generation=generation,
            fetched_at=datetime.now(timezone.utc),
        )
        self._loading = False
        logger.info("Applied snapshot %d | coins=%d", generation, len(coins))
        self._notify()
        return True

    def _finish_loading(self) -> None:
        if self._loading:
            self._loading = False
            self._notify()
