"""Application context: owns the stores and turns them into render state.

Dashboard is the single owner of every store for one process. The
presentation layer talks only to it: commands go in, DashboardState comes out.
"""
import asyncio
import logging
from collections.abc import AsyncIterator

from crypto_tracker.providers.core import normalize_crypto_id
from crypto_tracker.schemas import (ActiveView, ChartPanel, DashboardState,
                                    PortfolioView, PriceSeries)
from crypto_tracker.stores import (HistorySeriesCache, MarketDataStore,
                                   PeriodicTask, UserStateStore)
from crypto_tracker.views import DerivedViewEngine, ViewSelector

logger = logging.getLogger(__name__)


class Dashboard:
    """Single-user dashboard state over the market, history and user stores."""

    def __init__(
        self,
        market_store: MarketDataStore,
        history_cache: HistorySeriesCache,
        user_state: UserStateStore,
        *,
        views: DerivedViewEngine | None = None,
        selector: ViewSelector | None = None,
        refresh_interval: float = 60.0,
    ) -> None:
        """Initialize the dashboard.

        Args:
            market_store: Snapshot store refreshed by the poller.
            history_cache: Per-coin series cache used by charts.
            user_state: Portfolio, favorites and alerts.
            views: Derived view engine (a fresh one by default).
            selector: Active view state (starts on the market tab).
            refresh_interval: Seconds between market refreshes.
        """
        self.market_store = market_store
        self.history_cache = history_cache
        self.user_state = user_state
        self.views = views or DerivedViewEngine()
        self.selector = selector or ViewSelector()
        self._poller = PeriodicTask(
            market_store.refresh, refresh_interval, name="market-refresh"
        )
        self._search = ""
        self._chart_tasks: set[asyncio.Task] = set()
        self._revision = 0
        self._subscribers: set[asyncio.Event] = set()
        self._loop: asyncio.AbstractEventLoop | None = None

        for store in (market_store, history_cache, user_state, self.selector):
            store.add_listener(self._on_change)

    @property
    def revision(self) -> int:
        """Incremented on every state change."""
        return self._revision

    @property
    def polling(self) -> bool:
        return self._poller.running

    async def start(self) -> None:
        """Start periodic market refreshes (first refresh runs immediately)."""
        self._loop = asyncio.get_running_loop()
        self._poller.start()

    async def stop(self) -> None:
        """Stop refreshing and cancel chart fetches still in flight."""
        await self._poller.stop()
        tasks = list(self._chart_tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        await self.history_cache.close()

    # ---- Commands ----
    async def refresh(self) -> bool:
        return await self.market_store.refresh()

    def set_search(self, text: str) -> None:
        if text != self._search:
            self._search = text
            self._on_change()

    def select_view(self, view: ActiveView | str) -> ActiveView:
        return self.selector.select(view)

    def show_chart(self, coin_id: str) -> None:
        """Open the chart for coin_id; its series is fetched in the background if needed."""
        coin_id = normalize_crypto_id(coin_id)
        if coin_id not in self.history_cache and not self.history_cache.is_pending(coin_id):
            logger.debug("Fetching chart series for %s in the background", coin_id)
            task = asyncio.create_task(
                self.history_cache.fetch_if_absent(coin_id), name=f"chart:{coin_id}"
            )
            self._chart_tasks.add(task)
            task.add_done_callback(self._chart_tasks.discard)
        self.selector.show_chart(coin_id)

    async def load_chart(self, coin_id: str) -> PriceSeries | None:
        """Open the chart for coin_id and wait for its series."""
        coin_id = normalize_crypto_id(coin_id)
        self.selector.show_chart(coin_id)
        return await self.history_cache.fetch_if_absent(coin_id)

    def toggle_favorite(self, coin_id: str) -> bool:
        return self.user_state.toggle_favorite(normalize_crypto_id(coin_id))

    def add_to_portfolio(self, coin_id: str, amount: str | float) -> bool:
        return self.user_state.add_to_portfolio(normalize_crypto_id(coin_id), amount)

    def set_alert(self, coin_id: str, price: str | float) -> bool:
        coin_id = normalize_crypto_id(coin_id)
        coin = self.market_store.snapshot.find(coin_id)
        return self.user_state.set_alert(
            coin_id, price, display_name=coin.name if coin else None
        )

    # ---- Views ----
    @property
    def search(self) -> str:
        return self._search

    def market_rows(self, search: str | None = None):
        filtered = self._filtered(search)
        return self.views.market_rows(filtered, self.user_state.favorites)

    def portfolio(self) -> PortfolioView:
        return self.views.portfolio_view(
            self.user_state.portfolio, self.market_store.snapshot.coins
        )

    def favorite_coins(self, search: str | None = None):
        filtered = self._filtered(search)
        return list(self.views.favorite_coins(filtered, self.user_state.favorites))

    def chart_panels(self) -> list[ChartPanel]:
        snapshot = self.market_store.snapshot
        panels = []
        for coin_id in self.selector.charted:
            coin = snapshot.find(coin_id)
            panels.append(
                ChartPanel(
                    coin_id=coin_id,
                    name=coin.name if coin else None,
                    series=self.history_cache.get(coin_id),
                )
            )
        return panels

    def state(self) -> DashboardState:
        """Build everything needed to render the current frame."""
        return DashboardState(
            active_view=self.selector.active,
            loading=self.market_store.loading,
            search=self._search,
            alert_message=self.user_state.alert_message,
            alerts=self.user_state.alerts,
            market=self.market_rows(),
            portfolio=self.portfolio(),
            favorites=self.favorite_coins(),
            charts=self.chart_panels(),
        )

    async def updates(self, stop_event: asyncio.Event | None = None) -> AsyncIterator[DashboardState]:
        """Yield the current state, then a fresh state after every change.

        Changes that land while the consumer is busy are coalesced into one
        frame. The iterator ends when stop_event is set.
        """
        self._loop = asyncio.get_running_loop()
        changed = asyncio.Event()
        self._subscribers.add(changed)
        try:
            yield self.state()
            while True:
                await _wait_any(changed, stop_event)
                if stop_event is not None and stop_event.is_set():
                    return
                changed.clear()
                yield self.state()
        finally:
            self._subscribers.discard(changed)

    def _filtered(self, search: str | None):
        text = self._search if search is None else search
        return self.views.filtered_coins(self.market_store.snapshot.coins, text)

    def _on_change(self) -> None:
        self._revision += 1
        loop = self._loop
        if loop is None or _running_loop() is loop:
            self._wake_subscribers()
        else:
            # Commands handled in a worker thread wake subscribers on their loop.
            loop.call_soon_threadsafe(self._wake_subscribers)

    def _wake_subscribers(self) -> None:
        for subscriber in list(self._subscribers):
            subscriber.set()


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None

async def _wait_any(*events: asyncio.Event | None) -> None:
    """Return as soon as any of the given events is set."""
    waiters = [asyncio.ensure_future(e.wait()) for e in events if e is not None]
    try:
        await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for waiter in waiters:
            waiter.cancel()
        await asyncio.gather(*waiters, return_exceptions=True)
