"""Portfolio, favorites and alerts entered by the user."""
import logging

from crypto_tracker.db.storage import KeyValueStorage
from crypto_tracker.stores.base import ChangeNotifier
from crypto_tracker.stores.notifications import TransientMessage
from crypto_tracker.stores.persistence import (FAVORITES_KEY, PORTFOLIO_KEY,
                                               dump_favorites, dump_portfolio,
                                               format_number, load_favorites,
                                               load_portfolio, parse_number)

logger = logging.getLogger(__name__)


class UserStateStore(ChangeNotifier):
    """User-editable state.

    Portfolio and favorites are written to storage synchronously with every
    change, each under its own key. Alerts and the alert banner live only for
    the running session.
    """

    def __init__(self, storage: KeyValueStorage, banner: TransientMessage | None = None) -> None:
        super().__init__()
        self._storage = storage
        self._portfolio = load_portfolio(storage.get_item(PORTFOLIO_KEY))
        self._favorites = load_favorites(storage.get_item(FAVORITES_KEY))
        self._alerts: dict[str, float] = {}
        self._banner = banner or TransientMessage()
        self._banner.add_listener(self._notify)

    @property
    def portfolio(self) -> dict[str, float]:
        return dict(self._portfolio)

    @property
    def favorites(self) -> tuple[str, ...]:
        return tuple(self._favorites)

    @property
    def alerts(self) -> dict[str, float]:
        return dict(self._alerts)

    @property
    def alert_message(self) -> str | None:
        return self._banner.message

    def toggle_favorite(self, coin_id: str) -> bool:
        """Add coin_id to favorites if absent, remove it if present.

        The new list is written before it replaces the in-memory one, so a
        failed write leaves both unchanged.

        Returns:
            True if the coin is a favorite afterwards.
        """
        if coin_id in self._favorites:
            favorites = [fav for fav in self._favorites if fav != coin_id]
        else:
            favorites = [*self._favorites, coin_id]
        self._storage.set_item(FAVORITES_KEY, dump_favorites(favorites))
        self._favorites = favorites
        self._notify()
        return coin_id in favorites

    def add_to_portfolio(self, coin_id: str, amount: str | float) -> bool:
        """Add amount to the holding for coin_id.

        Non-numeric input, or an amount that would take the holding below
        zero, is ignored: nothing changes and nothing is written. A failed
        write propagates and leaves the in-memory portfolio unchanged.

        Returns:
            True if the holding was updated.
        """
        number = parse_number(amount)
        if number is None:
            logger.info("Ignoring non-numeric portfolio amount for %s: %r", coin_id, amount)
            return False
        held = self._portfolio.get(coin_id, 0.0) + number
        if held < 0:
            logger.info("Ignoring amount %s for %s: holding would be negative", number, coin_id)
            return False
        portfolio = {**self._portfolio, coin_id: held}
        self._storage.set_item(PORTFOLIO_KEY, dump_portfolio(portfolio))
        self._portfolio = portfolio
        self._notify()
        return True

    def set_alert(self, coin_id: str, price: str | float, display_name: str | None = None) -> bool:
        """Record a threshold for coin_id and post a banner about it.

        The latest threshold per coin wins. Thresholds are advisory and not
        checked against live prices.

        Returns:
            True if the alert was recorded.
        """
        threshold = parse_number(price)
        if threshold is None:
            logger.info("Ignoring non-numeric alert price for %s: %r", coin_id, price)
            return False
        self._alerts[coin_id] = threshold
        name = f"{display_name} ({coin_id})" if display_name else coin_id
        self._banner.post(f"Alert set for {name} at ${format_number(threshold)}")
        return True
