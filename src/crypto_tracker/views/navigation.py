"""Active view state machine and charted coins."""
import logging

from crypto_tracker.schemas import ActiveView
from crypto_tracker.stores.base import ChangeNotifier

logger = logging.getLogger(__name__)


class ViewSelector(ChangeNotifier):
    """Tracks the active tab (initially market) and the coins opened as charts.

    The view only changes through select() or show_chart(), which always
    switches to the charts tab.
    """

    def __init__(self) -> None:
        super().__init__()
        self._active = ActiveView.MARKET
        self._charted: list[str] = []

    @property
    def active(self) -> ActiveView:
        return self._active

    @property
    def charted(self) -> tuple[str, ...]:
        return tuple(self._charted)

    def select(self, view: ActiveView | str) -> ActiveView:
        view = ActiveView(view)
        if view is not self._active:
            logger.debug("View %s -> %s", self._active.value, view.value)
            self._active = view
            self._notify()
        return self._active

    def show_chart(self, coin_id: str) -> None:
        if coin_id not in self._charted:
            self._charted.append(coin_id)
        self._active = ActiveView.CHARTS
        self._notify()
