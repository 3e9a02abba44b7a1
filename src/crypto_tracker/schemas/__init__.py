"""Pydantic schemas for market data, user state views and the rendered dashboard."""
from datetime import datetime, timezone
from enum import Enum

from pydantic import (BaseModel, ConfigDict, Field, StrictFloat, StrictInt,
                      StrictStr, computed_field)


class Coin(BaseModel):
    """One row of a market snapshot. Field names follow the CoinGecko wire format."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    image: str | None = None
    current_price: float
    price_change_percentage_24h: float | None = None
    market_cap: float | None = None


class MarketSnapshot(BaseModel):
    """Full set of coins from one refresh, market-cap descending as delivered."""

    model_config = ConfigDict(frozen=True)

    coins: tuple[Coin, ...] = ()
    generation: int = 0
    fetched_at: datetime | None = None

    def find(self, coin_id: str) -> Coin | None:
        """Return the coin with the given id, or None if it is not in this snapshot."""
        for coin in self.coins:
            if coin.id == coin_id:
                return coin
        return None


class PricePoint(BaseModel):
    """A single (date label, price) point of a historical series."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    label: str
    price: float


class PriceSeries(BaseModel):
    """Historical prices for one coin, ascending by timestamp."""

    model_config = ConfigDict(frozen=True)

    coin_id: str
    points: tuple[PricePoint, ...] = ()

    @computed_field
    @property
    def title(self) -> str:
        """Dataset label shown above the chart, e.g. "BITCOIN Price"."""
        return f"{self.coin_id.upper()} Price"


class ActiveView(str, Enum):
    """Tabs of the dashboard."""

    MARKET = "market"
    PORTFOLIO = "portfolio"
    FAVORITES = "favorites"
    CHARTS = "charts"


class MarketRow(BaseModel):
    coin: Coin
    is_favorite: bool = False


class PortfolioRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    coin: Coin
    amount: float
    value: float


class PortfolioView(BaseModel):
    """Priced holdings plus the ids of holdings missing from the current snapshot.

    Instances are shared between callers of the memoized view.
    """

    model_config = ConfigDict(frozen=True)

    total_value: float = 0.0
    rows: tuple[PortfolioRow, ...] = ()
    unpriced: tuple[str, ...] = ()


class ChartPanel(BaseModel):
    """A charted coin; series is None while its history is still loading."""

    coin_id: str
    name: str | None = None
    series: PriceSeries | None = None


class DashboardState(BaseModel):
    """Everything the presentation layer needs to render one frame."""

    active_view: ActiveView
    loading: bool
    search: str = ""
    alert_message: str | None = None
    alerts: dict[str, float] = Field(default_factory=dict)
    market: list[MarketRow] = Field(default_factory=list)
    portfolio: PortfolioView = Field(default_factory=PortfolioView)
    favorites: list[Coin] = Field(default_factory=list)
    charts: list[ChartPanel] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HoldingIn(BaseModel):
    """Body of an add-to-portfolio command; numbers or numeric strings, never booleans."""

    amount: StrictStr | StrictFloat | StrictInt


class AlertIn(BaseModel):
    """Body of a set-alert command."""

    price: StrictStr | StrictFloat | StrictInt


class SearchIn(BaseModel):
    text: str = ""


__all__ = [
    "ActiveView",
    "AlertIn",
    "ChartPanel",
    "Coin",
    "DashboardState",
    "HoldingIn",
    "MarketRow",
    "MarketSnapshot",
    "PortfolioRow",
    "PortfolioView",
    "PricePoint",
    "PriceSeries",
    "SearchIn",
]
