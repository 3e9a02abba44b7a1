"""Models for CoinGecko provider (API params)."""
from pydantic import BaseModel


class CoinGeckoMarketsParams(BaseModel):
    """Params for /coins/markets (get_top_coins)."""

    vs_currency: str = "usd"
    order: str = "market_cap_desc"
    per_page: int = 30
    page: int = 1
    sparkline: str = "false"


class CoinGeckoMarketChartParams(BaseModel):
    """Params for /coins/{id}/market_chart (get_price_series)."""

    vs_currency: str = "usd"
    days: int = 7
    interval: str = "daily"
