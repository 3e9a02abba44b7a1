"""CoinGecko market data provider for cryptocurrencies."""
import logging

import httpx
from pydantic import ValidationError

from crypto_tracker.providers.coingecko.models import (
    CoinGeckoMarketChartParams, CoinGeckoMarketsParams)
from crypto_tracker.providers.core import (MarketProviderABC, date_label,
                                           normalize_crypto_id,
                                           timestamp_from_ms)
from crypto_tracker.schemas import Coin, PricePoint, PriceSeries

logger = logging.getLogger(__name__)


class CoinGeckoProvider(MarketProviderABC):
    """Market data provider for cryptocurrencies via CoinGecko API.

    Uses CoinGecko IDs as coin identifiers (e.g., "bitcoin", "ethereum", "solana").
    See https://api.coingecko.com/api/v3/coins/list for all available IDs.
    """

    BASE_URL = "https://api.coingecko.com/api/v3"
    PRO_BASE_URL = "https://pro-api.coingecko.com/api/v3"

    def __init__(
        self,
        api_key: str | None = None,
        use_pro_api: bool = False,
        vs_currency: str = "usd",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the CoinGecko provider.

        Args:
            api_key: CoinGecko API key. Switches to the Pro API when set.
            use_pro_api: Whether to use the Pro API endpoint.
            vs_currency: Quote currency for prices and market caps.
            timeout: HTTP timeout in seconds.
            client: Preconfigured client (tests pass one with a mock transport).
        """
        self._api_key = api_key
        self._use_pro_api = use_pro_api or bool(self._api_key)
        self._vs_currency = vs_currency

        if client is not None:
            self._client = client
            return

        headers: dict[str, str] = {"Accept": "application/json"}
        if self._api_key:
            headers["x-cg-pro-api-key"] = self._api_key

        base = self.PRO_BASE_URL if self._use_pro_api else self.BASE_URL
        self._client = httpx.AsyncClient(base_url=base, headers=headers, timeout=timeout)

    async def get_top_coins(self, limit: int = 30) -> list[Coin]:
        """Fetch top coins by market cap (single API call).

        Rows that do not parse as a Coin are skipped; a payload that is not a
        list raises ValueError.
        """
        params = CoinGeckoMarketsParams(
            vs_currency=self._vs_currency, per_page=limit
        ).model_dump()
        response = await self._client.get("/coins/markets", params=params)
        response.raise_for_status()
        data = response.json()

        if not isinstance(data, list):
            raise ValueError("Unexpected /coins/markets payload")

        coins: list[Coin] = []
        for item in data:
            try:
                coins.append(Coin.model_validate(item))
            except ValidationError:
                logger.warning("Skipping malformed market row: %r", item)
        return coins

    async def get_price_series(self, coin_id: str, days: int = 7) -> PriceSeries:
        """Fetch a daily price series for a cryptocurrency.

        Args:
            coin_id: CoinGecko ID (e.g., "bitcoin", "ethereum").
            days: Number of days of history.

        Returns:
            PriceSeries ordered by timestamp.
        """
        coin_id = normalize_crypto_id(coin_id)
        params = CoinGeckoMarketChartParams(
            vs_currency=self._vs_currency, days=days
        ).model_dump()
        response = await self._client.get(
            f"/coins/{coin_id}/market_chart",
            params=params,
        )
        response.raise_for_status()
        data = response.json()

        if not isinstance(data, dict):
            raise ValueError(f"Unexpected market_chart payload for '{coin_id}'")

        points = []
        for ts_ms, price in (p[:2] for p in data.get("prices", [])):
            ts = timestamp_from_ms(float(ts_ms))
            points.append(PricePoint(timestamp=ts, label=date_label(ts), price=float(price)))
        points.sort(key=lambda p: p.timestamp)

        return PriceSeries(coin_id=coin_id, points=tuple(points))

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
