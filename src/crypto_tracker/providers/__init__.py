"""Market data providers.

CoinGeckoProvider implements MarketProviderABC over the public CoinGecko REST
API. Stores depend on the ABC so tests can swap in an in-process provider.

Example:
    async with CoinGeckoProvider() as provider:
        coins = await provider.get_top_coins(30)
        series = await provider.get_price_series("bitcoin", days=7)
"""
from crypto_tracker.providers.coingecko import CoinGeckoProvider
from crypto_tracker.providers.core import MarketProviderABC

__all__ = ["CoinGeckoProvider", "MarketProviderABC"]
