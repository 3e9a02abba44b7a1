"""CoinGecko provider."""
from crypto_tracker.providers.coingecko.coin_gecko_provider import CoinGeckoProvider

__all__ = ["CoinGeckoProvider"]
