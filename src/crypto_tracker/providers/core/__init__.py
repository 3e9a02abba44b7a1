"""Core provider abstractions."""
from crypto_tracker.providers.core.exceptions import PROVIDER_EXCEPTIONS
from crypto_tracker.providers.core.market_provider_abc import MarketProviderABC
from crypto_tracker.providers.core.utils import (date_label,
                                                 normalize_crypto_id,
                                                 timestamp_from_ms)

__all__ = [
    "MarketProviderABC",
    "PROVIDER_EXCEPTIONS",
    "date_label",
    "normalize_crypto_id",
    "timestamp_from_ms",
]
