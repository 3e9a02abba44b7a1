"""Environment-driven settings for the crypto tracker."""
import os
from dataclasses import dataclass


def parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_int(value: str | None, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    return int(value)


def parse_float(value: str | None, default: float) -> float:
    if value is None or value.strip() == "":
        return default
    return float(value)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration. Build with Settings.from_env() or pass values directly in tests."""

    COINGECKO_API_KEY: str | None = None
    DATABASE_URL: str = "sqlite:///./crypto_tracker.db"
    SQL_ECHO: bool = False
    REFRESH_INTERVAL_SECONDS: float = 60.0
    TOP_COINS: int = 30
    VS_CURRENCY: str = "usd"
    HISTORY_DAYS: int = 7
    ALERT_BANNER_SECONDS: float = 3.0
    HTTP_TIMEOUT_SECONDS: float = 10.0
    LOG_LEVEL: str = "INFO"

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            COINGECKO_API_KEY=os.getenv("COINGECKO_API_KEY") or None,
            DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./crypto_tracker.db"),
            SQL_ECHO=parse_bool(os.getenv("SQL_ECHO"), False),
            REFRESH_INTERVAL_SECONDS=parse_float(os.getenv("REFRESH_INTERVAL_SECONDS"), 60.0),
            TOP_COINS=parse_int(os.getenv("TOP_COINS"), 30),
            VS_CURRENCY=os.getenv("VS_CURRENCY", "usd"),
            HISTORY_DAYS=parse_int(os.getenv("HISTORY_DAYS"), 7),
            ALERT_BANNER_SECONDS=parse_float(os.getenv("ALERT_BANNER_SECONDS"), 3.0),
            HTTP_TIMEOUT_SECONDS=parse_float(os.getenv("HTTP_TIMEOUT_SECONDS"), 10.0),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
