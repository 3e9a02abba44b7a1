"""DI container. The app lifespan resolves Container.dashboard once and stores it on app.state."""
from dependency_injector import containers, providers

from crypto_tracker.config import Settings
from crypto_tracker.db import SQLModelStorage, create_db_engine
from crypto_tracker.providers import CoinGeckoProvider
from crypto_tracker.services import Dashboard
from crypto_tracker.stores import (HistorySeriesCache, MarketDataStore,
                                   TransientMessage, UserStateStore)


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings.from_env)

    market_provider = providers.Singleton(
        CoinGeckoProvider,
        api_key=settings.provided.COINGECKO_API_KEY,
        vs_currency=settings.provided.VS_CURRENCY,
        timeout=settings.provided.HTTP_TIMEOUT_SECONDS,
    )

    db_engine = providers.Singleton(
        create_db_engine,
        settings.provided.DATABASE_URL,
        echo=settings.provided.SQL_ECHO,
    )
    storage = providers.Singleton(SQLModelStorage, db_engine)

    market_store = providers.Singleton(
        MarketDataStore, market_provider, limit=settings.provided.TOP_COINS
    )
    history_cache = providers.Singleton(
        HistorySeriesCache, market_provider, days=settings.provided.HISTORY_DAYS
    )
    alert_banner = providers.Singleton(
        TransientMessage, ttl=settings.provided.ALERT_BANNER_SECONDS
    )
    user_state = providers.Singleton(UserStateStore, storage, banner=alert_banner)

    dashboard = providers.Singleton(
        Dashboard,
        market_store,
        history_cache,
        user_state,
        refresh_interval=settings.provided.REFRESH_INTERVAL_SECONDS,
    )


def init_container(settings: Settings | None = None) -> Container:
    """Create the container, optionally pinned to explicit settings."""
    container = Container()
    if settings is not None:
        container.settings.override(providers.Object(settings))
    return container
