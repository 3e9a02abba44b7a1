"""Main module for the crypto tracker dashboard."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from crypto_tracker.config import get_settings
from crypto_tracker.container import Container, init_container
from crypto_tracker.routers import (alerts_router, charts_router,
                                    dashboard_router, favorites_router,
                                    market_router, portfolio_router)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Build the dashboard at startup and start polling; stop and close on shutdown."""
    container: Container = fastapi_app.state.container
    dashboard = container.dashboard()
    fastapi_app.state.dashboard = dashboard
    await dashboard.start()

    yield

    await dashboard.stop()
    try:
        await container.market_provider().close()
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Error closing market provider: %s", exc)


def create_app(container: Container | None = None) -> FastAPI:
    """Create the FastAPI app around a DI container (a fresh one by default)."""
    fastapi_app = FastAPI(
        title="Crypto Tracker",
        description="Market snapshot, portfolio, favorites, alerts and charts for the top coins",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.container = container or init_container()

    fastapi_app.include_router(dashboard_router)
    fastapi_app.include_router(market_router)
    fastapi_app.include_router(portfolio_router)
    fastapi_app.include_router(favorites_router)
    fastapi_app.include_router(alerts_router)
    fastapi_app.include_router(charts_router)

    @fastapi_app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return fastapi_app


app = create_app()


def run():
    """Run the dashboard locally (uvicorn)."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("crypto_tracker.main:app", host="127.0.0.1", port=8001)
