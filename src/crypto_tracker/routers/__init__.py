"""API routers for the dashboard.

Includes routes for:
- /market - Filtered snapshot and manual refresh
- /portfolio - Holdings and valuation
- /favorites - Favorite coins
- /alerts - Advisory price thresholds
- /charts - Historical price charts
- /dashboard, /view, /search, /stream - Whole-dashboard state and live updates
"""
from crypto_tracker.routers.alerts import router as alerts_router
from crypto_tracker.routers.charts import router as charts_router
from crypto_tracker.routers.dashboard import router as dashboard_router
from crypto_tracker.routers.favorites import router as favorites_router
from crypto_tracker.routers.market import router as market_router
from crypto_tracker.routers.portfolio import router as portfolio_router

__all__ = [
    "alerts_router",
    "charts_router",
    "dashboard_router",
    "favorites_router",
    "market_router",
    "portfolio_router",
]
