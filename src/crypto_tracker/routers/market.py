"""Market tab routes: the filtered coin list and manual refresh."""
import logging

from fastapi import APIRouter, Query

from crypto_tracker.deps import DashboardDep
from crypto_tracker.schemas import MarketRow

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/market", tags=["market"])


@router.get("", response_model=list[MarketRow])
async def get_market(
    dashboard: DashboardDep,
    search: str | None = Query(default=None, description="Case-insensitive name filter"),
) -> list[MarketRow]:
    """Get the current snapshot filtered by name, with favorite flags.

    Without `search`, the dashboard's current search text is used.
    """
    return dashboard.market_rows(search)


@router.post("/refresh")
async def refresh_market(dashboard: DashboardDep) -> dict[str, object]:
    """Refresh the snapshot now, outside the periodic schedule.

    A failed fetch keeps the previous snapshot; the response says whether a
    new snapshot was applied.
    """
    logger.info("Manual market refresh requested")
    applied = await dashboard.refresh()
    return {
        "status": "refreshed" if applied else "unchanged",
        "generation": dashboard.market_store.snapshot.generation,
    }
