"""Favorites tab routes."""
from fastapi import APIRouter, Query

from crypto_tracker.deps import DashboardDep
from crypto_tracker.providers.core import normalize_crypto_id
from crypto_tracker.schemas import Coin

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=list[Coin])
async def get_favorites(
    dashboard: DashboardDep,
    search: str | None = Query(default=None),
) -> list[Coin]:
    """Get favorite coins present in the filtered snapshot, in market-cap order."""
    return dashboard.favorite_coins(search)


@router.post("/{coin_id}/toggle")
def toggle_favorite(coin_id: str, dashboard: DashboardDep) -> dict[str, object]:
    """Mark or unmark a coin as favorite."""
    coin_id = normalize_crypto_id(coin_id)
    favorite = dashboard.toggle_favorite(coin_id)
    return {"coin_id": coin_id, "favorite": favorite}
