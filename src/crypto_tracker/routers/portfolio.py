"""Portfolio tab routes."""
from fastapi import APIRouter, HTTPException

from crypto_tracker.deps import DashboardDep
from crypto_tracker.schemas import HoldingIn, PortfolioView

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioView)
async def get_portfolio(dashboard: DashboardDep) -> PortfolioView:
    """Get priced holdings and the total value.

    Holdings for coins missing from the current snapshot are listed under
    `unpriced` and contribute nothing to the total.
    """
    return dashboard.portfolio()


@router.post("/{coin_id}", response_model=PortfolioView)
def add_holding(coin_id: str, body: HoldingIn, dashboard: DashboardDep) -> PortfolioView:
    """Add an amount to the holding for a coin.

    Args:
        coin_id: CoinGecko ID (e.g., "bitcoin").
        body: Amount to add; numeric strings are accepted.

    Runs in the threadpool: the holding is written to local storage.
    """
    if not dashboard.add_to_portfolio(coin_id, body.amount):
        raise HTTPException(
            status_code=422,
            detail=f"Amount {body.amount!r} is not a number or would make the holding negative",
        )
    return dashboard.portfolio()
