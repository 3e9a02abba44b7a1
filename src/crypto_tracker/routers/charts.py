"""Chart tab routes."""
from fastapi import APIRouter, HTTPException

from crypto_tracker.deps import DashboardDep
from crypto_tracker.schemas import ChartPanel, PriceSeries

router = APIRouter(prefix="/charts", tags=["charts"])


@router.get("", response_model=list[ChartPanel])
async def get_charts(dashboard: DashboardDep) -> list[ChartPanel]:
    """Get the opened charts; `series` is null while a chart is still loading."""
    return dashboard.chart_panels()


@router.post("/{coin_id}", response_model=list[ChartPanel])
async def show_chart(coin_id: str, dashboard: DashboardDep) -> list[ChartPanel]:
    """Open a coin's chart and switch to the charts tab.

    The series is fetched in the background on first request; the response
    does not wait for it.
    """
    dashboard.show_chart(coin_id)
    return dashboard.chart_panels()


@router.get("/{coin_id}/series", response_model=PriceSeries)
async def get_series(coin_id: str, dashboard: DashboardDep) -> PriceSeries:
    """Open a coin's chart and wait for its 7-day daily series."""
    series = await dashboard.load_chart(coin_id)
    if series is None:
        raise HTTPException(status_code=502, detail=f"Price history for '{coin_id}' is unavailable")
    return series
