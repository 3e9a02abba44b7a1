"""Whole-dashboard routes: rendered state, tab selection, search and live stream."""
from fastapi import APIRouter, WebSocket

from crypto_tracker.deps import DashboardDep, DashboardWs
from crypto_tracker.schemas import ActiveView, DashboardState, SearchIn
from crypto_tracker.services.utils import handle_websocket_stream

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardState)
async def get_dashboard_state(dashboard: DashboardDep) -> DashboardState:
    """Get everything needed to render the current frame."""
    return dashboard.state()


@router.put("/view/{view}")
async def select_view(view: ActiveView, dashboard: DashboardDep) -> dict[str, str]:
    """Switch the active tab."""
    return {"active_view": dashboard.select_view(view).value}


@router.put("/search")
async def set_search(body: SearchIn, dashboard: DashboardDep) -> dict[str, str]:
    """Set the search text applied to the market and favorites tabs."""
    dashboard.set_search(body.text)
    return {"search": dashboard.search}


@router.websocket("/stream")
async def stream(websocket: WebSocket, dashboard: DashboardWs) -> None:
    """Push a DashboardState frame on connect and after every change."""
    await handle_websocket_stream(websocket, dashboard)
