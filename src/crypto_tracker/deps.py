"""FastAPI dependency injection: app.state holds the Dashboard; Depends() resolves it.

The lifespan (main.py) builds the Dashboard from the DI container once and
attaches it to app.state; these getters are used by Depends().
"""
from typing import Annotated

from fastapi import Depends, Request, WebSocket

from crypto_tracker.services import Dashboard


def get_dashboard(request: Request) -> Dashboard:
    """Resolve the Dashboard from app.state (created at startup)."""
    return request.app.state.dashboard


def get_dashboard_ws(websocket: WebSocket) -> Dashboard:
    """Resolve the Dashboard for WebSocket routes."""
    return websocket.scope["app"].state.dashboard


# Type aliases for route injection
DashboardDep = Annotated[Dashboard, Depends(get_dashboard)]
DashboardWs = Annotated[Dashboard, Depends(get_dashboard_ws)]
