"""Price alert routes. Thresholds are advisory and only announced in the banner."""
from fastapi import APIRouter, HTTPException

from crypto_tracker.deps import DashboardDep
from crypto_tracker.providers.core import normalize_crypto_id
from crypto_tracker.schemas import AlertIn

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("")
async def get_alerts(dashboard: DashboardDep) -> dict[str, object]:
    """Get the thresholds set in this session and the current banner message."""
    return {
        "alerts": dashboard.user_state.alerts,
        "message": dashboard.user_state.alert_message,
    }


@router.post("/{coin_id}")
async def set_alert(coin_id: str, body: AlertIn, dashboard: DashboardDep) -> dict[str, object]:
    """Set the alert threshold for a coin, replacing any previous one.

    Alerts are not persisted; this stays on the event loop, which runs the
    banner timer.
    """
    coin_id = normalize_crypto_id(coin_id)
    if not dashboard.set_alert(coin_id, body.price):
        raise HTTPException(status_code=422, detail=f"Price {body.price!r} is not a number")
    return {
        "coin_id": coin_id,
        "price": dashboard.user_state.alerts[coin_id],
        "message": dashboard.user_state.alert_message,
    }
