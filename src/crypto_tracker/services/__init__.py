"""Service layer: the dashboard application context."""
from crypto_tracker.services.dashboard import Dashboard

__all__ = ["Dashboard"]
