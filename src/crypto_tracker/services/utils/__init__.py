"""Service helpers."""
from crypto_tracker.services.utils.stream_handler import (
    StateStreamable, handle_websocket_stream)

__all__ = ["StateStreamable", "handle_websocket_stream"]
