"""WebSocket stream handling: push DashboardState frames to a client."""
import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Protocol

from fastapi import WebSocket, WebSocketDisconnect

from crypto_tracker.schemas import DashboardState

logger = logging.getLogger(__name__)


class StateStreamable(Protocol):
    """Anything that can stream DashboardState frames until stop_event is set."""

    def updates(self, stop_event: asyncio.Event | None = None) -> AsyncIterator[DashboardState]:
        ...


async def handle_websocket_stream(websocket: WebSocket, source: StateStreamable) -> None:
    """Accept the WebSocket and send a frame after every state change.

    Uses a per-connection stop_event; a receive loop watches for the client
    going away so the stream stops even when no frames are being sent.
    """
    await websocket.accept()
    stop_event = asyncio.Event()

    async def watch_disconnect() -> None:
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            logger.debug("Stream client disconnected")
        finally:
            stop_event.set()

    watcher = asyncio.create_task(watch_disconnect())
    try:
        async for state in source.updates(stop_event):
            await websocket.send_json(state.model_dump(mode="json"))
    except WebSocketDisconnect:
        logger.debug("Stream client disconnected")
    except Exception as exc:
        logger.exception("Stream error: %s", exc)
        try:
            await websocket.close(code=1011, reason="Stream error")
        except RuntimeError:
            logger.debug("WebSocket already closed")
    finally:
        stop_event.set()
        watcher.cancel()
        await asyncio.gather(watcher, return_exceptions=True)
