"""Transient banner message that clears itself after a fixed delay."""
import asyncio

from crypto_tracker.stores.base import ChangeNotifier


class TransientMessage(ChangeNotifier):
    """Holds at most one message; each post() restarts the clear timer.

    post() must be called from the running event loop.
    """

    def __init__(self, ttl: float = 3.0) -> None:
        super().__init__()
        self._ttl = ttl
        self._message: str | None = None
        self._handle: asyncio.TimerHandle | None = None

    @property
    def message(self) -> str | None:
        return self._message

    @property
    def ttl(self) -> float:
        return self._ttl

    def post(self, message: str) -> None:
        self._cancel_timer()
        self._message = message
        self._handle = asyncio.get_running_loop().call_later(self._ttl, self.clear)
        self._notify()

    def clear(self) -> None:
        self._cancel_timer()
        if self._message is None:
            return
        self._message = None
        self._notify()

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
