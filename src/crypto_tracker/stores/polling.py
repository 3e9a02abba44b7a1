"""Cancellable repeating task for periodic refreshes."""
import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Run an async callable every `interval` seconds between start() and stop().

    The first run happens immediately on start(). Each run is launched as its
    own task, so a slow or hung run never delays the next tick; runs still in
    flight are cancelled by stop().
    """

    def __init__(
        self,
        func: Callable[[], Awaitable[object]],
        interval: float,
        *,
        name: str = "periodic",
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._func = func
        self._interval = interval
        self._name = name
        self._stop_event: asyncio.Event | None = None
        self._task: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()
        self._ticks = 0

    @property
    def running(self) -> bool:
        return bool(self._task and not self._task.done() and self._stop_event
                    and not self._stop_event.is_set())

    def start(self) -> None:
        """Start the loop on the running event loop. No-op if already running."""
        if self.running:
            logger.warning("%s already started", self._name)
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._loop(self._stop_event), name=self._name)
        logger.info("%s started | interval=%ss", self._name, self._interval)

    async def stop(self) -> None:
        """Stop the loop and cancel runs still in flight."""
        if self._task is None:
            return
        if self._stop_event is not None:
            self._stop_event.set()
        tasks = [self._task, *self._inflight]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._task = None
        self._stop_event = None
        self._inflight.clear()
        logger.info("%s stopped", self._name)

    async def _loop(self, stop_event: asyncio.Event) -> None:
        next_tick = time.monotonic()  # run immediately once

        while not stop_event.is_set():
            now = time.monotonic()
            if now < next_tick:
                try:
                    await asyncio.wait_for(stop_event.wait(), timeout=next_tick - now)
                except asyncio.TimeoutError:
                    pass
                continue

            self._launch()
            next_tick += self._interval
            if next_tick < time.monotonic():
                next_tick = time.monotonic() + self._interval

    def _launch(self) -> None:
        self._ticks += 1
        task = asyncio.create_task(self._func(), name=f"{self._name}:{self._ticks}")
        self._inflight.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("%s run failed", self._name, exc_info=exc)
