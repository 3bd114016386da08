"""Fixed-interval polling loop."""
from __future__ import annotations

import asyncio
import enum
import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class SchedulerState(enum.Enum):
    IDLE = "idle"
    POLLING = "polling"


class Scheduler:
    """Run ``job`` immediately, then every ``interval`` seconds until stopped.

    A failing cycle is logged and the next tick still runs. Cycles never
    overlap: the sleep starts only after the previous cycle finished.
    ``sleep`` is injectable so tests can drive the loop without waiting.
    """

    def __init__(
        self,
        job: Callable[[], Awaitable[Any]],
        interval: float,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        stop_event: asyncio.Event | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("Interval must be positive")
        self._job = job
        self.interval = interval
        self._sleep = sleep
        self.stop_event = stop_event or asyncio.Event()
        self.state = SchedulerState.IDLE
        self.cycles = 0
        self.failures = 0

    def stop(self) -> None:
        self.stop_event.set()

    async def run_once(self) -> None:
        self.cycles += 1
        try:
            await self._job()
        except Exception:
            self.failures += 1
            logger.exception("Error in monitoring cycle %d", self.cycles)

    async def run(self) -> None:
        logger.info("Starting monitoring loop (every %s seconds)", self.interval)
        while not self.stop_event.is_set():
            await self.run_once()
            self.state = SchedulerState.POLLING
            if self.stop_event.is_set():
                break
            await self._wait()
        logger.info("Monitoring loop stopped after %d cycles", self.cycles)

    async def _wait(self) -> None:
        """Sleep for one interval, waking early if stopped."""
        sleeper = asyncio.ensure_future(self._sleep(self.interval))
        stopper = asyncio.ensure_future(self.stop_event.wait())
        try:
            await asyncio.wait({sleeper, stopper}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sleeper, stopper):
                if not task.done():
                    task.cancel()
