"""
Auto-refresh scheduler.

Two asyncio tasks share one configured interval:
- the fetch task sleeps `interval` seconds, resets the countdown and runs the
  tick callback (a silent catalog reconcile);
- the countdown task ticks once a second from `interval` down to 1 and wraps.

The scheduler is active only while connected with auto refresh on. Any change
to the interval re-arms both tasks together.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from core.config import REFRESH_INTERVALS, settings

logger = logging.getLogger(__name__)


class PollingScheduler:
    def __init__(
        self,
        on_tick: Callable[[], Awaitable[object]],
        interval: int = settings.refresh_interval_seconds,
        auto_refresh: bool = settings.auto_refresh,
        on_deactivate: Optional[Callable[[], None]] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if interval not in REFRESH_INTERVALS:
            raise ValueError(f"interval must be one of {list(REFRESH_INTERVALS)}")
        self._on_tick = on_tick
        self._on_deactivate = on_deactivate
        self._sleep = sleep

        self.interval = interval
        self.auto_refresh = auto_refresh
        self.countdown = interval
        self.connected = False

        self._fetch_task: Optional[asyncio.Task] = None
        self._countdown_task: Optional[asyncio.Task] = None

    @property
    def state(self) -> str:
        return "active" if self._fetch_task is not None else "idle"

    # ----------------------------
    # Controls
    # ----------------------------

    def set_connected(self, connected: bool) -> None:
        self.connected = connected
        self._sync_state()

    def set_auto_refresh(self, enabled: bool) -> None:
        self.auto_refresh = enabled
        self._sync_state()

    def set_interval(self, interval: int) -> None:
        if interval not in REFRESH_INTERVALS:
            raise ValueError(f"interval must be one of {list(REFRESH_INTERVALS)}")
        self.interval = interval
        self.countdown = interval
        if self.state == "active":
            self._disarm()
            self._arm()

    def tick_countdown(self) -> int:
        self.countdown = self.interval if self.countdown <= 1 else self.countdown - 1
        return self.countdown

    async def aclose(self) -> None:
        tasks = [t for t in (self._fetch_task, self._countdown_task) if t is not None]
        self._disarm()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # ----------------------------
    # Internals
    # ----------------------------

    def _sync_state(self) -> None:
        should_run = self.connected and self.auto_refresh
        if should_run and self.state == "idle":
            self._arm()
            logger.info("auto refresh active every %ss", self.interval)
        elif not should_run and self.state == "active":
            self._disarm()
            if self._on_deactivate is not None:
                self._on_deactivate()
            logger.info("auto refresh idle")

    def _arm(self) -> None:
        loop = asyncio.get_running_loop()
        self.countdown = self.interval
        self._fetch_task = loop.create_task(self._fetch_loop(self.interval))
        self._countdown_task = loop.create_task(self._countdown_loop())

    def _disarm(self) -> None:
        for task in (self._fetch_task, self._countdown_task):
            if task is not None:
                task.cancel()
        self._fetch_task = None
        self._countdown_task = None

    async def _fetch_loop(self, interval: int) -> None:
        while True:
            await self._sleep(interval)
            self.countdown = interval
            try:
                await self._on_tick()
            except Exception:
                # A failed background tick must not stop the schedule.
                logger.exception("scheduled refresh failed")

    async def _countdown_loop(self) -> None:
        while True:
            await self._sleep(1)
            self.tick_countdown()
