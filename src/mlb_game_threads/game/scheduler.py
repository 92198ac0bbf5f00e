"""Refresh timers for game controllers.

A controller only needs three things from its timer: start ticking, change
the cadence, and stop. ``IntervalScheduler`` ticks on wall-clock minute
boundaries for production; ``ReplayScheduler`` replays a fixed list of feed
timecodes for development, one per tick, and then finishes on its own.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timedelta
from typing import Protocol

logger = logging.getLogger(__name__)

type Tick = Callable[[str | None], Awaitable[None]]
type OnFinished = Callable[[], None]
type Sleep = Callable[[float], Awaitable[None]]


class RefreshScheduler(Protocol):
    @property
    def is_active(self) -> bool: ...

    @property
    def interval_minutes(self) -> int: ...

    def start(self, tick: Tick, on_finished: OnFinished | None = None) -> None: ...

    def reschedule(self, interval_minutes: int) -> None: ...

    def cancel(self) -> None: ...


def seconds_until_next_tick(now: datetime, interval_minutes: int) -> float:
    """Seconds from *now* to the next minute-of-hour that is a multiple of the interval.

    The recurrence restarts at the top of every hour, so a 7 minute interval
    fires at :00, :07, ... :56 and then :00 again.
    """
    if interval_minutes <= 0:
        msg = "interval must be positive"
        raise ValueError(msg)
    top_of_hour = now.replace(minute=0, second=0, microsecond=0)
    next_minute = (now.minute // interval_minutes + 1) * interval_minutes
    if next_minute >= 60:
        target = top_of_hour + timedelta(hours=1)
    else:
        target = top_of_hour + timedelta(minutes=next_minute)
    return (target - now).total_seconds()


class _TaskScheduler(ABC):
    """Runs the subclass's ``_run`` loop as one asyncio task per scheduler."""

    def __init__(self, interval_minutes: int, sleep: Sleep, name: str) -> None:
        self._interval = interval_minutes
        self._sleep = sleep
        self._name = name
        self._task: asyncio.Task[None] | None = None
        self._tick: Tick | None = None
        self._on_finished: OnFinished | None = None
        self._cancelled = False

    @property
    def interval_minutes(self) -> int:
        return self._interval

    @property
    def is_active(self) -> bool:
        return not self._cancelled and self._task is not None and not self._task.done()

    def start(self, tick: Tick, on_finished: OnFinished | None = None) -> None:
        if self._task is not None:
            msg = f"scheduler {self._name!r} already started"
            raise RuntimeError(msg)
        self._tick = tick
        self._on_finished = on_finished
        self._task = asyncio.create_task(self._run(), name=self._name)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        task = self._task
        # a tick that cancels its own timer finishes normally; the loop exits after it
        if task is not None and task is not asyncio.current_task():
            task.cancel()
        logger.debug("Scheduler %s cancelled", self._name)

    async def join(self) -> None:
        if self._task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await self._task

    async def _run_tick(self, timecode: str | None) -> None:
        tick = self._tick
        if tick is None:
            msg = f"scheduler {self._name!r} ticked before start"
            raise RuntimeError(msg)
        try:
            await tick(timecode)
        except Exception:
            logger.exception("Refresh tick failed for %s", self._name)

    @abstractmethod
    async def _run(self) -> None: ...


class IntervalScheduler(_TaskScheduler):
    def __init__(
        self,
        interval_minutes: int,
        *,
        name: str = "refresh",
        clock: Callable[[], datetime] = datetime.now,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        super().__init__(interval_minutes, sleep, name)
        self._clock = clock

    def reschedule(self, interval_minutes: int) -> None:
        logger.info("Rescheduling %s from every %d to every %d minutes", self._name, self._interval, interval_minutes)
        self._interval = interval_minutes
        task = self._task
        # the loop reads the interval before every sleep, so a tick may reschedule in place
        if task is None or task.done() or self._cancelled or task is asyncio.current_task():
            return
        task.cancel()
        self._task = asyncio.create_task(self._run(), name=self._name)

    async def _run(self) -> None:
        while not self._cancelled:
            await self._sleep(seconds_until_next_tick(self._clock(), self._interval))
            if self._cancelled:
                break
            await self._run_tick(None)


class ReplayScheduler(_TaskScheduler):
    """Pops one recorded timecode per tick until the queue is empty."""

    def __init__(
        self,
        timecodes: Sequence[str],
        *,
        pause_seconds: float = 5.0,
        name: str = "replay",
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        super().__init__(0, sleep, name)
        self._queue: deque[str] = deque(timecodes)
        self._pause_seconds = pause_seconds

    @property
    def remaining(self) -> int:
        return len(self._queue)

    def reschedule(self, interval_minutes: int) -> None:
        logger.info("Replay %s: cadence now %d minutes (replay timing unchanged)", self._name, interval_minutes)
        self._interval = interval_minutes

    async def _run(self) -> None:
        while self._queue and not self._cancelled:
            await self._sleep(self._pause_seconds)
            if self._cancelled:
                break
            timecode = self._queue.popleft()
            logger.debug("Replay %s: tick at %s (%d left)", self._name, timecode, len(self._queue))
            await self._run_tick(timecode)
        if not self._cancelled:
            logger.info("Replay %s exhausted its timecodes", self._name)
            if self._on_finished is not None:
                self._on_finished()
