"""Recurring drivers as cancellable asyncio subscriptions.

Provides:
    - FrameClock: emits the elapsed milliseconds since its previous tick
    - ResizeNotifier: emits (width, height) once on start and on every change
    - schedule_once(): one-shot deferred callback (the settle delay)

Each subscription is started exactly once with a dispatch callback and
cancelled on teardown. Everything runs on the single asyncio loop, so
dispatched callbacks never overlap.

Usage:
    clock = FrameClock(fps=60)
    clock.start(program.draw_tick)
    ...
    clock.cancel()
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

Size = Tuple[int, int]


class Subscription:
    """Base class: start(dispatch) / cancel() around one asyncio task."""

    name = "subscription"

    def __init__(self) -> None:
        self._task: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, dispatch: Callable[[Any], None]) -> None:
        """Begin emitting into ``dispatch`` (requires a running loop)."""
        if self.active:
            raise RuntimeError(f"{self.name} already started")
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(dispatch), name=self.name)
        logger.debug(f"{self.name} started")

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.debug(f"{self.name} cancelled")

    async def _run(self, dispatch: Callable[[Any], None]) -> None:
        raise NotImplementedError


class FrameClock(Subscription):
    """Tick roughly ``fps`` times per second with the delta in milliseconds.

    Parameters
    ----------
    fps : int
        Target tick rate
    now : Callable[[], float]
        Monotonic clock in seconds (injectable for tests)
    """

    name = "frame_clock"

    def __init__(self, fps: int = 60, now: Callable[[], float] = time.monotonic) -> None:
        super().__init__()
        if fps < 1:
            raise ValueError(f"fps must be >= 1, got {fps}")
        self.period = 1.0 / fps
        self._now = now

    async def _run(self, dispatch: Callable[[float], None]) -> None:
        last = self._now()
        while True:
            await asyncio.sleep(self.period)
            tick = self._now()
            dispatch((tick - last) * 1000.0)
            last = tick


class ResizeNotifier(Subscription):
    """Poll a size getter; emit eagerly on start and whenever it changes.

    Parameters
    ----------
    size_getter : Callable[[], Size]
        Returns the current viewport (width, height)
    poll_ms : float
        Polling period
    """

    name = "resize_notifier"

    def __init__(self, size_getter: Callable[[], Size], poll_ms: float = 100.0) -> None:
        super().__init__()
        self._size_getter = size_getter
        self.poll_s = poll_ms / 1000.0
        self._last: Optional[Size] = None

    def start(self, dispatch: Callable[[Size], None]) -> None:
        super().start(dispatch)
        self._emit(dispatch)

    def _emit(self, dispatch: Callable[[Size], None]) -> None:
        size = tuple(self._size_getter())
        if size != self._last:
            self._last = size
            dispatch(size)

    async def _run(self, dispatch: Callable[[Size], None]) -> None:
        while True:
            await asyncio.sleep(self.poll_s)
            self._emit(dispatch)


def schedule_once(delay_ms: float, callback: Callable[[], None]) -> Optional[asyncio.TimerHandle]:
    """Run ``callback`` after ``delay_ms`` on the running loop.

    Without a running loop there is no display to settle, so the callback
    runs immediately and None is returned.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        callback()
        return None
    return loop.call_later(delay_ms / 1000.0, callback)
