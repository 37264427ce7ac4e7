"""Timer sources driving the simulation.

Every state transition in the core happens inside a callback handed to a
clock. ``ManualClock`` advances virtual time on demand and is what tests and
offline scenarios use; ``AsyncioClock`` runs callbacks on an event loop for
the live server.
"""
from __future__ import annotations

import asyncio
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Set

Callback = Callable[[], None]


class Clock(Protocol):
    """Scheduling capability consumed by the core. Times are milliseconds."""

    def now(self) -> float:
        ...

    def schedule(self, delay_ms: float, callback: Callback) -> None:
        ...

    def schedule_periodic(self, interval_ms: float, callback: Callback) -> None:
        ...


@dataclass(order=True)
class _Timer:
    due: float
    seq: int
    callback: Callback = field(compare=False)
    interval: Optional[float] = field(default=None, compare=False)


class ManualClock:
    """Deterministic virtual-time clock.

    Timers due at the same instant fire in the order they were scheduled.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)
        self._timers: List[_Timer] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def schedule(self, delay_ms: float, callback: Callback) -> None:
        heapq.heappush(self._timers, _Timer(self._now + max(0.0, delay_ms), next(self._seq), callback))

    def schedule_periodic(self, interval_ms: float, callback: Callback) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        heapq.heappush(
            self._timers,
            _Timer(self._now + interval_ms, next(self._seq), callback, interval_ms),
        )

    def advance(self, ms: float) -> None:
        """Move virtual time forward, firing every timer due on the way."""
        if ms < 0:
            raise ValueError("cannot move time backwards")
        deadline = self._now + ms
        while self._timers and self._timers[0].due <= deadline:
            timer = heapq.heappop(self._timers)
            self._now = timer.due
            if timer.interval is not None:
                heapq.heappush(
                    self._timers,
                    _Timer(timer.due + timer.interval, next(self._seq), timer.callback, timer.interval),
                )
            timer.callback()
        self._now = deadline

    @property
    def pending(self) -> int:
        """Number of outstanding one-shot timers."""
        return sum(1 for timer in self._timers if timer.interval is None)


class AsyncioClock:
    """Clock backed by an asyncio event loop.

    Must be created while the loop is running. ``close`` drops every
    outstanding handle when the owning service shuts down.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop or asyncio.get_running_loop()
        self._handles: Set[asyncio.TimerHandle] = set()
        self._closed = False

    def now(self) -> float:
        return self._loop.time() * 1000

    def schedule(self, delay_ms: float, callback: Callback) -> None:
        if self._closed:
            return
        handle: Optional[asyncio.TimerHandle] = None

        def fire() -> None:
            self._handles.discard(handle)
            callback()

        handle = self._loop.call_later(max(0.0, delay_ms) / 1000, fire)
        self._handles.add(handle)

    def schedule_periodic(self, interval_ms: float, callback: Callback) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")

        def tick() -> None:
            self.schedule(interval_ms, tick)
            callback()

        self.schedule(interval_ms, tick)

    def close(self) -> None:
        self._closed = True
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()
