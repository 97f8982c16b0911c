"""Single-threaded timer loop for hosts without a GUI main loop."""

from __future__ import annotations

import heapq
import itertools
import queue
import time
from typing import Callable


class EventLoopScheduler:
    """Cooperative one-shot timers plus a thread-safe ``call_soon`` inbox.

    Timer callbacks and dispatched callbacks all run on whichever thread
    drives ``run_pending``/``run``, so state they touch needs no locking.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._sequence = itertools.count()
        self._timers: list[tuple[int, int, Callable[[], None]]] = []
        self._cancelled: set[int] = set()
        self._inbox: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()

    def _now_ms(self) -> int:
        return int(round(self._clock() * 1000.0))

    @property
    def pending_timers(self) -> int:
        return sum(1 for _, handle, _ in self._timers if handle not in self._cancelled)

    def schedule(self, period_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._sequence)
        heapq.heappush(self._timers, (self._now_ms() + max(0, int(period_ms)), handle, callback))
        return handle

    def cancel(self, handle: int) -> None:
        if any(entry[1] == handle for entry in self._timers):
            self._cancelled.add(handle)

    def call_soon(self, callback: Callable[[], None]) -> None:
        self._inbox.put(callback)

    def run_pending(self) -> int:
        """Run dispatched callbacks and every timer that is due; return the count."""
        ran = 0
        while True:
            try:
                callback = self._inbox.get_nowait()
            except queue.Empty:
                break
            callback()
            ran += 1
        now = self._now_ms()
        while self._timers and self._timers[0][0] <= now:
            _, handle, callback = heapq.heappop(self._timers)
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            callback()
            ran += 1
        return ran

    def run(self, *, until: Callable[[], bool] | None = None, idle_sleep: float = 0.005) -> None:
        """Drive timers until none remain or ``until()`` turns true."""
        while True:
            self.run_pending()
            if until is not None and until():
                return
            self._drop_cancelled_head()
            if not self._timers and self._inbox.empty():
                return
            if self._timers:
                delay_ms = self._timers[0][0] - self._now_ms()
                self._sleep(min(max(delay_ms, 0) / 1000.0, 0.25))
            else:
                self._sleep(idle_sleep)

    def _drop_cancelled_head(self) -> None:
        while self._timers and self._timers[0][1] in self._cancelled:
            _, handle, _ = heapq.heappop(self._timers)
            self._cancelled.discard(handle)
