"""Tk ``after``/``after_cancel`` adapter for the tick scheduler port."""

from __future__ import annotations

import queue
from typing import Any, Callable


class TkAfterScheduler:
    """Timers go through ``root.after``; ``call_soon`` is safe from any thread.

    Callbacks handed to ``call_soon`` wait in a queue until ``drain`` runs them
    on the Tk thread.
    """

    def __init__(self, root: Any, logger) -> None:
        self.root = root
        self.logger = logger
        self._inbox: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()

    def schedule(self, period_ms: int, callback: Callable[[], None]) -> str:
        return self.root.after(max(0, int(period_ms)), callback)

    def cancel(self, handle: str) -> None:
        try:
            self.root.after_cancel(handle)
        except Exception:
            self.logger.debug("Tick job %s was already gone", handle)

    def call_soon(self, callback: Callable[[], None]) -> None:
        self._inbox.put(callback)

    def drain(self) -> int:
        ran = 0
        while True:
            try:
                callback = self._inbox.get_nowait()
            except queue.Empty:
                return ran
            callback()
            ran += 1
