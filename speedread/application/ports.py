"""Application-level ports for timers and control-thread dispatch."""

from __future__ import annotations

from typing import Any, Callable, Protocol

TickHandle = Any
Dispatch = Callable[[Callable[[], None]], None]


class TickScheduler(Protocol):
    """One-shot timer owned by the control thread.

    ``schedule`` arms a callback ``period_ms`` from now and returns a handle;
    ``cancel`` must guarantee the callback for that handle never runs.
    """

    def schedule(self, period_ms: int, callback: Callable[[], None]) -> TickHandle: ...

    def cancel(self, handle: TickHandle) -> None: ...
