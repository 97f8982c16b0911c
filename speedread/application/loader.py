"""Background tokenize + fingerprint pipeline feeding the track registry."""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from ..domain.text import fingerprint, tokenize
from .ports import Dispatch
from .tracks import TrackRegistry


class TrackLoader:
    """Prepare track content off the control thread.

    Results are handed back through ``dispatch`` so the registry is only ever
    mutated on the control thread. When a track is reloaded before an earlier
    load finishes, the earlier result is dropped.
    """

    def __init__(
        self,
        registry: TrackRegistry,
        dispatch: Dispatch,
        logger,
        *,
        tokenizer: Callable[[str], list[str]] = tokenize,
        fingerprinter: Callable[[str], str] = fingerprint,
        max_workers: int = 1,
    ) -> None:
        self.registry = registry
        self.dispatch = dispatch
        self.logger = logger
        self.tokenizer = tokenizer
        self.fingerprinter = fingerprinter
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, int(max_workers)),
            thread_name_prefix="track-load",
        )
        self._generations: dict[int, int] = {}
        self._lock = threading.Lock()
        registry.subscribe(self._forget_removed_tracks)

    def _next_generation(self, track_id: int) -> int:
        with self._lock:
            generation = self._generations.get(track_id, 0) + 1
            self._generations[track_id] = generation
            return generation

    def _is_current(self, track_id: int, generation: int) -> bool:
        with self._lock:
            return self._generations.get(track_id) == generation

    def _forget_removed_tracks(self) -> None:
        live_ids = {track.id for track in self.registry}
        with self._lock:
            for track_id in [key for key in self._generations if key not in live_ids]:
                del self._generations[track_id]

    def load_text(self, track_id: int, name: str | None, text: str) -> Future[None]:
        generation = self._next_generation(track_id)
        return self._executor.submit(self._prepare, track_id, generation, name, lambda: text)

    def load_file(self, track_id: int, path: str | Path) -> Future[None]:
        file_path = Path(path)
        generation = self._next_generation(track_id)
        return self._executor.submit(
            self._prepare,
            track_id,
            generation,
            file_path.name,
            lambda: file_path.read_text(encoding="utf-8", errors="replace"),
        )

    def _prepare(
        self,
        track_id: int,
        generation: int,
        name: str | None,
        read_text: Callable[[], str],
    ) -> None:
        try:
            text = read_text()
            tokens = self.tokenizer(text)
            digest = self.fingerprinter(text) if tokens else None
        except Exception:
            self.logger.exception("Failed to load track id=%s from %s", track_id, name)
            tokens, digest = [], None
        self.dispatch(
            lambda: self._apply(track_id, generation, name, tokens, digest)
        )

    def _apply(
        self,
        track_id: int,
        generation: int,
        name: str | None,
        tokens: list[str],
        digest: str | None,
    ) -> None:
        if not self._is_current(track_id, generation):
            self.logger.debug("Dropping stale load for track id=%s", track_id)
            return
        self.registry.load(track_id, name, tokens, digest)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
