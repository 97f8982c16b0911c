"""Track registry: the set of loaded text tracks."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

from ..constants import LOGGER_NAME

TrackListener = Callable[[], None]


@dataclass(frozen=True)
class Track:
    id: int
    display_name: str
    tokens: tuple[str, ...] = ()
    fingerprint: str | None = None
    source_name: str | None = None

    @property
    def is_loaded(self) -> bool:
        return bool(self.tokens)

    @property
    def length(self) -> int:
        return len(self.tokens)


class TrackRegistry:
    """Ordered tracks that always holds at least one entry.

    Listeners run synchronously after every effective mutation so the
    playback cursor can be re-clamped before anything else happens.
    """

    def __init__(self, logger=None) -> None:
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self._ids = itertools.count(1)
        self._tracks: list[Track] = []
        self._listeners: list[TrackListener] = []
        self._tracks.append(self._new_track())

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(list(self._tracks))

    @property
    def tracks(self) -> list[Track]:
        return list(self._tracks)

    @property
    def max_length(self) -> int:
        return max((track.length for track in self._tracks), default=0)

    @property
    def any_loaded(self) -> bool:
        return any(track.is_loaded for track in self._tracks)

    def subscribe(self, listener: TrackListener) -> None:
        self._listeners.append(listener)

    def get(self, track_id: int) -> Track | None:
        for track in self._tracks:
            if track.id == track_id:
                return track
        return None

    def add(self) -> Track:
        track = self._new_track()
        self._tracks.append(track)
        self.logger.debug("Added track id=%s name=%s", track.id, track.display_name)
        self._notify()
        return track

    def remove(self, track_id: int) -> None:
        index = self._index_of(track_id)
        if index is None:
            return
        del self._tracks[index]
        if not self._tracks:
            self._tracks.append(self._new_track())
        self.logger.debug("Removed track id=%s remaining=%s", track_id, len(self._tracks))
        self._notify()

    def load(
        self,
        track_id: int,
        name: str | None,
        tokens: Sequence[str],
        fingerprint: str | None,
    ) -> None:
        index = self._index_of(track_id)
        if index is None:
            self.logger.debug("Ignoring load for unknown track id=%s", track_id)
            return
        words = tuple(tokens or ())
        if words and not fingerprint:
            self.logger.warning("Ignoring load for track id=%s: content has no fingerprint", track_id)
            return
        current = self._tracks[index]
        self._tracks[index] = Track(
            id=current.id,
            display_name=name or current.display_name,
            tokens=words,
            fingerprint=fingerprint if words else None,
            source_name=name or None,
        )
        self.logger.info(
            "Loaded track id=%s name=%s words=%s", track_id, name or current.display_name, len(words)
        )
        self._notify()

    def _new_track(self) -> Track:
        return Track(id=next(self._ids), display_name=f"Track {len(self._tracks) + 1}")

    def _index_of(self, track_id: int) -> int | None:
        for index, track in enumerate(self._tracks):
            if track.id == track_id:
                return index
        return None

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
