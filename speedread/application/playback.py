"""Unified playback engine: one shared cursor and one timer for all tracks."""

from __future__ import annotations

import enum
import logging
from typing import Any

import numpy as np

from ..constants import DEFAULT_WPM, LOGGER_NAME, MAX_WPM, MIN_WPM
from ..domain.pacing import clamp, clamp_pace, safe_int, tick_period_ms
from .ports import TickHandle, TickScheduler
from .tracks import Track, TrackRegistry


class PlaybackStatus(str, enum.Enum):
    IDLE = "idle"
    PAUSED = "paused"
    PLAYING = "playing"


class PlaybackEngine:
    """Advance every track together on a single shared word cursor.

    Each track shows ``tokens[min(shared_index, len(tokens) - 1)]``, so short
    tracks hold on their last word while longer ones keep going. Playback
    stops by itself once the longest track reaches its last word.

    No public operation raises: indexes and paces are clamped, and requests
    that make no sense in the current state are ignored.
    """

    def __init__(
        self,
        registry: TrackRegistry,
        scheduler: TickScheduler,
        *,
        pace_wpm: int = DEFAULT_WPM,
        min_wpm: int = MIN_WPM,
        max_wpm: int = MAX_WPM,
        logger=None,
    ) -> None:
        self.registry = registry
        self.scheduler = scheduler
        self.logger = logger or logging.getLogger(LOGGER_NAME)
        self.min_wpm = int(min_wpm)
        self.max_wpm = max(self.min_wpm, int(max_wpm))
        self._pace_wpm = clamp_pace(
            pace_wpm, current=DEFAULT_WPM, min_wpm=self.min_wpm, max_wpm=self.max_wpm
        )
        self._shared_index = 0
        self._is_playing = False
        self._is_seeking = False
        self._tick_handle: TickHandle | None = None
        self._tick_generation = 0
        self._max_track_length = registry.max_length
        registry.subscribe(self._on_tracks_changed)

    @property
    def shared_index(self) -> int:
        return self._shared_index

    @property
    def pace_wpm(self) -> int:
        return self._pace_wpm

    @property
    def tick_period_ms(self) -> int:
        return tick_period_ms(self._pace_wpm)

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @property
    def is_seeking(self) -> bool:
        return self._is_seeking

    @property
    def has_pending_tick(self) -> bool:
        return self._tick_handle is not None

    @property
    def max_track_length(self) -> int:
        return self._max_track_length

    @property
    def status(self) -> PlaybackStatus:
        if self._max_track_length == 0:
            return PlaybackStatus.IDLE
        return PlaybackStatus.PLAYING if self._is_playing else PlaybackStatus.PAUSED

    @property
    def at_start(self) -> bool:
        return self._shared_index <= 0

    @property
    def at_end(self) -> bool:
        return self._max_track_length == 0 or self._shared_index >= self._max_track_length - 1

    def play(self) -> bool:
        if self._max_track_length == 0:
            self.logger.debug("Play ignored: no track has content")
            return False
        if self._is_playing:
            return True
        self._is_playing = True
        self.logger.debug("Playback started at index=%s pace=%s", self._shared_index, self._pace_wpm)
        self._restart_timer()
        return True

    def pause(self) -> None:
        if not self._is_playing:
            return
        self._is_playing = False
        self._cancel_tick()
        self.logger.debug("Playback paused at index=%s", self._shared_index)

    def toggle(self) -> bool:
        if self._is_playing:
            self.pause()
        else:
            self.play()
        return self._is_playing

    def reset(self) -> None:
        self.pause()
        self._shared_index = 0

    def step(self, delta: Any = 1) -> int:
        if self._max_track_length == 0:
            return self._shared_index
        self._shared_index = self._clamp_index(self._shared_index + safe_int(delta, 1))
        return self._shared_index

    def next(self) -> int:
        return self.step(1)

    def prev(self) -> int:
        return self.step(-1)

    def seek_to(self, index: Any) -> int:
        """Jump the shared cursor; a pending tick keeps its original deadline."""
        self._shared_index = self._clamp_index(safe_int(index, self._shared_index))
        return self._shared_index

    def begin_seek(self) -> None:
        """Suspend the timer for a scrub gesture without touching play intent."""
        self._is_seeking = True
        self._cancel_tick()

    def end_seek(self, index: Any = None) -> int:
        self._is_seeking = False
        if index is not None:
            self._shared_index = self._clamp_index(safe_int(index, self._shared_index))
        if self._is_playing:
            self._restart_timer()
        return self._shared_index

    def set_pace(self, wpm: Any) -> int:
        previous = self._pace_wpm
        self._pace_wpm = clamp_pace(
            wpm, current=previous, min_wpm=self.min_wpm, max_wpm=self.max_wpm
        )
        if self._is_playing and not self._is_seeking:
            self._restart_timer()
        if self._pace_wpm != previous:
            self.logger.debug("Pace changed %s -> %s wpm", previous, self._pace_wpm)
        return self._pace_wpm

    def effective_index(self, track: Track | int) -> int | None:
        if not isinstance(track, Track):
            track = self.registry.get(track)
        if track is None or not track.is_loaded:
            return None
        return clamp(self._shared_index, 0, track.length - 1)

    def effective_indexes(self) -> dict[int, int | None]:
        tracks = self.registry.tracks
        lengths = np.array([track.length for track in tracks], dtype=np.int64)
        clamped = np.minimum(self._shared_index, np.maximum(lengths - 1, 0))
        return {
            track.id: (int(index) if length > 0 else None)
            for track, length, index in zip(tracks, lengths, clamped)
        }

    def current_words(self) -> list[tuple[Track, str | None]]:
        indexes = self.effective_indexes()
        words: list[tuple[Track, str | None]] = []
        for track in self.registry.tracks:
            index = indexes.get(track.id)
            words.append((track, track.tokens[index] if index is not None else None))
        return words

    def shutdown(self) -> None:
        self._is_playing = False
        self._cancel_tick()

    def _clamp_index(self, index: int) -> int:
        if self._max_track_length == 0:
            return 0
        return clamp(index, 0, self._max_track_length - 1)

    def _on_tracks_changed(self) -> None:
        self._max_track_length = self.registry.max_length
        if self._max_track_length == 0:
            self._shared_index = 0
            if self._is_playing:
                self._is_playing = False
                self._cancel_tick()
                self.logger.info("Playback stopped: no track has content")
            return
        self._shared_index = self._clamp_index(self._shared_index)

    def _restart_timer(self) -> None:
        self._cancel_tick()
        if self._is_seeking:
            return
        self._tick_generation += 1
        generation = self._tick_generation
        self._tick_handle = self.scheduler.schedule(
            self.tick_period_ms,
            lambda generation=generation: self._on_tick(generation),
        )

    def _cancel_tick(self) -> None:
        # bumping the generation disarms a callback the platform failed to cancel
        self._tick_generation += 1
        handle = self._tick_handle
        self._tick_handle = None
        if handle is not None:
            self.scheduler.cancel(handle)

    def _on_tick(self, generation: int) -> None:
        if generation != self._tick_generation:
            return
        self._tick_handle = None
        if not self._is_playing or self._is_seeking:
            return
        if self._max_track_length == 0:
            self._is_playing = False
            return
        last_index = self._max_track_length - 1
        self._shared_index = min(self._shared_index + 1, last_index)
        if self._shared_index >= last_index:
            self._is_playing = False
            self.logger.info("Playback reached the end at index=%s", self._shared_index)
            return
        self._restart_timer()
