"""Paging helpers for the chunked (bionic) reader."""
from __future__ import annotations

import math
from typing import Any, Sequence

from ..constants import DEFAULT_WORDS_PER_CHUNK, MAX_WORDS_PER_CHUNK, MIN_WORDS_PER_CHUNK
from .pacing import clamp, safe_int


def clamp_words_per_chunk(value: Any, *, current: int = DEFAULT_WORDS_PER_CHUNK) -> int:
    return clamp(safe_int(value, current), MIN_WORDS_PER_CHUNK, MAX_WORDS_PER_CHUNK)


def chunk_count(word_count: int, words_per_chunk: int) -> int:
    if word_count <= 0:
        return 0
    return max(1, math.ceil(word_count / max(1, words_per_chunk)))


def chunk_words(words: Sequence[str], chunk_index: int, words_per_chunk: int) -> list[str]:
    start = max(0, chunk_index) * words_per_chunk
    return list(words[start : start + words_per_chunk])


class ChunkPager:
    """Chunk cursor over one word sequence; every move is clamped."""

    def __init__(
        self,
        words: Sequence[str] = (),
        words_per_chunk: int = DEFAULT_WORDS_PER_CHUNK,
    ) -> None:
        self.words: list[str] = list(words)
        self.words_per_chunk = clamp_words_per_chunk(words_per_chunk)
        self.chunk_index = 0

    @property
    def chunk_count(self) -> int:
        return chunk_count(len(self.words), self.words_per_chunk)

    @property
    def has_prev(self) -> bool:
        return bool(self.words) and self.chunk_index > 0

    @property
    def has_next(self) -> bool:
        return bool(self.words) and self.chunk_index < self.chunk_count - 1

    def current(self) -> list[str]:
        return chunk_words(self.words, self.chunk_index, self.words_per_chunk)

    def load(self, words: Sequence[str]) -> None:
        self.words = list(words)
        self.chunk_index = 0

    def set_words_per_chunk(self, value: Any) -> int:
        self.words_per_chunk = clamp_words_per_chunk(value, current=self.words_per_chunk)
        self._reclamp()
        return self.words_per_chunk

    def next(self) -> int:
        if self.has_next:
            self.chunk_index += 1
        return self.chunk_index

    def prev(self) -> int:
        if self.has_prev:
            self.chunk_index -= 1
        return self.chunk_index

    def _reclamp(self) -> None:
        self.chunk_index = clamp(self.chunk_index, 0, max(0, self.chunk_count - 1))
