"""Domain logic for text, pacing, emphasis and resume tokens."""

from .chunking import ChunkPager, chunk_count, chunk_words, clamp_words_per_chunk
from .emphasis import (
    bionic_html,
    bold_prefix_length,
    pivot_html,
    pivot_index,
    render_word,
    split_bionic,
    split_pivot,
)
from .pacing import clamp, clamp_pace, safe_int, tick_period_ms
from .resume_token import (
    FingerprintMismatchError,
    MalformedTokenError,
    ResumeToken,
    ResumeTokenError,
    UnsupportedVersionError,
    decode_resume_token,
    encode_resume_token,
)
from .text import fingerprint, tokenize

__all__ = [
    "ChunkPager",
    "FingerprintMismatchError",
    "MalformedTokenError",
    "ResumeToken",
    "ResumeTokenError",
    "UnsupportedVersionError",
    "bionic_html",
    "bold_prefix_length",
    "chunk_count",
    "chunk_words",
    "clamp",
    "clamp_pace",
    "clamp_words_per_chunk",
    "decode_resume_token",
    "encode_resume_token",
    "fingerprint",
    "pivot_html",
    "pivot_index",
    "render_word",
    "safe_int",
    "split_bionic",
    "split_pivot",
    "tick_period_ms",
    "tokenize",
]
