"""Pace (words per minute) helpers and integer clamping."""
from __future__ import annotations

import math
from typing import Any

from ..constants import MAX_WPM, MIN_WPM


def clamp(value: int, min_value: int, max_value: int) -> int:
    return min(max_value, max(min_value, value))


def safe_int(value: Any, default: int) -> int:
    """Parse a leading integer from user input, falling back to default."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return default
        return int(value)
    text = str(value).strip()
    digits = ""
    for index, char in enumerate(text):
        if char.isdigit() and char.isascii():
            digits += char
        elif index == 0 and char in "+-":
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return default


def clamp_pace(
    wpm: Any,
    *,
    current: int,
    min_wpm: int = MIN_WPM,
    max_wpm: int = MAX_WPM,
) -> int:
    return clamp(safe_int(wpm, current), min_wpm, max_wpm)


def tick_period_ms(wpm: int) -> int:
    """Milliseconds between word advances at the given pace, rounded half up."""
    wpm = max(1, int(wpm))
    return (120000 + wpm) // (2 * wpm)
