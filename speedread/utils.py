"""Environment parsing helpers for configuration."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Sequence


def resolve_path(value: str, base_dir: str) -> str:
    """Anchor ``value`` under ``base_dir`` unless it is already absolute."""
    path = Path(value).expanduser()
    if path.is_absolute():
        return str(path)
    return os.path.join(base_dir, str(path))


def parse_int_env(
    name: str,
    default: int,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Read ``name`` as an integer; blank or garbage means ``default``.

    The result is forced into ``[min_value, max_value]`` when bounds are given.
    """
    raw = os.getenv(name, "").strip()
    try:
        value = int(raw) if raw else default
    except ValueError:
        value = default
    if min_value is not None and value < min_value:
        return min_value
    if max_value is not None and value > max_value:
        return max_value
    return value


def parse_choice_env(name: str, default: str, choices: Sequence[str]) -> str:
    value = os.getenv(name, "").strip().lower()
    return value if value in choices else default


def parse_level_env(name: str, default: str) -> str:
    """Read a logging level name, falling back when the name is unknown."""
    value = os.getenv(name, "").strip().upper()
    if value and isinstance(logging.getLevelName(value), int):
        return value
    return default
