"""Configuration loading from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .constants import (
    DEFAULT_WORDS_PER_CHUNK,
    DEFAULT_WPM,
    EMPHASIS_MODES,
    MAX_WORDS_PER_CHUNK,
    MAX_WPM,
    MIN_WORDS_PER_CHUNK,
    MIN_WPM,
)
from .utils import parse_choice_env, parse_int_env, parse_level_env, resolve_path


@dataclass(frozen=True)
class AppConfig:
    log_level: str
    file_log_level: str
    log_dir: str
    log_file: str
    default_wpm: int = DEFAULT_WPM
    min_wpm: int = MIN_WPM
    max_wpm: int = MAX_WPM
    words_per_chunk: int = DEFAULT_WORDS_PER_CHUNK
    emphasis_mode: str = "pivot"
    loader_workers: int = 1

    @property
    def pace_bounds(self) -> tuple[int, int]:
        return self.min_wpm, self.max_wpm


def load_config() -> AppConfig:
    base_dir = str(Path(__file__).resolve().parents[1])
    log_level = parse_level_env("LOG_LEVEL", "INFO")
    file_log_level = parse_level_env("FILE_LOG_LEVEL", "DEBUG")
    log_dir = resolve_path(os.getenv("LOG_DIR", "logs"), base_dir)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(
        log_dir, f"speedread_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.log"
    )
    min_wpm = parse_int_env("MIN_WPM", MIN_WPM, min_value=1, max_value=10000)
    max_wpm = parse_int_env("MAX_WPM", MAX_WPM, min_value=min_wpm, max_value=10000)
    default_wpm = parse_int_env(
        "DEFAULT_WPM", DEFAULT_WPM, min_value=min_wpm, max_value=max_wpm
    )
    words_per_chunk = parse_int_env(
        "WORDS_PER_CHUNK",
        DEFAULT_WORDS_PER_CHUNK,
        min_value=MIN_WORDS_PER_CHUNK,
        max_value=MAX_WORDS_PER_CHUNK,
    )
    emphasis_mode = parse_choice_env("EMPHASIS_MODE", "pivot", EMPHASIS_MODES)
    loader_workers = parse_int_env("LOADER_WORKERS", 1, min_value=1, max_value=8)
    return AppConfig(
        log_level=log_level,
        file_log_level=file_log_level,
        log_dir=log_dir,
        log_file=log_file,
        default_wpm=default_wpm,
        min_wpm=min_wpm,
        max_wpm=max_wpm,
        words_per_chunk=words_per_chunk,
        emphasis_mode=emphasis_mode,
        loader_workers=loader_workers,
    )
