"""UI-neutral labels shared by reader front ends."""
from __future__ import annotations

from ..application.playback import PlaybackEngine, PlaybackStatus
from ..application.tracks import Track
from ..constants import PRESET_WPMS
from ..domain.emphasis import render_word, split_bionic, split_pivot

APP_TITLE = "Speedread"
EMPTY_PROGRESS = "—"
EMPTY_TRACK_HINT = "Upload a .txt file to load this track"


def status_text(engine: PlaybackEngine) -> str:
    status = engine.status
    if status is PlaybackStatus.IDLE:
        return "Upload text to begin"
    if status is PlaybackStatus.PLAYING:
        return f"Playing • {engine.pace_wpm} wpm"
    return f"Paused • {engine.pace_wpm} wpm"


def preset_for_pace(wpm: int) -> str:
    return str(wpm) if wpm in PRESET_WPMS else "custom"


def track_meta_text(track: Track) -> str:
    if not track.is_loaded:
        return "No file loaded"
    return f"{track.source_name or 'Loaded'} • {track.length:,} words"


def progress_text(track: Track, index: int | None) -> str:
    if not track.is_loaded or index is None:
        return EMPTY_PROGRESS
    return f"{index + 1:,} / {track.length:,}"


def reader_rows(engine: PlaybackEngine, mode: str, *, target: str = "html") -> list[dict[str, str]]:
    """One display row per track: name, progress and the rendered word."""
    rows: list[dict[str, str]] = []
    indexes = engine.effective_indexes()
    for track, word in engine.current_words():
        rows.append(
            {
                "name": track.display_name,
                "progress": progress_text(track, indexes.get(track.id)),
                "word": render_word(word, mode, target=target) if word is not None else EMPTY_TRACK_HINT,
            }
        )
    return rows


def control_states(engine: PlaybackEngine) -> dict[str, bool]:
    loaded = engine.status is not PlaybackStatus.IDLE
    return {
        "play": loaded,
        "reset": loaded,
        "prev": loaded and not engine.at_start,
        "next": loaded and not engine.at_end,
    }


def emphasis_spans(word: str, mode: str) -> list[tuple[str, str | None]]:
    """Split a word into ``(text, tag)`` runs for widgets that style by tag.

    Tags are ``"pivot"`` and ``"bold"``; untagged runs carry ``None``.
    """
    if not word:
        return []
    if mode == "pivot":
        parts = split_pivot(word)
        spans = [(parts.left, None), (parts.pivot, "pivot"), (parts.right, None)]
    elif mode == "bionic":
        bionic = split_bionic(word)
        if bionic is None:
            return [(word, None)]
        spans = [(bionic.leading, None), (bionic.head, "bold"), (bionic.tail + bionic.trailing, None)]
    else:
        return [(word, None)]
    return [(text, tag) for text, tag in spans if text]
