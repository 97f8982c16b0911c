"""User interface layer."""

from .common import (
    APP_TITLE,
    control_states,
    emphasis_spans,
    preset_for_pace,
    progress_text,
    reader_rows,
    status_text,
    track_meta_text,
)
from .tk_scheduler import TkAfterScheduler

__all__ = [
    "APP_TITLE",
    "TkAfterScheduler",
    "control_states",
    "emphasis_spans",
    "preset_for_pace",
    "progress_text",
    "reader_rows",
    "status_text",
    "track_meta_text",
]
