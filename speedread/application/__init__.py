"""Application layer orchestration."""

from .bootstrap import ReaderServices, initialize_reader_services
from .loader import TrackLoader
from .playback import PlaybackEngine, PlaybackStatus
from .ports import TickScheduler
from .resume import ResumeService
from .scheduler import EventLoopScheduler
from .tracks import Track, TrackRegistry

__all__ = [
    "EventLoopScheduler",
    "PlaybackEngine",
    "PlaybackStatus",
    "ReaderServices",
    "ResumeService",
    "TickScheduler",
    "Track",
    "TrackLoader",
    "TrackRegistry",
    "initialize_reader_services",
]
