"""Application bootstrap assembly for tracks, playback and resume services."""
from __future__ import annotations

from dataclasses import dataclass

from ..config import AppConfig
from .loader import TrackLoader
from .playback import PlaybackEngine
from .ports import Dispatch, TickScheduler
from .resume import ResumeService
from .tracks import TrackRegistry


@dataclass(frozen=True)
class ReaderServices:
    registry: TrackRegistry
    engine: PlaybackEngine
    loader: TrackLoader
    resume: ResumeService

    def shutdown(self) -> None:
        self.engine.shutdown()
        self.loader.shutdown(wait=False)


def initialize_reader_services(
    *,
    config: AppConfig,
    scheduler: TickScheduler,
    dispatch: Dispatch,
    logger,
) -> ReaderServices:
    """Wire the registry, engine, loader and resume service together."""
    registry = TrackRegistry(logger)
    min_wpm, max_wpm = config.pace_bounds
    engine = PlaybackEngine(
        registry,
        scheduler,
        pace_wpm=config.default_wpm,
        min_wpm=min_wpm,
        max_wpm=max_wpm,
        logger=logger,
    )
    loader = TrackLoader(
        registry,
        dispatch,
        logger,
        max_workers=config.loader_workers,
    )
    resume = ResumeService(registry, engine, logger)
    logger.debug(
        "Reader services ready: pace=%s bounds=%s-%s workers=%s",
        engine.pace_wpm,
        min_wpm,
        max_wpm,
        config.loader_workers,
    )
    return ReaderServices(registry=registry, engine=engine, loader=loader, resume=resume)
