"""Command-line entrypoint: inspect texts, play them in the terminal, handle resume tokens."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from .application.bootstrap import ReaderServices, initialize_reader_services
from .application.scheduler import EventLoopScheduler
from .config import AppConfig, load_config
from .constants import EMPHASIS_MODES
from .domain.chunking import ChunkPager
from .domain.emphasis import render_word
from .domain.resume_token import ResumeTokenError, decode_resume_token
from .domain.text import fingerprint, tokenize
from .logging_config import setup_logging
from .ui.common import reader_rows, status_text

EXIT_OK = 0
EXIT_READ_FAILED = 1
EXIT_TOKEN_REJECTED = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="speedread",
        description="Multi-track speed reader with resumable positions.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    stats = commands.add_parser("stats", help="Print word count and fingerprint of a text file.")
    stats.add_argument("path", type=Path)

    export = commands.add_parser("export", help="Print a resume token for a position in a file.")
    export.add_argument("path", type=Path)
    export.add_argument("--index", type=int, default=0, help="Zero-based word index.")

    inspect = commands.add_parser("inspect", help="Decode a resume token and print its fields.")
    inspect.add_argument("token")

    play = commands.add_parser("play", help="Play one or more files together in the terminal.")
    play.add_argument("paths", type=Path, nargs="+")
    play.add_argument("--wpm", default=None, help="Pace in words per minute.")
    play.add_argument("--resume", default=None, help="Resume token bound to the first file.")
    play.add_argument("--mode", choices=EMPHASIS_MODES, default=None)

    gui = commands.add_parser("gui", help="Open the desktop reader window.")
    gui.add_argument("paths", type=Path, nargs="*")

    chunks = commands.add_parser("chunks", help="Print one chunk of a file with bionic emphasis.")
    chunks.add_argument("path", type=Path)
    chunks.add_argument("--words-per-chunk", default=None)
    chunks.add_argument("--chunk", type=int, default=0, help="Zero-based chunk number.")
    chunks.add_argument("--mode", choices=EMPHASIS_MODES, default="bionic")
    return parser


def _load_tracks(
    services: ReaderServices,
    scheduler: EventLoopScheduler,
    paths: Sequence[Path],
) -> list[int]:
    track_ids: list[int] = []
    futures = []
    for position, path in enumerate(paths):
        track = services.registry.tracks[0] if position == 0 else services.registry.add()
        track_ids.append(track.id)
        futures.append(services.loader.load_file(track.id, path))
    for future in futures:
        future.result()
    scheduler.run_pending()
    return track_ids


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        print(f"Cannot read {path}: {exc.strerror or exc}", file=sys.stderr)
        return None


def _cmd_stats(args: argparse.Namespace) -> int:
    text = _read_text(args.path)
    if text is None:
        return EXIT_READ_FAILED
    print(json.dumps({"words": len(tokenize(text)), "fingerprint": fingerprint(text)}))
    return EXIT_OK


def _cmd_inspect(args: argparse.Namespace) -> int:
    try:
        token = decode_resume_token(args.token)
    except ResumeTokenError as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return EXIT_TOKEN_REJECTED
    print(json.dumps(token.to_payload(), ensure_ascii=False))
    return EXIT_OK


def _cmd_export(args: argparse.Namespace, config: AppConfig, logger) -> int:
    scheduler = EventLoopScheduler()
    services = initialize_reader_services(
        config=config, scheduler=scheduler, dispatch=scheduler.call_soon, logger=logger
    )
    try:
        (track_id,) = _load_tracks(services, scheduler, [args.path])
        services.engine.seek_to(args.index)
        token = services.resume.export_token(track_id)
    finally:
        services.shutdown()
    if token is None:
        print("File has no words to export.", file=sys.stderr)
        return EXIT_TOKEN_REJECTED
    print(token)
    return EXIT_OK


def _cmd_play(args: argparse.Namespace, config: AppConfig, logger) -> int:
    scheduler = EventLoopScheduler()
    services = initialize_reader_services(
        config=config, scheduler=scheduler, dispatch=scheduler.call_soon, logger=logger
    )
    mode = args.mode or config.emphasis_mode
    engine = services.engine
    try:
        track_ids = _load_tracks(services, scheduler, args.paths)
        if args.wpm is not None:
            engine.set_pace(args.wpm)
        if args.resume:
            try:
                services.resume.apply_token(track_ids[0], args.resume)
            except ResumeTokenError as exc:
                print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
                return EXIT_TOKEN_REJECTED
        if not engine.play():
            print(status_text(engine), file=sys.stderr)
            return EXIT_OK

        rendered = [-1]

        def render_and_check() -> bool:
            if engine.shared_index != rendered[0]:
                rendered[0] = engine.shared_index
                row_text = " | ".join(
                    f"{row['name']} [{row['progress']}] {row['word']}"
                    for row in reader_rows(engine, mode, target="ansi")
                )
                print(row_text, flush=True)
            return not engine.is_playing

        try:
            scheduler.run(until=render_and_check)
        except KeyboardInterrupt:
            engine.pause()
        token = services.resume.export_token(track_ids[0])
        if token:
            print(f"resume: {token}")
    finally:
        services.shutdown()
    return EXIT_OK


def _cmd_chunks(args: argparse.Namespace, config: AppConfig) -> int:
    text = _read_text(args.path)
    if text is None:
        return EXIT_READ_FAILED
    pager = ChunkPager(tokenize(text), config.words_per_chunk)
    if args.words_per_chunk is not None:
        pager.set_words_per_chunk(args.words_per_chunk)
    for _ in range(max(0, args.chunk)):
        pager.next()
    words = [render_word(word, args.mode, target="ansi") for word in pager.current()]
    print(" ".join(words))
    position = pager.chunk_index + 1 if pager.chunk_count else 0
    print(f"chunk {position} / {pager.chunk_count}")
    return EXIT_OK


def _cmd_gui(args: argparse.Namespace, config: AppConfig, logger) -> int:
    from .ui.tkinter_app import create_tkinter_app

    create_tkinter_app(config=config, logger=logger, paths=args.paths).launch()
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.command == "stats":
        return _cmd_stats(args)
    if args.command == "inspect":
        return _cmd_inspect(args)
    config = load_config()
    logger = setup_logging(config)
    if args.command == "export":
        return _cmd_export(args, config, logger)
    if args.command == "play":
        return _cmd_play(args, config, logger)
    if args.command == "gui":
        return _cmd_gui(args, config, logger)
    return _cmd_chunks(args, config)


if __name__ == "__main__":
    sys.exit(main())
