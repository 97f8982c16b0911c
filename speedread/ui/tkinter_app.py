"""Tkinter desktop reader for Speedread."""
from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, ttk
from typing import Any, Sequence

from ..application.bootstrap import ReaderServices, initialize_reader_services
from ..config import AppConfig
from ..constants import EMPHASIS_MODES, PRESET_WPMS
from ..domain.resume_token import ResumeTokenError
from .common import (
    APP_TITLE,
    EMPTY_TRACK_HINT,
    control_states,
    emphasis_spans,
    preset_for_pace,
    progress_text,
    status_text,
    track_meta_text,
)
from .tk_scheduler import TkAfterScheduler

REFRESH_MS = 40
WORD_FONT = ("Helvetica", 24)
WORD_BOLD_FONT = ("Helvetica", 24, "bold")
PIVOT_COLOR = "#d62828"


class TkReaderApp:
    """One word row per track, shared transport and pace controls."""

    def __init__(
        self,
        *,
        config: AppConfig,
        logger,
        paths: Sequence[str | Path] = (),
    ) -> None:
        self.title = APP_TITLE
        self.config = config
        self.logger = logger
        self.initial_paths = [Path(path) for path in paths]
        self.root: tk.Tk | None = None
        self.scheduler: TkAfterScheduler | None = None
        self.services: ReaderServices | None = None
        self.track_rows: dict[int, dict[str, Any]] = {}
        self.seek_dragging = False
        self.seek_programmatic = False
        self.refresh_job: str | None = None
        self._last_view: tuple | None = None

    def launch(self) -> None:
        self._ensure_root()
        assert self.root is not None
        self.root.mainloop()

    def build_for_test(self) -> tk.Tk:
        """Build root/widgets without entering mainloop (for tests)."""
        self._ensure_root()
        assert self.root is not None
        return self.root

    def _ensure_root(self) -> None:
        if self.root is not None:
            return
        root = tk.Tk()
        root.title(APP_TITLE)
        root.geometry("920x560")
        root.minsize(640, 360)
        self.root = root
        self.scheduler = TkAfterScheduler(root, self.logger)
        self.services = initialize_reader_services(
            config=self.config,
            scheduler=self.scheduler,
            dispatch=self.scheduler.call_soon,
            logger=self.logger,
        )
        self.services.registry.subscribe(self._on_tracks_changed)
        self._init_tk_variables()
        self._build_layout()
        self._bind_shortcuts()
        root.protocol("WM_DELETE_WINDOW", self._on_close)
        self._rebuild_track_rows()
        self._load_initial_paths()
        self._refresh()
        self._schedule_refresh()
        self.logger.debug("Tkinter reader wiring complete")

    def _init_tk_variables(self) -> None:
        self.status_var = tk.StringVar(value="")
        self.message_var = tk.StringVar(value="")
        self.pace_var = tk.StringVar(value=str(self.services.engine.pace_wpm))
        self.preset_var = tk.StringVar(value=preset_for_pace(self.services.engine.pace_wpm))
        self.mode_var = tk.StringVar(value=self.config.emphasis_mode)
        self.seek_var = tk.DoubleVar(value=0.0)
        self.resume_var = tk.StringVar(value="")

    def _build_layout(self) -> None:
        assert self.root is not None
        self.root.grid_columnconfigure(0, weight=1)
        self.root.grid_rowconfigure(1, weight=1)

        header = ttk.Frame(self.root, padding=(12, 10))
        header.grid(row=0, column=0, sticky="ew")
        header.grid_columnconfigure(0, weight=1)
        ttk.Label(header, textvariable=self.status_var).grid(row=0, column=0, sticky="w")
        ttk.Label(header, text="Pace").grid(row=0, column=1, padx=(12, 4))
        self.preset_combo = ttk.Combobox(
            header,
            textvariable=self.preset_var,
            values=[str(value) for value in PRESET_WPMS] + ["custom"],
            state="readonly",
            width=8,
        )
        self.preset_combo.grid(row=0, column=2)
        self.preset_combo.bind("<<ComboboxSelected>>", lambda _e: self._on_preset_selected())
        self.pace_spin = ttk.Spinbox(
            header,
            textvariable=self.pace_var,
            from_=self.services.engine.min_wpm,
            to=self.services.engine.max_wpm,
            increment=25,
            width=6,
            command=self._on_pace_entered,
        )
        self.pace_spin.grid(row=0, column=3, padx=(6, 0))
        self.pace_spin.bind("<Return>", lambda _e: self._on_pace_entered())
        self.pace_spin.bind("<FocusOut>", lambda _e: self._on_pace_entered())
        ttk.Label(header, text="Emphasis").grid(row=0, column=4, padx=(12, 4))
        self.mode_combo = ttk.Combobox(
            header,
            textvariable=self.mode_var,
            values=list(EMPHASIS_MODES),
            state="readonly",
            width=8,
        )
        self.mode_combo.grid(row=0, column=5)
        self.mode_combo.bind("<<ComboboxSelected>>", lambda _e: self._refresh(force=True))

        self.tracks_frame = ttk.Frame(self.root, padding=(12, 0))
        self.tracks_frame.grid(row=1, column=0, sticky="nsew")
        self.tracks_frame.grid_columnconfigure(1, weight=1)

        transport = ttk.Frame(self.root, padding=(12, 8))
        transport.grid(row=2, column=0, sticky="ew")
        transport.grid_columnconfigure(0, weight=1)
        self.seek_scale = ttk.Scale(
            transport,
            from_=0.0,
            to=0.0,
            variable=self.seek_var,
            command=self._on_seek_change,
        )
        self.seek_scale.grid(row=0, column=0, columnspan=6, sticky="ew", pady=(0, 8))
        self.seek_scale.bind("<ButtonPress-1>", self._on_seek_press)
        self.seek_scale.bind("<ButtonRelease-1>", self._on_seek_release)
        self.add_button = ttk.Button(transport, text="Add track", command=self._on_add_track)
        self.add_button.grid(row=1, column=0, sticky="w")
        self.prev_button = ttk.Button(transport, text="Prev", command=self._on_prev)
        self.prev_button.grid(row=1, column=1, padx=4)
        self.play_button = ttk.Button(transport, text="Play", command=self._on_play_pause)
        self.play_button.grid(row=1, column=2, padx=4)
        self.next_button = ttk.Button(transport, text="Next", command=self._on_next)
        self.next_button.grid(row=1, column=3, padx=4)
        self.reset_button = ttk.Button(transport, text="Reset", command=self._on_reset)
        self.reset_button.grid(row=1, column=4, padx=4)

        resume = ttk.Frame(self.root, padding=(12, 0, 12, 10))
        resume.grid(row=3, column=0, sticky="ew")
        resume.grid_columnconfigure(1, weight=1)
        ttk.Label(resume, text="Resume token").grid(row=0, column=0, padx=(0, 6))
        self.resume_entry = ttk.Entry(resume, textvariable=self.resume_var)
        self.resume_entry.grid(row=0, column=1, sticky="ew")
        ttk.Label(resume, textvariable=self.message_var).grid(
            row=1, column=0, columnspan=2, sticky="w", pady=(4, 0)
        )

    def _bind_shortcuts(self) -> None:
        assert self.root is not None
        self.root.bind("<space>", self._on_shortcut(self._on_play_pause))
        self.root.bind("<Left>", self._on_shortcut(self._on_prev))
        self.root.bind("<Right>", self._on_shortcut(self._on_next))
        self.root.bind("<Home>", self._on_shortcut(self._on_reset))

    def _on_shortcut(self, action):
        def handler(event: tk.Event[Any]) -> str | None:
            if isinstance(getattr(event, "widget", None), (ttk.Entry, tk.Entry, ttk.Spinbox)):
                return None
            action()
            return "break"

        return handler

    def _load_initial_paths(self) -> None:
        registry = self.services.registry
        for position, path in enumerate(self.initial_paths):
            track = registry.tracks[0] if position == 0 else registry.add()
            self.services.loader.load_file(track.id, path)

    def _rebuild_track_rows(self) -> None:
        for widgets in self.track_rows.values():
            for widget in widgets.values():
                widget.destroy()
        self.track_rows = {}
        for row, track in enumerate(self.services.registry.tracks):
            name = ttk.Label(self.tracks_frame, text=track.display_name, width=18, anchor="w")
            name.grid(row=row * 2, column=0, sticky="w", pady=(8, 0))
            word = tk.Text(
                self.tracks_frame,
                height=1,
                width=24,
                font=WORD_FONT,
                borderwidth=0,
                highlightthickness=0,
                state="disabled",
            )
            word.tag_configure("pivot", foreground=PIVOT_COLOR)
            word.tag_configure("bold", font=WORD_BOLD_FONT)
            word.tag_configure("hint", font=("Helvetica", 11), foreground="#777777")
            word.grid(row=row * 2, column=1, sticky="ew", pady=(8, 0))
            progress = ttk.Label(self.tracks_frame, width=16, anchor="e")
            progress.grid(row=row * 2, column=2, sticky="e", padx=6)
            actions = ttk.Frame(self.tracks_frame)
            actions.grid(row=row * 2, column=3, sticky="e")
            for text, command in (
                ("Open…", lambda track_id=track.id: self._on_open_file(track_id)),
                ("Export", lambda track_id=track.id: self._on_export(track_id)),
                ("Apply", lambda track_id=track.id: self._on_apply(track_id)),
                ("Remove", lambda track_id=track.id: self._on_remove_track(track_id)),
            ):
                ttk.Button(actions, text=text, command=command, width=7).pack(side="left", padx=1)
            meta = ttk.Label(self.tracks_frame, text=track_meta_text(track), anchor="w")
            meta.grid(row=row * 2 + 1, column=0, columnspan=4, sticky="w")
            self.track_rows[track.id] = {
                "name": name,
                "word": word,
                "progress": progress,
                "actions": actions,
                "meta": meta,
            }

    def _on_tracks_changed(self) -> None:
        self._rebuild_track_rows()
        self._refresh(force=True)

    def _schedule_refresh(self) -> None:
        if self.root is None:
            return
        self.refresh_job = self.root.after(REFRESH_MS, self._on_refresh_tick)

    def _on_refresh_tick(self) -> None:
        self.refresh_job = None
        if self.scheduler is not None:
            self.scheduler.drain()
        self._refresh()
        self._schedule_refresh()

    def _refresh(self, force: bool = False) -> None:
        engine = self.services.engine
        mode = self.mode_var.get()
        view = (engine.shared_index, engine.status, engine.pace_wpm, engine.max_track_length, mode)
        if not force and view == self._last_view:
            return
        self._last_view = view

        self.status_var.set(status_text(engine))
        indexes = engine.effective_indexes()
        for track, word in engine.current_words():
            widgets = self.track_rows.get(track.id)
            if widgets is None:
                continue
            widgets["progress"].configure(text=progress_text(track, indexes.get(track.id)))
            self._write_word(widgets["word"], word, mode)

        states = control_states(engine)
        for key, button in (
            ("play", self.play_button),
            ("reset", self.reset_button),
            ("prev", self.prev_button),
            ("next", self.next_button),
        ):
            button.state(["!disabled"] if states[key] else ["disabled"])
        self.play_button.configure(text="Pause" if engine.is_playing else "Play")

        any_loaded = self.services.registry.any_loaded
        self.seek_scale.state(["!disabled"] if any_loaded else ["disabled"])
        if not self.seek_dragging:
            self.seek_programmatic = True
            try:
                self.seek_scale.configure(to=float(max(0, engine.max_track_length - 1)))
                self.seek_var.set(float(engine.shared_index))
            finally:
                self.seek_programmatic = False

    @staticmethod
    def _write_word(widget: tk.Text, word: str | None, mode: str) -> None:
        widget.configure(state="normal")
        widget.delete("1.0", tk.END)
        if word is None:
            widget.insert("1.0", EMPTY_TRACK_HINT, ("hint",))
        else:
            for text, tag in emphasis_spans(word, mode):
                widget.insert(tk.END, text, (tag,) if tag else ())
        widget.configure(state="disabled")

    def _on_play_pause(self) -> None:
        if not self.services.engine.toggle() and self.services.engine.max_track_length == 0:
            self.message_var.set("Load a text file first.")
        self._refresh(force=True)

    def _on_prev(self) -> None:
        self.services.engine.prev()
        self._refresh(force=True)

    def _on_next(self) -> None:
        self.services.engine.next()
        self._refresh(force=True)

    def _on_reset(self) -> None:
        self.services.engine.reset()
        self._refresh(force=True)

    def _on_preset_selected(self) -> None:
        value = self.preset_var.get()
        if value == "custom":
            return
        self._apply_pace(value)

    def _on_pace_entered(self) -> None:
        self._apply_pace(self.pace_var.get())

    def _apply_pace(self, value: Any) -> None:
        pace = self.services.engine.set_pace(value)
        self.pace_var.set(str(pace))
        self.preset_var.set(preset_for_pace(pace))
        self._refresh(force=True)

    def _on_seek_press(self, _event: tk.Event[Any]) -> None:
        self.seek_dragging = True
        self.services.engine.begin_seek()

    def _on_seek_release(self, _event: tk.Event[Any]) -> None:
        self.seek_dragging = False
        self.services.engine.end_seek(int(float(self.seek_var.get())))
        self._refresh(force=True)

    def _on_seek_change(self, value: str) -> None:
        if self.seek_programmatic:
            return
        try:
            position = int(float(value))
        except ValueError:
            return
        self.services.engine.seek_to(position)
        self._refresh(force=True)

    def _on_add_track(self) -> None:
        self.services.registry.add()

    def _on_remove_track(self, track_id: int) -> None:
        self.services.registry.remove(track_id)

    def _on_open_file(self, track_id: int) -> None:
        path = filedialog.askopenfilename(
            title="Open text",
            filetypes=[("Text files", "*.txt"), ("All files", "*.*")],
        )
        if not path:
            return
        self.message_var.set(f"Loading {Path(path).name}…")
        self.services.loader.load_file(track_id, path)

    def _on_export(self, track_id: int) -> None:
        token = self.services.resume.export_token(track_id)
        if token is None:
            self.message_var.set("This track has no text to export.")
            return
        self.resume_var.set(token)
        assert self.root is not None
        self.root.clipboard_clear()
        self.root.clipboard_append(token)
        self.message_var.set("Resume token copied to clipboard.")

    def _on_apply(self, track_id: int) -> None:
        try:
            index = self.services.resume.apply_token(track_id, self.resume_var.get())
        except ResumeTokenError as exc:
            self.message_var.set(f"{type(exc).__name__}: {exc}")
            return
        self.message_var.set(f"Resumed at word {index + 1:,}.")
        self._refresh(force=True)

    def _on_close(self) -> None:
        if self.root is not None and self.refresh_job is not None:
            self.root.after_cancel(self.refresh_job)
            self.refresh_job = None
        if self.services is not None:
            self.services.shutdown()
        if self.root is not None:
            self.root.destroy()
            self.root = None


def create_tkinter_app(
    *,
    config: AppConfig,
    logger,
    paths: Sequence[str | Path] = (),
) -> TkReaderApp:
    return TkReaderApp(config=config, logger=logger, paths=paths)
