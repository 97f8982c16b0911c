import json

import pytest

from speedread import main as cli
from speedread.domain.resume_token import ResumeToken, decode_resume_token, encode_resume_token
from speedread.domain.text import fingerprint


@pytest.fixture(autouse=True)
def _log_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("LOG_LEVEL", "ERROR")


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_stats_prints_word_count_and_fingerprint(tmp_path, capsys):
    path = _write(tmp_path, "a.txt", "one two  three")

    assert cli.main(["stats", str(path)]) == cli.EXIT_OK

    payload = json.loads(capsys.readouterr().out)
    assert payload == {"words": 3, "fingerprint": fingerprint("one two  three")}


def test_inspect_prints_fields_or_rejects(capsys):
    token = encode_resume_token(ResumeToken("abc", 7, track_name="a.txt"))

    assert cli.main(["inspect", token]) == cli.EXIT_OK
    assert json.loads(capsys.readouterr().out) == {"v": 1, "fp": "abc", "i": 7, "n": "a.txt"}

    assert cli.main(["inspect", "sr1.!!"]) == cli.EXIT_TOKEN_REJECTED
    assert "MalformedTokenError" in capsys.readouterr().err


def test_export_binds_token_to_file_content(tmp_path, capsys):
    text = "a b c d e f"
    path = _write(tmp_path, "letters.txt", text)

    assert cli.main(["export", str(path), "--index", "3"]) == cli.EXIT_OK

    token = decode_resume_token(capsys.readouterr().out.strip())
    assert token.fingerprint == fingerprint(text)
    assert token.index == 3
    assert token.word_at_export == "d"
    assert token.track_name == "letters.txt"


def test_export_of_empty_file_fails(tmp_path, capsys):
    path = _write(tmp_path, "empty.txt", "   ")

    assert cli.main(["export", str(path)]) == cli.EXIT_TOKEN_REJECTED
    assert "no words" in capsys.readouterr().err


def test_play_runs_tracks_together_until_auto_stop(tmp_path, capsys):
    long_path = _write(tmp_path, "long.txt", "a b c d e")
    short_path = _write(tmp_path, "short.txt", "x y")

    code = cli.main(
        ["play", str(long_path), str(short_path), "--wpm", "1500", "--mode", "plain"]
    )

    assert code == cli.EXIT_OK
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0] == "long.txt [1 / 5] a | short.txt [1 / 2] x"
    assert lines[-2] == "long.txt [5 / 5] e | short.txt [2 / 2] y"
    resume = decode_resume_token(lines[-1].removeprefix("resume: "))
    assert resume.index == 4
    assert resume.fingerprint == fingerprint("a b c d e")


def test_play_resumes_from_token_and_rejects_foreign_token(tmp_path, capsys):
    path = _write(tmp_path, "long.txt", "a b c d e")
    token = encode_resume_token(ResumeToken(fingerprint("a b c d e"), 3))

    assert cli.main(["play", str(path), "--wpm", "1500", "--mode", "plain", "--resume", token]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0] == "long.txt [4 / 5] d"

    foreign = encode_resume_token(ResumeToken(fingerprint("other"), 3))
    assert cli.main(["play", str(path), "--resume", foreign]) == cli.EXIT_TOKEN_REJECTED
    assert "FingerprintMismatchError" in capsys.readouterr().err


def test_chunks_prints_requested_chunk(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("WORDS_PER_CHUNK", raising=False)
    words = " ".join(f"w{n}" for n in range(12))
    path = _write(tmp_path, "chunky.txt", words)

    assert cli.main(["chunks", str(path), "--words-per-chunk", "5", "--chunk", "2", "--mode", "plain"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == ["w10 w11", "chunk 3 / 3"]


@pytest.mark.parametrize("command", ["stats", "chunks"])
def test_unreadable_file_reports_error_without_traceback(tmp_path, capsys, command):
    missing = tmp_path / "missing.txt"

    assert cli.main([command, str(missing)]) == cli.EXIT_READ_FAILED

    err = capsys.readouterr().err
    assert "Cannot read" in err
    assert "missing.txt" in err


def test_gui_command_launches_desktop_reader_with_paths(tmp_path, monkeypatch):
    pytest.importorskip("tkinter")
    from speedread.ui import tkinter_app

    launched = []

    class _App:
        def __init__(self, **kwargs):
            self.kwargs = kwargs

        def launch(self):
            launched.append(self.kwargs)

    monkeypatch.setattr(tkinter_app, "create_tkinter_app", lambda **kwargs: _App(**kwargs))
    path = _write(tmp_path, "a.txt", "a b")

    assert cli.main(["gui", str(path)]) == cli.EXIT_OK

    assert launched[0]["paths"] == [path]
    assert launched[0]["config"].emphasis_mode in ("pivot", "bionic", "plain")
