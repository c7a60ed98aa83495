"""Unit tests for :mod:`pathkit.entrypoints.cli.helpers.messages`.

Glyphs are chosen from the encoding of Click's stderr stream at call time, and
every status line is written bold and colored to stderr so stdout keeps only
command results.
"""

import io
import sys

import click
import pytest

from pathkit.entrypoints.cli.helpers.messages import (
    _supports_character,
    caution_glyph,
    success,
    success_glyph,
    warn,
)

SET_YELLOW = "\x1b[33m"
SET_GREEN = "\x1b[32m"
SET_BOLD = "\x1b[1m"
RESET = "\x1b[0m"


class FakeTTY(io.StringIO):
    """A TTY-like text stream with a settable ``encoding``."""

    def __init__(self, encoding: str | None):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self) -> str | None:
        return self._encoding

    @encoding.setter
    def encoding(self, value: str | None) -> None:
        self._encoding = value

    def isatty(self) -> bool:
        return True


@pytest.fixture
def stderr_as(monkeypatch):
    """Route Click's stderr lookup and ``sys.stderr`` to a FakeTTY."""

    def install(encoding: str | None) -> FakeTTY:
        stream = FakeTTY(encoding)
        monkeypatch.setattr(click, "get_text_stream", lambda name: stream)
        monkeypatch.setattr(sys, "stderr", stream, raising=False)
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("CLICOLOR", "1")
        return stream

    return install


@pytest.mark.parametrize(
    ("encoding", "glyphs"),
    [
        ("ascii", ("[!]", "[OK]")),
        ("latin-1", ("[!]", "[OK]")),
        (None, ("[!]", "[OK]")),
        ("utf-8", ("⚠️", "✅")),
    ],
)
def test_glyphs_follow_stream_encoding(stderr_as, encoding, glyphs):
    stderr_as(encoding)
    assert (caution_glyph(), success_glyph()) == glyphs


def test_supports_character_requeries_stream_each_call(monkeypatch):
    """Switching the stream between calls changes the answer."""
    encodings = iter(["ascii", "utf-8"])
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY(next(encodings)))

    assert _supports_character("✅") is False
    assert _supports_character("✅") is True


@pytest.mark.parametrize(
    ("func", "glyph", "color_code"),
    [
        (warn, "⚠️", SET_YELLOW),
        (success, "✅", SET_GREEN),
    ],
)
def test_messages_emit_styled_stderr(stderr_as, func, glyph, color_code):
    stream = stderr_as("utf-8")

    func("Skipped '/work/app.bin': target exists.")

    out = stream.getvalue()
    assert f"{glyph}  Skipped '/work/app.bin': target exists." in out
    assert SET_BOLD in out
    assert color_code in out
    assert out.rstrip("\n").endswith(RESET)


def test_ascii_terminal_gets_ascii_prefix(stderr_as):
    stream = stderr_as("ascii")
    success("Copied 'build' to 'dist/build'.")
    assert "[OK]  Copied 'build' to 'dist/build'." in stream.getvalue()


def test_messages_leave_stdout_alone(monkeypatch, capsys):
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY("utf-8"))
    warn("careful")
    captured = capsys.readouterr()
    assert "careful" in captured.err
    assert captured.out == ""
