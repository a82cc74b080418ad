"""Tests for the interactive terminal helpers.

The REPL loop itself is I/O; its pure helpers are tested directly and
the loop is driven with patched ``input``.
"""

from unittest.mock import patch

import pytest

from py_bash.bash import Bash
from py_bash.repl import build_prompt, format_entry, new_lines, run
from py_bash.state import HistoryEntry, SessionState


def _state() -> SessionState:
    """Create a state with one directory."""
    return SessionState.create(structure={"dir1": {"file": {"content": "x"}}})


class TestBuildPrompt:
    """Verify prompt formatting."""

    def test_root(self) -> None:
        """The root shows as a bare tilde."""
        assert build_prompt("me@host", "") == "me@host ~ $ "

    def test_nested(self) -> None:
        """Nested directories follow the tilde."""
        assert build_prompt("me@host", "dir1") == "me@host ~dir1 $ "


class TestFormatEntry:
    """Verify transcript rendering."""

    def test_echo_gets_prompt(self) -> None:
        """Echo lines are prefixed by the prompt they were typed at."""
        entry = HistoryEntry("ls", cwd="dir1")
        assert format_entry(entry, "me@host") == "me@host ~dir1 $ ls"

    def test_output_plain(self) -> None:
        """Output lines render as-is."""
        assert format_entry(HistoryEntry("x"), "me@host") == "x"


class TestNewLines:
    """Verify picking out a command's output."""

    def test_output_after_echo(self) -> None:
        """Only the lines after the echo are returned."""
        before = _state()
        after = Bash().execute("cat dir1/file", before)
        assert new_lines(before, after) == [HistoryEntry("x")]

    def test_clear_requests_redraw(self) -> None:
        """A shrunk transcript returns None."""
        before = Bash().execute("pwd", _state())
        after = Bash().execute("clear", before)
        assert new_lines(before, after) is None


class TestRun:
    """Verify the loop with scripted input."""

    def test_runs_until_eof(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Commands run and their output is printed; Ctrl+D exits."""
        with patch("builtins.input", side_effect=["pwd", "cd src", "pwd", EOFError]):
            run([])
        out = capsys.readouterr().out
        assert "/src" in out.splitlines()

    def test_keyboard_interrupt(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Ctrl+C exits cleanly."""
        with patch("builtins.input", side_effect=KeyboardInterrupt):
            run(["--prefix", "me@host"])
        assert "Interrupted." in capsys.readouterr().out
