"""Tests for the interpreter — end-to-end command execution.

``Bash.execute`` echoes each line into the transcript, dispatches the
command, merges its update and records the line for recall.
"""

import pytest

from py_bash.bash import Bash
from py_bash.commands import Command
from py_bash.errors import NoSuchFile
from py_bash.logging import LogLevel
from py_bash.parser import Arguments
from py_bash.state import HistoryEntry, SessionState, StateUpdate
from py_bash.structure import Directory, File


def _state() -> SessionState:
    """Create the standard starting state."""
    return SessionState.create(
        structure={
            "file1": {"content": "hi"},
            ".hidden": {"content": ""},
            "dir1": {"childDir": {}, "dir1File": {"content": "x"}},
        }
    )


def _run(bash: Bash, state: SessionState, *lines: str) -> SessionState:
    """Execute several lines in sequence."""
    for line in lines:
        state = bash.execute(line, state)
    return state


def _output(before: SessionState, after: SessionState) -> list[str]:
    """Return the non-echo lines added between two states."""
    return [entry.value for entry in after.history[len(before.history) :] if not entry.is_echo]


class TestExecute:
    """Verify dispatch and transcript ordering."""

    def test_echo_precedes_output(self) -> None:
        """The typed line is echoed with its cwd before the output."""
        state = Bash().execute("pwd", _state())
        assert state.history == (HistoryEntry("pwd", cwd=""), HistoryEntry("/"))

    def test_raw_line_echoed(self) -> None:
        """The echo keeps the line exactly as typed."""
        state = Bash().execute("  ls   dir1 ", _state())
        assert state.history[0] == HistoryEntry("  ls   dir1 ", cwd="")

    def test_unknown_command(self) -> None:
        """Unknown names add a not-found line and change nothing else."""
        before = _state()
        after = Bash().execute("foobar --x", before)
        assert after.history == (
            HistoryEntry("foobar --x", cwd=""),
            HistoryEntry("foobar: command not found"),
        )
        assert after.structure is before.structure
        assert after.cwd == before.cwd

    def test_blank_line(self) -> None:
        """A blank line echoes an empty prompt and runs nothing."""
        bash = Bash()
        state = bash.execute("   ", _state())
        assert state.history == (HistoryEntry("   ", cwd=""),)
        assert bash.cursor.entries == ()

    def test_input_state_untouched(self) -> None:
        """execute returns a new state; the old one is unchanged."""
        before = _state()
        Bash().execute("mkdir newDir", before)
        assert before.history == ()
        assert "newDir" not in before.structure

    def test_rejects_non_state(self) -> None:
        """Passing something else is a programmer error."""
        with pytest.raises(TypeError, match="SessionState"):
            Bash().execute("ls", {"history": []})  # type: ignore[arg-type]

    def test_records_for_recall(self) -> None:
        """Submitted lines are recorded and end any recall."""
        bash = Bash()
        state = _run(bash, _state(), "ls", "pwd")
        bash.get_prev_command()
        bash.execute("cd dir1", state)
        assert bash.cursor.entries == ("ls", "pwd", "cd dir1")
        assert bash.cursor.position is None

    def test_unknown_commands_recorded(self) -> None:
        """Even failed lines can be recalled."""
        bash = Bash()
        bash.execute("nope", _state())
        assert bash.get_prev_command() == "nope"


class TestEndToEnd:
    """Verify whole sessions."""

    def test_cat_nested_file(self) -> None:
        """cat prints the file's content."""
        before = _state()
        after = Bash().execute("cat dir1/dir1File", before)
        assert _output(before, after) == ["x"]

    def test_cat_directory(self) -> None:
        """cat on a directory prints an error."""
        before = _state()
        after = Bash().execute("cat dir1", before)
        assert _output(before, after) == ["is a directory: dir1"]

    def test_ls_all(self) -> None:
        """ls --all shows dotfiles."""
        before = _state()
        after = Bash().execute("ls --all", before)
        assert _output(before, after) == ["file1 .hidden dir1"]

    def test_cd_then_pwd(self) -> None:
        """pwd shows where cd went."""
        state = _run(Bash(), _state(), "cd dir1/childDir", "pwd")
        assert state.history[-1].value == "/dir1/childDir"
        assert state.cwd == "dir1/childDir"

    def test_cd_back_to_root(self) -> None:
        """'../../' from two levels deep reaches the root."""
        state = _run(Bash(), _state(), "cd dir1/childDir", "cd ../../")
        assert state.cwd == ""

    def test_echo_carries_cwd(self) -> None:
        """Echo lines record the cwd the command was typed in."""
        state = _run(Bash(), _state(), "cd dir1", "ls")
        assert state.history[-2] == HistoryEntry("ls", cwd="dir1")

    def test_clear_empties_transcript(self) -> None:
        """clear leaves no lines, not even its own echo."""
        state = _run(Bash(), _state(), "ls", "pwd", "help", "clear")
        assert state.history == ()

    def test_mkdir_then_ls(self) -> None:
        """A new directory is listed exactly once, after existing names."""
        before = _run(Bash(), _state(), "mkdir dir1/new")
        after = Bash().execute("ls dir1", before)
        assert _output(before, after) == ["childDir dir1File new"]

    def test_mkdir_existing_leaves_structure(self) -> None:
        """mkdir on a taken name adds one error line only."""
        before = _state()
        after = Bash().execute("mkdir file1", before)
        assert after.structure is before.structure
        assert _output(before, after) == ["file exists: file1"]

    def test_mkdir_shares_siblings(self) -> None:
        """Only the path to the new directory is rebuilt."""
        before = _state()
        after = Bash().execute("mkdir dir1/childDir/deep", before)
        assert after.structure["file1"] is before.structure["file1"]
        new_dir1 = after.structure["dir1"]
        old_dir1 = before.structure["dir1"]
        assert isinstance(new_dir1, Directory)
        assert isinstance(old_dir1, Directory)
        assert new_dir1["dir1File"] is old_dir1["dir1File"]

    def test_touch_then_cat(self) -> None:
        """A touched file is empty."""
        state = _run(Bash(), _state(), "touch notes", "cat notes")
        assert state.history[-1] == HistoryEntry("")
        assert state.structure["notes"] == File("")

    def test_cd_up_from_anywhere_reaches_root(self) -> None:
        """Repeated 'cd ..' from any directory ends at '/'."""
        bash = Bash()
        state = _run(bash, _state(), "mkdir dir1/childDir/a", "cd dir1/childDir/a")
        for _ in range(3):
            state = bash.execute("cd ..", state)
        state = bash.execute("pwd", state)
        assert state.history[-1].value == "/"


class TestExtensions:
    """Verify consumer-supplied commands."""

    def test_extension_runs(self) -> None:
        """Extensions receive the echoed state and parsed args."""

        def _greet(state: SessionState, args: Arguments) -> StateUpdate:
            name = args.arg(0, "world")
            return StateUpdate(history=state.append(f"hello {name}"))

        bash = Bash({"greet": Command("greet", "Say hello.", _greet)})
        state = bash.execute("greet there", _state())
        assert [entry.value for entry in state.history] == ["greet there", "hello there"]

    def test_extension_may_raise_shell_error(self) -> None:
        """A ShellError from an extension becomes one output line."""

        class _Failing:
            def exec(self, _state: SessionState, _args: Arguments) -> StateUpdate:
                raise NoSuchFile("ghost")

        bash = Bash({"fail": _Failing()})
        state = bash.execute("fail", _state())
        assert state.history[-1] == HistoryEntry("no such file or directory: ghost")
        assert bash.logger.filter(min_level=LogLevel.WARNING)

    def test_missing_exec_fails_fast(self) -> None:
        """Constructing with a broken extension raises."""
        with pytest.raises(TypeError):
            Bash({"broken": object()})

    def test_help_lists_extension(self) -> None:
        """help includes extension commands."""
        bash = Bash({"greet": Command("greet", "Say hello.", lambda s, _a: StateUpdate())})
        state = bash.execute("help", _state())
        assert "greet - Say hello." in [entry.value for entry in state.history]


class TestCompletion:
    """Verify completion through the interpreter."""

    def test_autocomplete(self) -> None:
        """Unambiguous tokens complete."""
        assert Bash().autocomplete("dir", _state()) == "dir1"

    def test_complete_line(self) -> None:
        """The last token of a line is completed and the line rejoined."""
        assert Bash().complete_line("cat dir1/dir1", _state()) == "cat dir1/dir1File"

    def test_complete_line_single_token(self) -> None:
        """A line with one token completes that token."""
        assert Bash().complete_line("fi", _state()) == "file1"

    def test_complete_line_no_match(self) -> None:
        """No unambiguous completion returns None."""
        assert Bash().complete_line("ls zz", _state()) is None


class TestRecall:
    """Verify the recall methods on the interpreter."""

    def test_round_trip(self) -> None:
        """After N commands, N prevs then N nexts clear the input."""
        bash = Bash()
        lines = ["ls", "pwd", "cd dir1"]
        _run(bash, _state(), *lines)
        recalled = [bash.get_prev_command() for _ in lines if bash.has_prev_command()]
        assert recalled == ["cd dir1", "pwd", "ls"]
        forward = [bash.get_next_command() for _ in lines]
        assert forward == ["pwd", "cd dir1", None]
        assert not bash.has_next_command()

    def test_sessions_isolated(self) -> None:
        """Two interpreters keep separate recall buffers."""
        first, second = Bash(), Bash()
        first.execute("ls", _state())
        assert not second.has_prev_command()


class TestLogging:
    """Verify interpreter activity is logged."""

    def test_dispatch_logged(self) -> None:
        """Running a command logs an INFO entry."""
        bash = Bash()
        bash.execute("pwd", _state())
        messages = [entry.message for entry in bash.logger.filter(min_level=LogLevel.INFO)]
        assert messages == ["exec pwd"]

    def test_unknown_logged_as_warning(self) -> None:
        """Unknown commands log a WARNING."""
        bash = Bash()
        bash.execute("nope", _state())
        warnings = bash.logger.filter(min_level=LogLevel.WARNING)
        assert [entry.message for entry in warnings] == ["nope: command not found"]
