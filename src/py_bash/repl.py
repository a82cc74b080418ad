"""Interactive terminal for an in-memory shell session.

The REPL is the thin I/O wrapper around the interpreter:

    1. **Read** — display a prompt and read user input.
    2. **Eval** — pass the line to ``Bash.execute()``.
    3. **Print** — display the transcript lines the command added.
    4. **Loop** — until Ctrl+D or Ctrl+C.

The helpers (``build_prompt``, ``format_entry``, ``new_lines``) are
pure and testable.  ``run()`` is the I/O entrypoint.
"""

import argparse
import readline
from collections.abc import Sequence
from pathlib import Path

from py_bash.bash import Bash
from py_bash.seed import DEFAULT_SEED, load_seed, state_from_seed
from py_bash.state import HistoryEntry, SessionState

DEFAULT_PREFIX = "hacker@default"

# ANSI: clear screen and move the cursor home.
_CLEAR_SCREEN = "\033[2J\033[H"


def build_prompt(prefix: str, cwd: str) -> str:
    """Build the prompt string, e.g. ``hacker@default ~dir1 $ ``."""
    return f"{prefix} ~{cwd} $ "


def format_entry(entry: HistoryEntry, prefix: str = DEFAULT_PREFIX) -> str:
    """Render one transcript line, with the prompt in front of echo lines."""
    if entry.cwd is not None:
        return build_prompt(prefix, entry.cwd) + entry.value
    return entry.value


def new_lines(old: SessionState, new: SessionState) -> list[HistoryEntry] | None:
    """Return the output lines *new* added after the echo of the command.

    Returns None when the transcript no longer extends the old one
    (after ``clear``), meaning the screen should be redrawn.
    """
    if new.history[: len(old.history)] != old.history:
        return None
    return [entry for entry in new.history[len(old.history) :] if not entry.is_echo]


class _ReadlineCompleter:
    """Readline callback that completes the whole line via the interpreter."""

    def __init__(self, bash: Bash, state_ref: list[SessionState]) -> None:
        self._bash = bash
        self._state_ref = state_ref

    def complete(self, text: str, state: int) -> str | None:
        """Return the single completion of *text* on the first call."""
        if state > 0:
            return None
        return self._bash.autocomplete(text, self._state_ref[0])


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="py-bash", description="An in-memory shell session.")
    parser.add_argument("--seed", type=Path, help="JSON file with the initial session")
    parser.add_argument("--prefix", default=DEFAULT_PREFIX, help="text shown before the prompt")
    return parser.parse_args(argv)


def run(argv: Sequence[str] | None = None) -> None:
    """Run the interactive terminal.

    This is the ``py-bash`` console entry point.  It handles:
    - Loading the seed (or the default demo tree).
    - Tab completion through readline.
    - The read-eval-print loop.
    - Graceful handling of Ctrl+C and Ctrl+D.
    """
    options = _parse_args(argv)
    state = load_seed(options.seed) if options.seed else state_from_seed(DEFAULT_SEED)
    bash = Bash()

    # The completer reads the current state through a one-slot list.
    state_ref = [state]
    readline.set_completer(_ReadlineCompleter(bash, state_ref).complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    for entry in state.history:
        print(format_entry(entry, options.prefix))  # noqa: T201

    try:
        while True:
            try:
                line = input(build_prompt(options.prefix, state.cwd))
            except EOFError:
                # Ctrl+D — graceful exit
                print()  # noqa: T201
                break

            new_state = bash.execute(line, state)
            added = new_lines(state, new_state)
            if added is None:
                print(_CLEAR_SCREEN, end="")  # noqa: T201
                added = list(new_state.history)
            for entry in added:
                print(format_entry(entry, options.prefix))  # noqa: T201
            state = new_state
            state_ref[0] = state

    except KeyboardInterrupt:
        # Ctrl+C — graceful exit
        print("\nInterrupted.")  # noqa: T201
