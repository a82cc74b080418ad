"""The interpreter — runs command lines against a session state.

``Bash.execute(line, state)`` is the single entry point for commands:

1. Split the line into a command name and arguments.
2. Echo the line into the transcript with the prompt's working
   directory, so output always follows the command that produced it.
3. Look the name up in the command table.  Unknown names add a
   ``command not found`` line and change nothing else.
4. Run the command against the echoed state and merge the fields it
   returns; everything else carries over.
5. Record the raw line in the recall buffer and end any recall.

User errors never raise: they become transcript lines.  Misusing the
API (passing something that is not a ``SessionState``, registering an
extension without ``exec``) raises immediately.

An interpreter holds per-session mutable pieces (the recall cursor and
the log), so each session gets its own ``Bash``.  The session state
itself is immutable and is replaced wholesale by every call.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from py_bash.autocomplete import autocomplete
from py_bash.errors import ShellError, command_not_found
from py_bash.logging import Logger, LogLevel
from py_bash.parser import parse_line
from py_bash.recall import HistoryCursor
from py_bash.state import SessionState, StateUpdate
from py_bash.table import CommandTable

_SOURCE = "bash"


class Bash:
    """Command interpreter over an immutable ``SessionState``."""

    def __init__(
        self,
        extensions: Mapping[str, Any] | None = None,
        *,
        logger: Logger | None = None,
    ) -> None:
        """Create an interpreter.

        Args:
            extensions: Extra commands keyed by name, merged over the
                built-ins.  Each needs a callable ``exec(state, args)``.
            logger: Where to record activity (a fresh one by default).

        Raises:
            TypeError: If an extension has no callable ``exec``.

        """
        self.commands = CommandTable(extensions)
        self.cursor = HistoryCursor()
        self.logger = logger if logger is not None else Logger()

    @property
    def command_names(self) -> list[str]:
        """Return every registered command name."""
        return list(self.commands)

    def execute(self, line: str, state: SessionState) -> SessionState:
        """Run one command line and return the new session state.

        Args:
            line: The raw input line.
            state: The current session state.

        Returns:
            The state after echoing the line and running the command.

        Raises:
            TypeError: If *state* is not a ``SessionState``.

        """
        if not isinstance(state, SessionState):
            msg = f"execute() needs a SessionState, not {type(state).__name__}"
            raise TypeError(msg)

        name, args = parse_line(line)
        echoed = state.echo(line)
        if not name:
            self.cursor.reset()
            return echoed
        self.cursor.record(line)

        descriptor = self.commands.get(name)
        if descriptor is None:
            message = command_not_found(name)
            self.logger.log(LogLevel.WARNING, message, source=_SOURCE)
            return echoed.apply(StateUpdate(history=echoed.append(message)))

        self.logger.log(LogLevel.INFO, f"exec {name}", source=_SOURCE)
        try:
            update = descriptor.exec(echoed, args)
        except ShellError as e:
            # Extensions may report user errors by raising.
            self.logger.log(LogLevel.WARNING, f"{name}: {e}", source=_SOURCE)
            update = StateUpdate(history=echoed.append(str(e)))
        return echoed.apply(update)

    def autocomplete(self, token: str, state: SessionState) -> str | None:
        """Return the unambiguous completion of *token*, or None."""
        completion = autocomplete(token, state)
        self.logger.log(LogLevel.DEBUG, f"complete {token!r} -> {completion!r}", source=_SOURCE)
        return completion

    def complete_line(self, line: str, state: SessionState) -> str | None:
        """Complete the last space-separated token of *line*.

        Returns:
            The whole line with its last token completed, or None if
            that token has no unambiguous completion.

        """
        head, sep, token = line.rpartition(" ")
        completion = self.autocomplete(token, state)
        if completion is None:
            return None
        return head + sep + completion

    # -- Recall --------------------------------------------------------------

    def has_prev_command(self) -> bool:
        """Return True if an older submitted line can be recalled."""
        return self.cursor.has_prev()

    def get_prev_command(self) -> str | None:
        """Recall the previous submitted line."""
        line = self.cursor.get_prev()
        self.logger.log(LogLevel.DEBUG, f"recall prev at {self.cursor.position}", source=_SOURCE)
        return line

    def has_next_command(self) -> bool:
        """Return True while a recall is in progress."""
        return self.cursor.has_next()

    def get_next_command(self) -> str | None:
        """Recall the next submitted line, or None to clear the input."""
        line = self.cursor.get_next()
        self.logger.log(LogLevel.DEBUG, f"recall next at {self.cursor.position}", source=_SOURCE)
        return line
