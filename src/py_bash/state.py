"""Session state — the immutable snapshot passed through the interpreter.

A session is three values:

- **history** — the transcript, a tuple of ``HistoryEntry`` lines in
  the order they were produced.
- **structure** — the root ``Directory`` of the virtual filesystem.
- **cwd** — the working directory, relative to the root (``""`` is
  the root itself).

Every operation returns a new ``SessionState``; nothing is updated in
place.  Commands describe their effect with a ``StateUpdate`` holding
only the fields they change, and ``SessionState.apply`` merges it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from py_bash.errors import ShellError
from py_bash.paths import Resolution, resolve_directory
from py_bash.structure import Directory, from_dict


@dataclass(frozen=True)
class HistoryEntry:
    """One transcript line.

    Attributes:
        value: The text of the line.
        cwd: Set only on echo lines (a submitted command); holds the
            working directory the command was typed in so the
            front-end can render the prompt in front of it.

    """

    value: str
    cwd: str | None = None

    @property
    def is_echo(self) -> bool:
        """Return True if this line echoes a submitted command."""
        return self.cwd is not None

    @classmethod
    def from_data(cls, data: HistoryEntry | Mapping[str, Any]) -> HistoryEntry:
        """Build an entry from seed data (``{"value": ..., "cwd": ...}``)."""
        if isinstance(data, HistoryEntry):
            return data
        if not isinstance(data, Mapping) or "value" not in data:
            msg = f"History entry must be a mapping with a 'value' key: {data!r}"
            raise TypeError(msg)
        cwd = data.get("cwd")
        return cls(value=str(data["value"]), cwd=None if cwd is None else str(cwd))


@dataclass(frozen=True)
class StateUpdate:
    """A partial session update; ``None`` fields are left unchanged."""

    history: tuple[HistoryEntry, ...] | None = None
    structure: Directory | None = None
    cwd: str | None = None


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of a shell session."""

    history: tuple[HistoryEntry, ...] = ()
    structure: Directory = Directory()
    cwd: str = ""

    @classmethod
    def create(
        cls,
        *,
        history: Iterable[HistoryEntry | Mapping[str, Any]] = (),
        structure: Directory | Mapping[str, Any] | None = None,
        cwd: str = "",
    ) -> SessionState:
        """Build a validated state from plain seed data.

        Args:
            history: Initial transcript lines.
            structure: The root directory, or plain nested mappings
                accepted by ``structure.from_dict``.
            cwd: Initial working directory.

        Raises:
            TypeError: If the seed data has the wrong shape.
            ValueError: If *cwd* is not a directory in *structure*.

        """
        root = structure if isinstance(structure, Directory) else from_dict(structure or {})
        state = cls(
            history=tuple(HistoryEntry.from_data(entry) for entry in history),
            structure=root,
            cwd=cwd,
        )
        return replace(state, cwd=state.validate().cwd)

    def validate(self) -> Resolution:
        """Check that ``cwd`` names an existing directory.

        The path is resolved from the root, so ``"dir1/.."`` or
        ``"/dir1/"`` are accepted; the returned resolution carries
        the normalised form.

        Raises:
            ValueError: If it does not.

        """
        try:
            return resolve_directory(self.structure, "", "/" + self.cwd)
        except ShellError as exc:
            msg = f"Working directory is not a directory: /{self.cwd}"
            raise ValueError(msg) from exc

    def apply(self, update: StateUpdate) -> SessionState:
        """Return a new state with the non-``None`` fields of *update*."""
        changes: dict[str, Any] = {}
        if update.history is not None:
            changes["history"] = update.history
        if update.structure is not None:
            changes["structure"] = update.structure
        if update.cwd is not None:
            changes["cwd"] = update.cwd
        return replace(self, **changes)

    def append(self, *values: str) -> tuple[HistoryEntry, ...]:
        """Return the history extended with plain output lines."""
        return self.history + tuple(HistoryEntry(value) for value in values)

    def echo(self, line: str) -> SessionState:
        """Return a state whose history ends with the prompt echo of *line*."""
        return replace(self, history=(*self.history, HistoryEntry(line, cwd=self.cwd)))
