"""The command table — command names mapped to their descriptors.

Each interpreter builds its own table once, at construction time:
the built-in commands first, then any consumer-supplied extensions
(which may replace a built-in of the same name).  The table is
read-only afterwards, so there is no process-wide registry to mutate
and two interpreters never see each other's extensions.

An extension only has to provide a callable ``exec(state, args)``
returning a ``StateUpdate``; a ``description`` attribute is optional
and used by ``help``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, Protocol

from py_bash.commands import BUILTINS, help_command
from py_bash.parser import Arguments
from py_bash.state import SessionState, StateUpdate


class CommandDescriptor(Protocol):
    """What the interpreter needs from a command."""

    def exec(self, state: SessionState, args: Arguments) -> StateUpdate:
        """Run the command and return the state fields it changed."""
        ...


class CommandTable(Mapping[str, CommandDescriptor]):
    """Immutable mapping of command names to descriptors."""

    def __init__(self, extensions: Mapping[str, Any] | None = None) -> None:
        """Build the table from the built-ins plus *extensions*.

        Args:
            extensions: Extra commands keyed by name.

        Raises:
            TypeError: If an extension has no callable ``exec``.

        """
        commands: dict[str, CommandDescriptor] = {"help": help_command(self.describe)}
        commands.update((command.name, command) for command in BUILTINS)
        for name, descriptor in (extensions or {}).items():
            if not callable(getattr(descriptor, "exec", None)):
                msg = f"Extension command {name!r} must define a callable 'exec'"
                raise TypeError(msg)
            commands[name] = descriptor
        self._commands: Mapping[str, CommandDescriptor] = MappingProxyType(commands)

    def __getitem__(self, name: str) -> CommandDescriptor:
        """Return the descriptor registered under *name*."""
        return self._commands[name]

    def __iter__(self) -> Iterator[str]:
        """Iterate over command names in registration order."""
        return iter(self._commands)

    def __len__(self) -> int:
        """Return the number of registered commands."""
        return len(self._commands)

    def describe(self) -> list[tuple[str, str]]:
        """Return ``(name, description)`` for every command."""
        return [
            (name, str(getattr(descriptor, "description", "")))
            for name, descriptor in self._commands.items()
        ]
