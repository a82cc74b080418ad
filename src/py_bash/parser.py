"""Tokenizer and argument parser for command lines.

A command line is split on runs of whitespace.  The first token names
the command; the rest are sorted into two groups:

- **Flags** — tokens starting with ``--`` (``--all`` sets flag
  ``all``).  Flags are boolean; there is no ``--name=value`` form.
- **Positional arguments** — everything else, numbered 0, 1, … in the
  order they appear, regardless of where flags sit between them.

There is no quoting, escaping, globbing or variable expansion.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

FLAG_PREFIX = "--"


@dataclass(frozen=True)
class Arguments:
    """Parsed command arguments."""

    positional: tuple[str, ...] = ()
    flags: Mapping[str, bool] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]

    def __post_init__(self) -> None:
        """Freeze the flags mapping."""
        object.__setattr__(self, "positional", tuple(self.positional))
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))

    def arg(self, index: int, default: str | None = None) -> str | None:
        """Return positional argument *index*, or *default* if absent."""
        if 0 <= index < len(self.positional):
            return self.positional[index]
        return default

    def flag(self, name: str) -> bool:
        """Return True if ``--name`` was given."""
        return self.flags.get(name, False)


def tokenize(line: str) -> list[str]:
    """Split a command line into tokens on runs of whitespace."""
    return line.split()


def parse_args(tokens: Sequence[str]) -> Arguments:
    """Sort argument tokens into positional arguments and flags.

    A bare ``--`` has no name and is kept as a positional argument.
    """
    positional: list[str] = []
    flags: dict[str, bool] = {}
    for token in tokens:
        if token.startswith(FLAG_PREFIX) and len(token) > len(FLAG_PREFIX):
            flags[token[len(FLAG_PREFIX) :]] = True
        else:
            positional.append(token)
    return Arguments(positional=tuple(positional), flags=flags)


def parse_line(line: str) -> tuple[str, Arguments]:
    """Split a line into its command name and parsed arguments.

    Returns ``("", Arguments())`` for a blank line.
    """
    tokens = tokenize(line)
    if not tokens:
        return ("", Arguments())
    return (tokens[0], parse_args(tokens[1:]))
