"""Interpreter activity log.

Every ``Bash`` keeps a record of what its session did, separate from
the transcript the user sees:

- ``exec <name>`` at INFO for each dispatched command,
- ``<name>: command not found`` at WARNING for unknown names,
- the error text at WARNING when an extension raises ``ShellError``,
- recall steps and completion results at DEBUG.

A front-end can show the log, and tests can assert on it without
parsing transcript lines.  The log belongs to one interpreter, so two
sessions in the same process never mix records.  It is bounded: a
long-running web session keeps only its most recent entries.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum

# Entries kept per interpreter before the oldest are dropped.
DEFAULT_CAPACITY = 1000


class LogLevel(IntEnum):
    """How noteworthy an interpreter event is; levels compare with ``<``."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """One interpreter event.

    Attributes:
        level: The severity of this event.
        message: What happened, e.g. ``exec ls``.
        source: The component that recorded it (``"bash"``).

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Bounded, append-only record of interpreter events."""

    def __init__(
        self,
        *,
        min_level: LogLevel = LogLevel.DEBUG,
        capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        """Create an empty log.

        Args:
            min_level: Events below this level are not recorded.
            capacity: How many entries to keep; older ones are dropped.

        """
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._min_level = min_level

    @property
    def entries(self) -> list[LogEntry]:
        """Return the kept entries, oldest first."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Record an event unless it is below the minimum level."""
        if level < self._min_level:
            return
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return kept entries at or above *min_level* and from *source*."""
        return [
            entry
            for entry in self._entries
            if (min_level is None or entry.level >= min_level)
            and (source is None or entry.source == source)
        ]

    def tail(self, count: int) -> list[LogEntry]:
        """Return the *count* most recent entries, oldest first."""
        if count <= 0:
            return []
        return list(self._entries)[-count:]

    def clear(self) -> None:
        """Forget every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of kept entries."""
        return len(self._entries)
