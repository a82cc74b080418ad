"""Command recall — the up/down arrow history of submitted lines.

The recall buffer is separate from the session transcript: it holds
the raw lines the user submitted, not the rendered output, and it
belongs to the interpreter rather than to the immutable session state.

``position`` is ``None`` while the user is typing a fresh line.  While
recalling it counts back from the most recent entry (0 is the most
recent, 1 the one before, …).  Walking back stops at the oldest entry;
walking forward past the most recent entry ends the recall and tells
the caller to clear the input.
"""

from __future__ import annotations

from collections.abc import Iterable


class HistoryCursor:
    """A recall buffer with a cursor for up/down navigation."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        """Create a cursor, optionally pre-loaded with *entries* (oldest first)."""
        self._entries: list[str] = list(entries)
        self._position: int | None = None

    @property
    def entries(self) -> tuple[str, ...]:
        """Return every recorded line, oldest first."""
        return tuple(self._entries)

    @property
    def position(self) -> int | None:
        """Return the recall position (``None`` when not recalling)."""
        return self._position

    def record(self, line: str) -> None:
        """Record a submitted line and end any recall in progress."""
        self._entries.append(line)
        self.reset()

    def reset(self) -> None:
        """End any recall in progress."""
        self._position = None

    def has_prev(self) -> bool:
        """Return True if an older line can be recalled."""
        if self._position is None:
            return bool(self._entries)
        return self._position + 1 < len(self._entries)

    def get_prev(self) -> str | None:
        """Step toward older lines and return the line at the new position.

        The first call recalls the most recent line.  At the oldest line
        the position stays put.  Returns ``None`` if nothing was recorded.
        """
        if not self._entries:
            return None
        if self._position is None:
            self._position = 0
        elif self._position + 1 < len(self._entries):
            self._position += 1
        return self._entries[-1 - self._position]

    def has_next(self) -> bool:
        """Return True while recalling (a step toward the present exists)."""
        return self._position is not None

    def get_next(self) -> str | None:
        """Step toward newer lines.

        Returns:
            The newer line, or ``None`` when the step passes the most
            recent line; the recall then ends and the caller should
            clear its input.

        """
        if self._position is None or self._position == 0:
            self._position = None
            return None
        self._position -= 1
        return self._entries[-1 - self._position]
