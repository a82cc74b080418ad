"""Tab completion of filesystem paths.

The token under the cursor is split at its last ``/`` into a directory
prefix and a fragment.  The prefix is resolved against the working
directory and the fragment is matched case-sensitively against the
start of each child name.  Only an unambiguous match completes;
no match, several matches, or a prefix that does not resolve to a
directory all leave the token alone.

Command names are not completed.
"""

from __future__ import annotations

from py_bash.errors import ShellError
from py_bash.paths import SEPARATOR, resolve_directory
from py_bash.state import SessionState
from py_bash.structure import Directory


def candidates(token: str, state: SessionState) -> list[str]:
    """Return every completion of *token*, in listing order."""
    last_slash = token.rfind(SEPARATOR)
    prefix = token[: last_slash + 1]
    fragment = token[last_slash + 1 :]
    try:
        resolution = resolve_directory(state.structure, state.cwd, prefix or ".")
    except ShellError:
        return []
    assert isinstance(resolution.node, Directory)  # noqa: S101
    return [prefix + name for name in resolution.node if name.startswith(fragment)]


def autocomplete(token: str, state: SessionState) -> str | None:
    """Return the single completion of *token*, or None if there isn't one."""
    matches = candidates(token, state)
    if len(matches) == 1:
        return matches[0]
    return None
