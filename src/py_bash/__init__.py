"""py-bash: a POSIX-like shell session simulated entirely in memory.

Re-exports the public surface so callers can write::

    from py_bash import Bash, SessionState
"""

from py_bash.bash import Bash
from py_bash.commands import Command
from py_bash.parser import Arguments
from py_bash.state import HistoryEntry, SessionState, StateUpdate
from py_bash.structure import Directory, File

__all__ = [
    "Arguments",
    "Bash",
    "Command",
    "Directory",
    "File",
    "HistoryEntry",
    "SessionState",
    "StateUpdate",
]
