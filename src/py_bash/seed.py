"""Loading an initial session from a JSON seed file.

Front-ends can start a session from caller-provided data instead of an
empty tree.  The seed is plain JSON matching the session shapes::

    {
      "history": [{"value": "Welcome!"}],
      "structure": {"README": {"content": "hello"}, "src": {}},
      "cwd": ""
    }

Every key is optional.  This is read-only: sessions are never written
back to disk.
"""

import json
from pathlib import Path
from typing import Any

from py_bash.state import SessionState

# The tree a fresh terminal starts with when no seed is given.
DEFAULT_SEED: dict[str, Any] = {
    "history": [{"value": "Type 'help' to see the available commands."}],
    "structure": {
        ".hidden": {"content": "You found a hidden file."},
        "README.md": {"content": "An in-memory shell. Nothing you do here touches the disk."},
        "src": {"main.py": {"content": "print('hello')"}},
    },
}


def state_from_seed(data: dict[str, Any]) -> SessionState:
    """Build a session state from decoded seed data.

    Raises:
        TypeError: If the data has the wrong shape.
        ValueError: If ``cwd`` is not a directory in ``structure``.

    """
    if not isinstance(data, dict):
        msg = f"Seed must be a JSON object, not {type(data).__name__}"
        raise TypeError(msg)
    return SessionState.create(
        history=data.get("history", []),
        structure=data.get("structure", {}),
        cwd=data.get("cwd", ""),
    )


def load_seed(path: Path) -> SessionState:
    """Load a session state from a JSON seed file.

    Raises:
        FileNotFoundError: If the path does not exist.
        json.JSONDecodeError: If the file is not valid JSON.

    """
    data = json.loads(path.read_text())
    return state_from_seed(data)
