"""Path resolution against the in-memory tree.

A path is walked segment by segment, like the kernel's ``namei``:

- An empty path, or one starting with ``/``, starts at the root;
  anything else starts at the current working directory.
- ``.`` stays put and ``..`` climbs one level.  Climbing above the
  root stays at the root; it is never an error.
- Empty segments (``a//b``, a trailing ``/``) are skipped.
- Any other segment must name a child of the current directory.

The working directory is stored as a ``/``-free relative path (``""``
is the root, ``"dir1/childDir"`` is nested), so resolution keeps a
stack of names and the resolved location converts back to that form.
"""

from __future__ import annotations

from dataclasses import dataclass

from py_bash.errors import IsADirectory, NoSuchFile, NotADirectory
from py_bash.structure import Directory, File, Node

SEPARATOR = "/"


@dataclass(frozen=True)
class Resolution:
    """The node a path resolved to and where it lives in the tree."""

    node: Node
    parts: tuple[str, ...]

    @property
    def cwd(self) -> str:
        """Return the location in working-directory form (``""`` for root)."""
        return SEPARATOR.join(self.parts)

    @property
    def absolute(self) -> str:
        """Return the normalised absolute path (``/`` for root)."""
        return SEPARATOR + self.cwd


def split_cwd(cwd: str) -> tuple[str, ...]:
    """Split a working-directory string into its names."""
    return tuple(part for part in cwd.split(SEPARATOR) if part)


def resolve(structure: Directory, cwd: str, path: str) -> Resolution:
    """Resolve *path* relative to *cwd*.

    Args:
        structure: The root of the tree.
        cwd: The working directory, relative to the root.
        path: The path as the user typed it.

    Returns:
        The resolved node and its normalised location.

    Raises:
        NoSuchFile: If a segment does not exist.  The error carries
            the typed path up to and including the failing segment.

    """
    segments = path.split(SEPARATOR)
    absolute = path == "" or segments[0] == ""
    names: list[str] = [] if absolute else list(split_cwd(cwd))
    nodes: list[Node] = [structure]
    for name in names:
        nodes.append(_child(nodes[-1], name, cwd))

    typed: list[str] = []
    for segment in segments:
        typed.append(segment)
        if segment in ("", "."):
            continue
        if segment == "..":
            if names:
                names.pop()
                nodes.pop()
            continue
        node = nodes[-1]
        if not isinstance(node, Directory) or segment not in node:
            raise NoSuchFile(SEPARATOR.join(typed))
        names.append(segment)
        nodes.append(node[segment])

    return Resolution(node=nodes[-1], parts=tuple(names))


def _child(node: Node, name: str, cwd: str) -> Node:
    """Step into *name* while replaying the working directory."""
    if not isinstance(node, Directory) or name not in node:
        msg = f"Working directory does not exist: /{cwd}"
        raise ValueError(msg)
    return node[name]


def resolve_directory(structure: Directory, cwd: str, path: str) -> Resolution:
    """Resolve *path* and require a directory.

    Raises:
        NoSuchFile: If the path does not exist.
        NotADirectory: If the path names a file.

    """
    resolution = resolve(structure, cwd, path)
    if not isinstance(resolution.node, Directory):
        raise NotADirectory(path)
    return resolution


def resolve_file(structure: Directory, cwd: str, path: str) -> Resolution:
    """Resolve *path* and require a file.

    Raises:
        NoSuchFile: If the path does not exist.
        IsADirectory: If the path names a directory.

    """
    resolution = resolve(structure, cwd, path)
    if not isinstance(resolution.node, File):
        raise IsADirectory(path)
    return resolution


def split_leaf(path: str) -> tuple[str, str]:
    """Split *path* into (parent_path, leaf_name) for creation commands.

    Examples::

        "dir1/testDir" → ("dir1/", "testDir")
        "testDir"      → (".", "testDir")
        "/top/"        → ("/", "top")

    The parent keeps its trailing ``/`` so an absolute path stays
    absolute even when the parent is the root.
    """
    trimmed = path.rstrip(SEPARATOR)
    last_slash = trimmed.rfind(SEPARATOR)
    if last_slash == -1:
        return (".", trimmed)
    return (trimmed[: last_slash + 1], trimmed[last_slash + 1 :])
