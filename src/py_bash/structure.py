"""Immutable in-memory directory tree.

The virtual filesystem is a pure tree of two node kinds:

- **File** — a leaf holding text content.
- **Directory** — an ordered mapping of child names to nodes.

Nodes are never modified after construction.  A change produces a new
tree that rebuilds only the directories on the path from the root to
the change; every untouched sibling subtree is shared by reference
between the old and the new tree.  Updates therefore cost O(depth)
and an old tree handed to a caller never changes underneath them.

Directory listings keep insertion order, so ``ls`` shows entries in
the order they were created rather than alphabetically.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias

# Names starting with this prefix are hidden from default listings.
HIDDEN_PREFIX = "."


@dataclass(frozen=True)
class File:
    """A leaf node holding text content."""

    content: str = ""


@dataclass(frozen=True)
class Directory:
    """A directory node mapping unique child names to nodes.

    The children mapping is copied on construction and exposed
    read-only, so a ``Directory`` cannot be changed once built.
    """

    children: Mapping[str, Node] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]

    def __post_init__(self) -> None:
        """Freeze a private copy of the children mapping."""
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    def __contains__(self, name: object) -> bool:
        """Return True if *name* is a direct child."""
        return name in self.children

    def __getitem__(self, name: str) -> Node:
        """Return the child called *name*."""
        return self.children[name]

    def __iter__(self) -> Iterator[str]:
        """Iterate over child names in insertion order."""
        return iter(self.children)

    def __len__(self) -> int:
        """Return the number of children."""
        return len(self.children)

    def get(self, name: str) -> Node | None:
        """Return the child called *name*, or None."""
        return self.children.get(name)

    def names(self, *, include_hidden: bool = True) -> list[str]:
        """Return child names in insertion order.

        Args:
            include_hidden: When False, names starting with ``.`` are
                left out (like ``ls`` without ``--all``).

        """
        if include_hidden:
            return list(self.children)
        return [name for name in self.children if not name.startswith(HIDDEN_PREFIX)]

    def with_child(self, name: str, node: Node) -> Directory:
        """Return a copy of this directory with *name* bound to *node*.

        An existing child of the same name keeps its position; a new
        one is appended.
        """
        children = dict(self.children)
        children[name] = node
        return Directory(children)

    def insert(self, path: tuple[str, ...], name: str, node: Node) -> Directory:
        """Return a new tree with *node* placed at ``path/name``.

        Only the directories along *path* are rebuilt; all other
        subtrees are shared with this tree.

        Args:
            path: Names leading from this directory to the parent.
            name: The child name to bind in the parent.
            node: The node to bind.

        Raises:
            KeyError: If *path* does not lead to a directory.

        """
        if not path:
            return self.with_child(name, node)
        head, rest = path[0], path[1:]
        child = self.children[head]
        if not isinstance(child, Directory):
            msg = f"Not a directory: {head}"
            raise KeyError(msg)
        return self.with_child(head, child.insert(rest, name, node))


Node: TypeAlias = File | Directory


def from_dict(data: Mapping[str, Any]) -> Directory:
    """Build a directory tree from plain nested mappings.

    A mapping whose ``content`` key holds a string is a file; every
    other mapping is a directory::

        {"file1": {"content": "hi"}, "dir1": {"childDir": {}}}

    Raises:
        TypeError: If any value is not a mapping.

    """
    if not isinstance(data, Mapping):
        msg = f"Directory data must be a mapping, not {type(data).__name__}"
        raise TypeError(msg)
    return Directory({name: _node_from_data(name, value) for name, value in data.items()})


def _node_from_data(name: str, value: object) -> Node:
    """Convert one seed value into a node."""
    if isinstance(value, File | Directory):
        return value
    if not isinstance(value, Mapping):
        msg = f"Invalid node {name!r}: expected a mapping, got {type(value).__name__}"
        raise TypeError(msg)
    content = value.get("content")  # pyright: ignore[reportUnknownMemberType, reportUnknownVariableType]
    if isinstance(content, str):
        return File(content)
    return from_dict(value)  # pyright: ignore[reportUnknownArgumentType]


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node back to the plain mapping form used by ``from_dict``."""
    if isinstance(node, File):
        return {"content": node.content}
    return {name: to_dict(child) for name, child in node.children.items()}
