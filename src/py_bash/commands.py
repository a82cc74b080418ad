"""Built-in shell commands.

Each command is a ``Command`` descriptor: a name, a one-line
description for ``help``, and a handler taking the current session
state and parsed arguments.  Handlers never modify what they receive;
they return a ``StateUpdate`` with only the fields they change, and
build new trees through ``Directory.insert`` so unchanged subtrees
are shared.

User mistakes (bad paths, existing names) are raised as
``ShellError`` inside handlers.  ``Command.exec`` turns the error into
one transcript line, so a failed command leaves the filesystem and
working directory untouched and adds exactly one line of output.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeAlias

from py_bash.errors import FileExists, NoSuchFile, NotADirectory, ShellError
from py_bash.parser import Arguments
from py_bash.paths import resolve_directory, resolve_file, split_leaf
from py_bash.state import SessionState, StateUpdate
from py_bash.structure import Directory, File, Node

# A command handler: (state, args) → partial state update.
Handler: TypeAlias = Callable[[SessionState, Arguments], StateUpdate]

HELP_HEADER = "py-bash:"
HELP_FOOTER = "These shell commands are defined internally.  Type 'help' to see this list."


@dataclass(frozen=True)
class Command:
    """A named command with its handler."""

    name: str
    description: str
    handler: Handler

    def exec(self, state: SessionState, args: Arguments | None = None) -> StateUpdate:  # noqa: A003
        """Run the handler, reporting user errors as a transcript line.

        Args:
            state: The session state the command runs against.
            args: Parsed arguments (no arguments when omitted).

        Returns:
            The fields of the state the command changed.

        """
        try:
            return self.handler(state, args if args is not None else Arguments())
        except ShellError as e:
            return StateUpdate(history=state.append(str(e)))


# -- Handlers ---------------------------------------------------------------


def _clear(_state: SessionState, _args: Arguments) -> StateUpdate:
    """Forget the whole transcript."""
    return StateUpdate(history=())


def _ls(state: SessionState, args: Arguments) -> StateUpdate:
    """List a directory, hiding dotfiles unless ``--all`` is set."""
    directory = resolve_directory(state.structure, state.cwd, args.arg(0, "."))
    assert isinstance(directory.node, Directory)  # noqa: S101
    names = directory.node.names(include_hidden=args.flag("all"))
    if not names:
        return StateUpdate()
    return StateUpdate(history=state.append(" ".join(names)))


def _cat(state: SessionState, args: Arguments) -> StateUpdate:
    """Print a file's content."""
    path = args.arg(0)
    if path is None:
        return StateUpdate(history=state.append("usage: cat <file>"))
    resolution = resolve_file(state.structure, state.cwd, path)
    assert isinstance(resolution.node, File)  # noqa: S101
    return StateUpdate(history=state.append(resolution.node.content))


def _create(state: SessionState, path: str, node: Node) -> StateUpdate:
    """Bind *node* at *path*, failing if the name is taken."""
    parent_path, name = split_leaf(path)
    try:
        parent = resolve_directory(state.structure, state.cwd, parent_path)
    except NotADirectory as e:
        # A name under a file does not exist.
        raise NoSuchFile(path) from e
    assert isinstance(parent.node, Directory)  # noqa: S101
    if name in ("", ".", "..") or name in parent.node:
        raise FileExists(path)
    return StateUpdate(structure=state.structure.insert(parent.parts, name, node))


def _mkdir(state: SessionState, args: Arguments) -> StateUpdate:
    """Create an empty directory."""
    path = args.arg(0)
    if path is None:
        return StateUpdate(history=state.append("usage: mkdir <directory>"))
    return _create(state, path, Directory())


def _touch(state: SessionState, args: Arguments) -> StateUpdate:
    """Create an empty file."""
    path = args.arg(0)
    if path is None:
        return StateUpdate(history=state.append("usage: touch <file>"))
    return _create(state, path, File())


def _cd(state: SessionState, args: Arguments) -> StateUpdate:
    """Change the working directory (to the root when no path is given)."""
    resolution = resolve_directory(state.structure, state.cwd, args.arg(0, ""))
    return StateUpdate(cwd=resolution.cwd)


def _pwd(state: SessionState, _args: Arguments) -> StateUpdate:
    """Print the working directory."""
    return StateUpdate(history=state.append("/" + state.cwd))


def _echo(state: SessionState, args: Arguments) -> StateUpdate:
    """Print the positional arguments separated by single spaces."""
    return StateUpdate(history=state.append(" ".join(args.positional)))


BUILTINS: tuple[Command, ...] = (
    Command("clear", "Clear the terminal screen.", _clear),
    Command("ls", "List directory contents. Use --all to show hidden files.", _ls),
    Command("cat", "Print the contents of a file.", _cat),
    Command("mkdir", "Create a directory.", _mkdir),
    Command("touch", "Create an empty file.", _touch),
    Command("cd", "Change the current working directory.", _cd),
    Command("pwd", "Print the current working directory.", _pwd),
    Command("echo", "Print the given arguments.", _echo),
)


def help_command(listing: Callable[[], Iterable[tuple[str, str]]]) -> Command:
    """Build the ``help`` command.

    Args:
        listing: Returns ``(name, description)`` pairs for every
            registered command at the time ``help`` runs.

    """

    def _help(state: SessionState, _args: Arguments) -> StateUpdate:
        lines = [f"{name} - {text}" if text else name for name, text in listing()]
        return StateUpdate(history=state.append(HELP_HEADER, *lines, HELP_FOOTER))

    return Command("help", "List the available commands.", _help)
