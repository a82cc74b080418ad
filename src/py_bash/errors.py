"""User-facing shell errors.

A failed command never crashes the session.  Handlers raise one of
these exceptions and the command layer turns it into a single line of
transcript output, the same way a real shell prints to stderr and
keeps going.

The message wording is part of the public contract: front-ends and
tests compare the rendered text literally.
"""


class ShellError(Exception):
    """Base class for errors reported to the user as transcript output."""

    template = "{path}"

    def __init__(self, path: str) -> None:
        """Create an error about *path* (as the user typed it)."""
        self.path = path
        super().__init__(self.template.format(path=path))


class NoSuchFile(ShellError):  # noqa: N818
    """A path segment does not exist."""

    template = "no such file or directory: {path}"


class NotADirectory(ShellError):  # noqa: N818
    """A directory was required but the path names a file."""

    template = "not a directory: {path}"


class IsADirectory(ShellError):  # noqa: N818
    """A file was required but the path names a directory."""

    template = "is a directory: {path}"


class FileExists(ShellError):  # noqa: N818
    """The name to create is already taken in its parent."""

    template = "file exists: {path}"


def command_not_found(name: str) -> str:
    """Return the transcript line for an unknown command."""
    return f"{name}: command not found"
