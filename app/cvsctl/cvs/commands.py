"""CVS command construction.

Derives the working directory and bare filename from a path and builds
the argument vector for each supported cvs subcommand.
"""

import re
import shlex
from collections.abc import Sequence
from dataclasses import dataclass

from cvsctl.cvs.errors import MalformedPathError

DEFAULT_EXECUTABLE = "cvs"

# Either separator, so Windows paths split the same way on any platform
_SEPARATOR_PATTERN = re.compile(r"[\\/]")

# CVS tag names start with a letter and hold only letters, digits, '-' and '_'
_TAG_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")


@dataclass(frozen=True, slots=True)
class CommandInvocation:
    """A single cvs invocation: argument vector plus working directory.

    Attributes:
        args: Executable followed by its arguments.
        cwd: Directory the process runs in. None uses the current directory.
    """

    args: tuple[str, ...]
    cwd: str | None = None

    def __post_init__(self) -> None:
        """Validate invocation data after initialization."""
        if not self.args:
            msg = "Invocation arguments cannot be empty"
            raise ValueError(msg)

    @property
    def executable(self) -> str:
        """Return the program being invoked."""
        return self.args[0]

    @property
    def command_line(self) -> str:
        """Return the shell-quoted command line, for logs and display."""
        return shlex.join(self.args)


def split_path(path: str) -> tuple[str, str]:
    """Split a path into its directory and bare filename.

    Both '/' and '\\' are treated as separators, mixed freely. The
    directory keeps its trailing separator.

    Args:
        path: Absolute or relative file path.

    Returns:
        Tuple of (directory, filename). The directory is empty for a bare name.

    Raises:
        MalformedPathError: If the path is empty or ends in a separator.

    Example:
        >>> split_path("C:\\\\proj/sub\\\\file.txt")
        ('C:\\\\proj/sub\\\\', 'file.txt')
    """
    filename = _SEPARATOR_PATTERN.split(path)[-1]
    if not filename.strip():
        msg = f"No filename in path: {path!r}"
        raise MalformedPathError(msg)
    return path[: len(path) - len(filename)], filename


def group_by_directory(paths: Sequence[str]) -> dict[str, list[str]]:
    """Group paths by directory, keeping first-seen order.

    Args:
        paths: File paths to group.

    Returns:
        Mapping of directory to the filenames it contains.

    Raises:
        MalformedPathError: If any path yields no filename.
    """
    groups: dict[str, list[str]] = {}
    for path in paths:
        directory, filename = split_path(path)
        groups.setdefault(directory, []).append(filename)
    return groups


def _cwd(directory: str) -> str | None:
    return directory or None


def _check_filename(filename: str) -> str:
    # cvs would parse a leading '-' as an option
    if filename.startswith("-"):
        msg = f"Filename looks like an option: {filename!r}"
        raise MalformedPathError(msg)
    return filename


def _split(path: str) -> tuple[str | None, str]:
    directory, filename = split_path(path)
    return _cwd(directory), _check_filename(filename)


def _normalize_filenames(filenames: str | Sequence[str]) -> list[str]:
    names = [filenames] if isinstance(filenames, str) else list(filenames)
    if not names:
        msg = "No filenames given"
        raise MalformedPathError(msg)
    for name in names:
        if not name.strip():
            msg = f"Empty filename in {names!r}"
            raise MalformedPathError(msg)
        _check_filename(name)
    return names


def build_status(path: str, executable: str = DEFAULT_EXECUTABLE) -> CommandInvocation:
    """Build `cvs status -v <filename>` for a path."""
    cwd, filename = _split(path)
    return CommandInvocation(args=(executable, "status", "-v", filename), cwd=cwd)


def build_add(path: str, executable: str = DEFAULT_EXECUTABLE) -> CommandInvocation:
    """Build `cvs add <filename>` for a path."""
    cwd, filename = _split(path)
    return CommandInvocation(args=(executable, "add", filename), cwd=cwd)


def build_update(path: str, executable: str = DEFAULT_EXECUTABLE) -> CommandInvocation:
    """Build `cvs update <filename>` for a path."""
    cwd, filename = _split(path)
    return CommandInvocation(args=(executable, "update", filename), cwd=cwd)


def build_commit(
    path: str,
    message: str,
    executable: str = DEFAULT_EXECUTABLE,
) -> CommandInvocation:
    """Build `cvs commit -m <message> <filename>` for a path.

    The message is passed as a single argument, so quotes and spaces in it
    need no escaping.
    """
    cwd, filename = _split(path)
    return CommandInvocation(args=(executable, "commit", "-m", message, filename), cwd=cwd)


def build_tag(
    filenames: str | Sequence[str],
    directory: str,
    tag: str,
    executable: str = DEFAULT_EXECUTABLE,
) -> CommandInvocation:
    """Build `cvs tag -F <tag> <filenames...>`.

    Args:
        filenames: One filename or an ordered list, relative to directory.
        directory: Working directory containing the files.
        tag: Tag name to (re)apply; -F moves it if it already exists.
        executable: cvs binary to run.

    Returns:
        CommandInvocation for the tag operation.

    Raises:
        MalformedPathError: If no usable filename is given, or the tag name
            is empty or not a valid CVS tag name.
    """
    names = _normalize_filenames(filenames)
    if not tag.strip():
        msg = "Tag name cannot be empty"
        raise MalformedPathError(msg)
    if not _TAG_PATTERN.fullmatch(tag):
        msg = f"Invalid tag name {tag!r}: use a letter, then letters, digits, '-' or '_'"
        raise MalformedPathError(msg)
    return CommandInvocation(args=(executable, "tag", "-F", tag, *names), cwd=_cwd(directory))


def build_history(
    filenames: str | Sequence[str],
    directory: str,
    executable: str = DEFAULT_EXECUTABLE,
) -> CommandInvocation:
    """Build `cvs history -alc <filenames...>`.

    Args:
        filenames: One filename or an ordered list, relative to directory.
        directory: Working directory containing the files.
        executable: cvs binary to run.

    Returns:
        CommandInvocation for the history report.

    Raises:
        MalformedPathError: If no usable filename is given.
    """
    names = _normalize_filenames(filenames)
    return CommandInvocation(args=(executable, "history", "-alc", *names), cwd=_cwd(directory))
