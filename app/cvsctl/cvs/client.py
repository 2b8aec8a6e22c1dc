"""High-level cvs operations.

CvsClient ties the command builders, the executor, and the output
parsers together, one method per cvs operation.
"""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from cvsctl.core.config import CvsConfig
from cvsctl.core.files import check_file_exists
from cvsctl.cvs import commands, parser
from cvsctl.cvs.commands import CommandInvocation, group_by_directory
from cvsctl.cvs.errors import InvalidCvsRootError, MalformedPathError, ProcessFailure
from cvsctl.cvs.executor import CommandExecutor
from cvsctl.models.status import CvsInfo, FileStatus

logger = logging.getLogger(__name__)


class CvsClient:
    """Runs cvs operations against files in a working copy.

    Attributes:
        executable: cvs binary passed to every command builder.

    Example:
        >>> client = CvsClient.from_config(load_config_or_default())
        >>> client.get_status("/work/module/main.c")
        <FileStatus.MODIFIED: 'modified'>
    """

    def __init__(
        self,
        executor: CommandExecutor | None = None,
        *,
        executable: str = commands.DEFAULT_EXECUTABLE,
        max_workers: int = 4,
    ) -> None:
        """Initialize the client.

        Args:
            executor: Executor used for every invocation. A default one
                (gbk encoding, no timeout) is created if None.
            executable: cvs binary to run.
            max_workers: Thread count for resolve_statuses().
        """
        self._executor = executor if executor is not None else CommandExecutor()
        self._executable = executable
        self._max_workers = max_workers

    @classmethod
    def from_config(cls, config: CvsConfig) -> "CvsClient":
        """Create a client from configuration."""
        executor = CommandExecutor(
            config.encoding,
            timeout=config.timeout_seconds,
            env=config.process_env,
        )
        return cls(executor, executable=config.executable, max_workers=config.max_workers)

    @property
    def executable(self) -> str:
        """cvs binary passed to the command builders."""
        return self._executable

    def _run(self, invocation: CommandInvocation) -> str:
        """Execute an invocation, re-classifying known failure messages.

        Raises:
            InvalidCvsRootError: If the directory has no CVS metadata.
            ProcessFailure: For any other execution failure.
        """
        try:
            return self._executor.execute(invocation)
        except ProcessFailure as e:
            classified = parser.classify_failure(e)
            if classified is e:
                raise
            raise classified from e

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_status(self, path: str) -> FileStatus:
        """Query the CVS status of a file.

        Args:
            path: Path of the file.

        Returns:
            Status parsed from `cvs status -v`.

        Raises:
            MalformedPathError: If the path has no filename.
            InvalidCvsRootError: If the directory is not a CVS working copy.
            ProcessFailure: If cvs fails for any other reason.
        """
        stdout = self._run(commands.build_status(path, self._executable))
        return parser.parse_status(stdout)

    def get_info(self, path: str) -> CvsInfo:
        """Query filename, working revision, and tags of a file.

        Raises:
            MalformedPathError: If the path has no filename.
            InvalidCvsRootError: If the directory is not a CVS working copy.
            ProcessFailure: If cvs fails for any other reason.
        """
        stdout = self._run(commands.build_status(path, self._executable))
        return parser.parse_info(stdout)

    def get_latest_tags(self, path: str) -> list[str]:
        """Return the tags pointing at the file's repository head revision.

        Raises:
            MalformedPathError: If the path has no filename.
            InvalidCvsRootError: If the directory is not a CVS working copy.
            ProcessFailure: If cvs fails for any other reason.
        """
        stdout = self._run(commands.build_status(path, self._executable))
        return parser.parse_latest_tag(stdout)

    def describe(self, path: str) -> tuple[CvsInfo, list[str]]:
        """Return info and head tags of a file from a single cvs invocation.

        Raises:
            MalformedPathError: If the path has no filename.
            InvalidCvsRootError: If the directory is not a CVS working copy.
            ProcessFailure: If cvs fails for any other reason.
        """
        stdout = self._run(commands.build_status(path, self._executable))
        return parser.parse_info(stdout), parser.parse_latest_tag(stdout)

    def resolve_status(self, path: str) -> FileStatus:
        """Resolve the status to display for a file, never raising.

        This is the one-shot LOADING -> final transition of a displayed
        file. CVSROOT failures become NOT_CVS_FILE and any other failure
        becomes ERROR.

        Args:
            path: Path of the file.

        Returns:
            Final status for display.
        """
        if not check_file_exists(path):
            return FileStatus.NOT_FOUND
        try:
            return self.get_status(path)
        except InvalidCvsRootError:
            return FileStatus.NOT_CVS_FILE
        except (ProcessFailure, MalformedPathError) as e:
            logger.warning("Status query failed for %s: %s", path, e)
            return FileStatus.ERROR

    def resolve_statuses(self, paths: Sequence[str]) -> dict[str, FileStatus]:
        """Resolve the status of many files concurrently.

        Queries in the same directory are serialised by the executor's
        directory locks; different directories run in parallel.

        Args:
            paths: File paths, duplicates allowed.

        Returns:
            Mapping of path to final status, in input order.
        """
        unique = list(dict.fromkeys(paths))
        if not unique:
            return {}
        workers = min(self._max_workers, len(unique))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="cvsctl-status") as pool:
            statuses = list(pool.map(self.resolve_status, unique))
        return dict(zip(unique, statuses, strict=True))

    # -------------------------------------------------------------------------
    # Single-file operations
    # -------------------------------------------------------------------------

    def add(self, path: str) -> bool:
        """Schedule a file for addition.

        Returns:
            True if cvs reported the file as scheduled.

        Raises:
            MalformedPathError: If the path has no filename (nothing is run).
            InvalidCvsRootError: If the directory is not a CVS working copy.
            ProcessFailure: If cvs fails for any other reason.
        """
        stdout = self._run(commands.build_add(path, self._executable))
        return parser.parse_add(stdout)

    def update(self, path: str) -> bool:
        """Update a file from the repository.

        Returns:
            True if a new revision was fetched; False if nothing changed.

        Raises:
            MalformedPathError: If the path has no filename (nothing is run).
            InvalidCvsRootError: If the directory is not a CVS working copy.
            ProcessFailure: If cvs fails for any other reason.
        """
        stdout = self._run(commands.build_update(path, self._executable))
        return parser.parse_update(stdout)

    def commit(self, path: str, message: str) -> bool:
        """Commit a file with a log message.

        Returns:
            True if cvs checked in a new revision.

        Raises:
            MalformedPathError: If the path has no filename (nothing is run).
            InvalidCvsRootError: If the directory is not a CVS working copy.
            ProcessFailure: If cvs fails for any other reason.
        """
        stdout = self._run(commands.build_commit(path, message, self._executable))
        return parser.parse_commit(stdout)

    # -------------------------------------------------------------------------
    # Multi-file operations
    # -------------------------------------------------------------------------

    def tag(self, filenames: str | Sequence[str], directory: str, tag: str) -> bool:
        """Force-apply a tag to files in one directory.

        Args:
            filenames: One filename or an ordered list, relative to directory.
            directory: Working directory containing the files.
            tag: Tag name.

        Returns:
            True if cvs reported tagged files.

        Raises:
            MalformedPathError: If no usable filename or tag is given.
            InvalidCvsRootError: If the directory is not a CVS working copy.
            ProcessFailure: If cvs fails for any other reason.
        """
        stdout = self._run(commands.build_tag(filenames, directory, tag, self._executable))
        return parser.parse_tag(stdout)

    def history(self, filenames: str | Sequence[str], directory: str) -> str:
        """Return the `cvs history -alc` report for files in one directory.

        Raises:
            MalformedPathError: If no usable filename is given.
            InvalidCvsRootError: If the directory is not a CVS working copy.
            ProcessFailure: If cvs fails for any other reason.
        """
        stdout = self._run(commands.build_history(filenames, directory, self._executable))
        return stdout.strip()

    def tag_paths(self, paths: Sequence[str], tag: str) -> dict[str, bool]:
        """Tag files given by full path, one cvs invocation per directory.

        Args:
            paths: File paths, possibly spread over several directories.
            tag: Tag name.

        Returns:
            Mapping of directory to whether cvs reported tagged files.

        Raises:
            MalformedPathError: If any path has no filename (nothing is run).
            InvalidCvsRootError: If a directory is not a CVS working copy.
            ProcessFailure: If cvs fails for any other reason.
        """
        groups = group_by_directory(paths)
        return {
            directory: self.tag(filenames, directory, tag)
            for directory, filenames in groups.items()
        }

    def history_paths(self, paths: Sequence[str]) -> dict[str, str]:
        """Return history reports for files given by full path, per directory.

        Raises:
            MalformedPathError: If any path has no filename (nothing is run).
            InvalidCvsRootError: If a directory is not a CVS working copy.
            ProcessFailure: If cvs fails for any other reason.
        """
        groups = group_by_directory(paths)
        return {
            directory: self.history(filenames, directory)
            for directory, filenames in groups.items()
        }
