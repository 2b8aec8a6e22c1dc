"""Execution of cvs invocations.

Runs a CommandInvocation as a subprocess, decodes its output with the
configured legacy encoding, and turns failures into ProcessFailure.
Invocations that share a working directory are serialised.
"""

import codecs
import logging
import os
import subprocess
import threading
from collections.abc import Mapping

from cvsctl.cvs.commands import CommandInvocation
from cvsctl.cvs.errors import ProcessFailure
from cvsctl.utils.shell import DEFAULT_ENCODING, run_command

logger = logging.getLogger(__name__)


class DirectoryLocks:
    """Registry of one lock per working directory.

    Two cvs processes touching the same working directory can corrupt its
    CVS/Entries bookkeeping, so callers hold the directory's lock for the
    lifetime of the subprocess.

    Locks are never evicted: the registry keeps one entry per directory
    ever touched. That is fine for a single CLI run, but a long-lived
    process sharing one client should expect it to grow with the number
    of distinct working directories.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    @staticmethod
    def _key(cwd: str | None) -> str:
        return os.path.normcase(os.path.abspath(cwd or os.curdir))

    def get(self, cwd: str | None) -> threading.Lock:
        """Return the lock guarding a working directory.

        Args:
            cwd: Working directory, or None for the current directory.

        Returns:
            The same Lock instance for every spelling of the same directory.
        """
        key = self._key(cwd)
        with self._lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    def __len__(self) -> int:
        with self._lock:
            return len(self._locks)


class CommandExecutor:
    """Runs cvs invocations and returns their decoded stdout.

    Attributes:
        encoding: Codec used to decode both output streams.
        timeout: Seconds to wait for a process; None waits forever.

    Example:
        >>> executor = CommandExecutor(encoding="gbk")
        >>> stdout = executor.execute(build_status("src/main.c"))
    """

    def __init__(
        self,
        encoding: str = DEFAULT_ENCODING,
        *,
        timeout: float | None = None,
        env: Mapping[str, str] | None = None,
        locks: DirectoryLocks | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            encoding: Legacy codec of the cvs client's output (e.g. 'gbk', 'cp1252').
            timeout: Seconds to wait for each process. None disables the limit.
            env: Extra environment variables for the child process.
            locks: Shared lock registry. A private one is created if None.

        Raises:
            ValueError: If the encoding is not a known codec.
        """
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            msg = f"Unknown encoding: {encoding}"
            raise ValueError(msg) from e
        self._encoding = encoding
        self._timeout = timeout
        self._env = dict(env) if env else None
        self._locks = locks if locks is not None else DirectoryLocks()

    @property
    def encoding(self) -> str:
        """Codec used to decode process output."""
        return self._encoding

    @property
    def timeout(self) -> float | None:
        """Process timeout in seconds, or None."""
        return self._timeout

    def execute(self, invocation: CommandInvocation) -> str:
        """Run an invocation and return its decoded stdout.

        Args:
            invocation: Command and working directory to run.

        Returns:
            Decoded standard output.

        Raises:
            ProcessFailure: If the process exits non-zero, cannot be
                started, or exceeds the timeout.
        """
        command_line = invocation.command_line
        logger.info("Executing command: %s (cwd=%s)", command_line, invocation.cwd)

        with self._locks.get(invocation.cwd):
            try:
                result = run_command(
                    list(invocation.args),
                    cwd=invocation.cwd,
                    encoding=self._encoding,
                    timeout=self._timeout,
                    env=self._env,
                )
            except subprocess.TimeoutExpired as e:
                msg = f"{invocation.executable} timed out after {e.timeout} seconds"
                logger.error("%s: %s", command_line, msg)
                raise ProcessFailure(msg, command=command_line) from e
            except OSError as e:
                msg = f"Failed to run {invocation.executable}: {e}"
                logger.error("%s: %s", command_line, msg)
                raise ProcessFailure(msg, command=command_line) from e

        if result.stdout:
            logger.debug("stdout of %s:\n%s", command_line, result.stdout)
        if result.stderr:
            logger.debug("stderr of %s:\n%s", command_line, result.stderr)

        if not result.success:
            msg = (
                result.stderr.strip()
                or f"{invocation.executable} exited with status {result.returncode}"
            )
            logger.warning("Command failed (exit %d): %s", result.returncode, command_line)
            raise ProcessFailure(msg, returncode=result.returncode, command=command_line)

        return result.stdout
