"""Shell execution utilities.

Provides subprocess execution that captures raw bytes and decodes them
with an explicit legacy text encoding.
"""

import os
import shutil
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass

# Codepage used by CVSNT builds on Simplified Chinese Windows systems
DEFAULT_ENCODING = "gbk"


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Decoded standard output from the command.
        stderr: Decoded standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def decode_output(data: bytes | None, encoding: str = DEFAULT_ENCODING) -> str:
    """Decode raw process output.

    Undecodable bytes are replaced rather than raised, so a single stray
    byte in a filename never hides the rest of the output.

    Args:
        data: Raw bytes captured from a process stream.
        encoding: Codec name used to decode the bytes.

    Returns:
        Decoded text, or an empty string if there was no output.
    """
    if not data:
        return ""
    return data.decode(encoding, errors="replace")


def run_command(
    args: list[str],
    *,
    cwd: str | None = None,
    encoding: str = DEFAULT_ENCODING,
    timeout: float | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandResult:
    """Execute a command and return the decoded result.

    The command runs without a shell. The working directory applies to the
    child process only, so concurrent callers never observe each other's
    directory changes.

    Args:
        args: Command and arguments to execute.
        cwd: Working directory for the command. If None, uses current directory.
        encoding: Codec used to decode both stdout and stderr.
        timeout: Maximum time in seconds to wait for command. None waits forever.
        env: Additional environment variables (merged with current env).

    Returns:
        CommandResult with decoded stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable or cwd is not found.
        OSError: If the command cannot be started.
    """
    full_env = {**os.environ, **env} if env else None
    result = subprocess.run(
        args,
        capture_output=True,
        check=False,
        timeout=timeout,
        cwd=cwd,
        env=full_env,
    )
    return CommandResult(
        stdout=decode_output(result.stdout, encoding),
        stderr=decode_output(result.stderr, encoding),
        returncode=result.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None
