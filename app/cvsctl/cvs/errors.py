"""Exception hierarchy for CVS invocations."""


class CvsError(Exception):
    """Base exception for CVS integration errors."""


class ProcessFailure(CvsError):
    """Raised when a cvs process exits non-zero or cannot be started.

    Attributes:
        message: Decoded stderr text, or a generic failure description.
        returncode: Exit status, or None if the process never ran.
        command: The command line that failed.
    """

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        command: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.returncode = returncode
        self.command = command


class InvalidCvsRootError(ProcessFailure):
    """Raised when the working directory carries no CVS metadata."""


class MalformedPathError(CvsError, ValueError):
    """Raised when a path yields no usable filename.

    The operation is never attempted when this is raised.
    """
