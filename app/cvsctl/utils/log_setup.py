"""Logging setup for the command line entry point."""

import logging
import os

from rich.logging import RichHandler

from cvsctl.utils.formatting import err_console

LOG_LEVEL_ENV = "CVSCTL_LOG_LEVEL"


def setup_logging(*, is_verbose: bool) -> None:
    """Configure logging based on verbosity.

    Verbose mode logs at DEBUG, which includes the full stdout and stderr
    of every cvs process. Otherwise the level comes from CVSCTL_LOG_LEVEL,
    defaulting to WARNING.

    Args:
        is_verbose: Whether to enable debug logging.
    """
    log_level = "DEBUG" if is_verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    if log_level not in logging.getLevelNamesMapping():
        log_level = "WARNING"

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=is_verbose)],
        force=True,
    )
