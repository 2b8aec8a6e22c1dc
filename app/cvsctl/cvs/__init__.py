"""CVS client integration.

Builds cvs command lines, runs them, and parses their output into
typed results.
"""

from cvsctl.cvs.client import CvsClient
from cvsctl.cvs.commands import CommandInvocation, split_path
from cvsctl.cvs.errors import CvsError, InvalidCvsRootError, MalformedPathError, ProcessFailure
from cvsctl.cvs.executor import CommandExecutor, DirectoryLocks
from cvsctl.cvs.parser import parse_info, parse_latest_tag, parse_status

__all__ = [
    "CommandExecutor",
    "CommandInvocation",
    "CvsClient",
    "CvsError",
    "DirectoryLocks",
    "InvalidCvsRootError",
    "MalformedPathError",
    "ProcessFailure",
    "parse_info",
    "parse_latest_tag",
    "parse_status",
]
