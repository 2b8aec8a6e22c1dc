"""Utility modules for cvsctl.

This module exports commonly used utility functions.
"""

from cvsctl.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from cvsctl.utils.shell import CommandResult, command_exists, decode_output, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "decode_output",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
