"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from cvsctl.core.theme import STATUS_STYLES, get_theme

if TYPE_CHECKING:
    from cvsctl.models.status import FileStatus


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_status_table(title: str = "File Status") -> Table:
    """Create a pre-configured table for displaying file statuses.

    Args:
        title: Table title.

    Returns:
        Rich Table with File, Status, and Directory columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("File", no_wrap=True, style="text")
    table.add_column("Status", no_wrap=True)
    table.add_column("Directory", style="muted", overflow="ellipsis")
    return table


def format_status(status: FileStatus) -> str:
    """Format a file status with its themed color markup."""
    style = STATUS_STYLES[status]
    return f"[{style}]{status.label}[/]"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
