"""Status command implementation.

Shows the CVS status of one or more files.
"""

import json
from typing import Annotated

import typer

from cvsctl.cli.types import OutputFormat, get_client
from cvsctl.cvs.commands import split_path
from cvsctl.cvs.errors import MalformedPathError
from cvsctl.models.status import FileStatus
from cvsctl.utils.formatting import console, create_status_table, format_status


def _display_parts(path: str) -> tuple[str, str]:
    try:
        directory, filename = split_path(path)
    except MalformedPathError:
        return path, ""
    return filename, directory


def status_files(
    ctx: typer.Context,
    paths: Annotated[
        list[str],
        typer.Argument(help="Files to query."),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the CVS status of files.

    Files in different directories are queried in parallel. Directories
    without CVS metadata show as "Not a CVS file".

    Examples:
        cvsctl status src/main.c src/util.c
        cvsctl status --format json *.c
    """
    client = get_client(ctx)
    statuses = client.resolve_statuses(paths)

    if output_format == OutputFormat.JSON:
        data = [{"path": path, "status": status.value} for path, status in statuses.items()]
        console.print_json(json.dumps(data))
        return

    table = create_status_table()
    for path, status in statuses.items():
        filename, directory = _display_parts(path)
        table.add_row(filename, format_status(status), directory)
    console.print(table)

    counts: dict[FileStatus, int] = {}
    for status in statuses.values():
        counts[status] = counts.get(status, 0) + 1
    summary = ", ".join(f"{count} {status.label.lower()}" for status, count in counts.items())
    console.print(f"\n[dim]{len(statuses)} files: {summary}[/]")

    if FileStatus.ERROR in counts:
        raise typer.Exit(code=1)
