"""History command implementation.

Prints the `cvs history` report for files, one block per directory.
"""

from typing import Annotated

import typer

from cvsctl.cli.types import get_client
from cvsctl.cvs.errors import InvalidCvsRootError, MalformedPathError, ProcessFailure
from cvsctl.utils.formatting import console, print_error, print_info


def show_history(
    ctx: typer.Context,
    paths: Annotated[
        list[str],
        typer.Argument(help="Files whose history to show."),
    ],
) -> None:
    """Show the repository history of files.

    Runs `cvs history -alc` once per directory.

    Examples:
        cvsctl history src/main.c
        cvsctl history src/main.c include/util.h
    """
    client = get_client(ctx)
    try:
        reports = client.history_paths(paths)
    except MalformedPathError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except InvalidCvsRootError as e:
        print_error("Not a CVS working copy")
        raise typer.Exit(code=1) from e
    except ProcessFailure as e:
        print_error(e.message)
        raise typer.Exit(code=1) from e

    for directory, report in reports.items():
        console.print(f"[bold_header]{directory or '.'}[/]")
        if report:
            console.print(report, markup=False, highlight=False)
        else:
            print_info("No history records.")
