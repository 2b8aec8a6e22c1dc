"""Rename and remove command implementations.

These touch the working copy only. Scheduling the change in the
repository is left to `cvsctl add` and `cvs remove`.
"""

from typing import Annotated

import typer

from cvsctl.cli.display import (
    OperationResult,
    Outcome,
    create_results_table,
    print_results_summary,
)
from cvsctl.core.files import FileOperationError, delete_file, rename_file
from cvsctl.utils.formatting import console, print_error, print_success


def rename_path(
    old_path: Annotated[
        str,
        typer.Argument(help="File to rename."),
    ],
    new_path: Annotated[
        str,
        typer.Argument(help="New path for the file."),
    ],
) -> None:
    """Rename a file in the working copy.

    Examples:
        cvsctl rename src/util.c src/strutil.c
    """
    try:
        rename_file(old_path, new_path)
    except FileOperationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Renamed {old_path} to {new_path}")


def remove_paths(
    paths: Annotated[
        list[str],
        typer.Argument(help="Files to delete."),
    ],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Delete without asking."),
    ] = False,
) -> None:
    """Delete files from the working copy.

    Every file is attempted; failures are reported at the end.

    Examples:
        cvsctl rm -y build/old.o
    """
    if not yes and not typer.confirm(f"Delete {len(paths)} file(s)?"):
        raise typer.Exit(code=1)

    results: list[OperationResult] = []
    for path in paths:
        try:
            delete_file(path)
        except FileOperationError as e:
            results.append(OperationResult(path, Outcome.FAILED, str(e)))
        else:
            results.append(OperationResult(path, Outcome.APPLIED))

    console.print(create_results_table("Remove", results))
    print_results_summary(results)
    if any(r.failed for r in results):
        raise typer.Exit(code=1)
