"""Add, update, and commit command implementations.

Each command runs one cvs invocation per file and reports whether the
change was applied.
"""

import logging
from collections.abc import Callable
from typing import Annotated

import typer

from cvsctl.cli.display import (
    OperationResult,
    Outcome,
    create_results_table,
    print_results_summary,
)
from cvsctl.cli.types import get_client
from cvsctl.cvs.errors import InvalidCvsRootError, MalformedPathError, ProcessFailure
from cvsctl.utils.formatting import console

logger = logging.getLogger(__name__)


def run_per_file(paths: list[str], operation: Callable[[str], bool]) -> list[OperationResult]:
    """Run an operation on each file, collecting results instead of stopping.

    Args:
        paths: Files to operate on, in order.
        operation: Client method returning True when cvs applied a change.

    Returns:
        One OperationResult per path.
    """
    results: list[OperationResult] = []
    for path in paths:
        try:
            applied = operation(path)
        except MalformedPathError as e:
            results.append(OperationResult(path, Outcome.NOT_ATTEMPTED, str(e)))
        except InvalidCvsRootError:
            results.append(OperationResult(path, Outcome.FAILED, "Not a CVS working copy"))
        except ProcessFailure as e:
            logger.debug("Operation failed for %s: %s", path, e.message)
            results.append(OperationResult(path, Outcome.FAILED, e.message))
        else:
            results.append(OperationResult.from_applied(path, applied))
    return results


def _report(title: str, results: list[OperationResult]) -> None:
    console.print(create_results_table(title, results))
    print_results_summary(results)
    if any(r.failed for r in results):
        raise typer.Exit(code=1)


def add_files(
    ctx: typer.Context,
    paths: Annotated[
        list[str],
        typer.Argument(help="Files to schedule for addition."),
    ],
) -> None:
    """Schedule files for addition to the repository.

    Examples:
        cvsctl add src/new_module.c
    """
    client = get_client(ctx)
    _report("Add", run_per_file(paths, client.add))


def update_files(
    ctx: typer.Context,
    paths: Annotated[
        list[str],
        typer.Argument(help="Files to update."),
    ],
) -> None:
    """Update files from the repository.

    Files that are already up to date are reported as "no change".

    Examples:
        cvsctl update src/main.c src/util.c
    """
    client = get_client(ctx)
    _report("Update", run_per_file(paths, client.update))


def commit_files(
    ctx: typer.Context,
    paths: Annotated[
        list[str],
        typer.Argument(help="Files to commit."),
    ],
    message: Annotated[
        str,
        typer.Option(
            "--message",
            "-m",
            help="Log message for the commit.",
        ),
    ],
) -> None:
    """Commit files with a log message.

    Examples:
        cvsctl commit -m "Fix buffer overflow" src/main.c
    """
    client = get_client(ctx)
    _report("Commit", run_per_file(paths, lambda path: client.commit(path, message)))
