"""Tag command implementation.

Force-applies a tag to files and bookmarks the tagged files locally.
"""

import logging
from typing import Annotated

import typer

from cvsctl.cli.display import (
    OperationResult,
    Outcome,
    create_results_table,
    print_results_summary,
)
from cvsctl.cli.types import get_client
from cvsctl.core.tags import TagStore
from cvsctl.cvs.commands import group_by_directory
from cvsctl.cvs.errors import InvalidCvsRootError, MalformedPathError, ProcessFailure
from cvsctl.models.status import FileDetail
from cvsctl.utils.formatting import console, print_error, print_info

logger = logging.getLogger(__name__)


def _bookmark(tag: str, tagged: list[FileDetail]) -> None:
    """Merge newly tagged files into the tag's bookmark, newest tag first."""
    store = TagStore()
    store.add_tag(tag)
    files = store.get_tag_files(tag)
    known = {f.path for f in files}
    files.extend(f for f in tagged if f.path not in known)
    store.set_tag_files(tag, files)


def tag_files(
    ctx: typer.Context,
    tag: Annotated[
        str,
        typer.Argument(help="Tag name to apply (moved if it already exists)."),
    ],
    paths: Annotated[
        list[str],
        typer.Argument(help="Files to tag."),
    ],
    bookmark: Annotated[
        bool,
        typer.Option(
            "--bookmark/--no-bookmark",
            help="Record the tagged files in the local tag bookmarks.",
        ),
    ] = True,
) -> None:
    """Force-apply a tag to files.

    Files are grouped by directory and tagged with one cvs invocation per
    directory.

    Examples:
        cvsctl tag REL-1_2 src/main.c src/util.c include/util.h
        cvsctl tag --no-bookmark NIGHTLY src/main.c
    """
    try:
        groups = group_by_directory(paths)
    except MalformedPathError as e:
        print_error(f"{e}. Nothing was tagged.")
        raise typer.Exit(code=1) from e

    client = get_client(ctx)
    results: list[OperationResult] = []
    tagged: list[FileDetail] = []

    for directory, filenames in groups.items():
        target = directory or "."
        try:
            applied = client.tag(filenames, directory, tag)
        except MalformedPathError as e:
            results.append(OperationResult(target, Outcome.NOT_ATTEMPTED, str(e)))
            continue
        except InvalidCvsRootError:
            results.append(OperationResult(target, Outcome.FAILED, "Not a CVS working copy"))
            continue
        except ProcessFailure as e:
            results.append(OperationResult(target, Outcome.FAILED, e.message))
            continue

        results.append(OperationResult.from_applied(target, applied))
        if applied:
            tagged.extend(FileDetail(name=name, path=f"{directory}{name}") for name in filenames)

    console.print(create_results_table(f"Tag {tag}", results))
    print_results_summary(results)

    if bookmark and tagged:
        _bookmark(tag, tagged)
        print_info(f"Bookmarked {len(tagged)} files under tag {tag}")

    if any(r.failed for r in results):
        raise typer.Exit(code=1)
