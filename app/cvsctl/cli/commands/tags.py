"""Tag bookmark commands.

Lists, shows, and removes the locally bookmarked tags recorded by
`cvsctl tag`.
"""

import json
from typing import Annotated

import typer
from rich.table import Table

from cvsctl.cli.types import OutputFormat, get_client
from cvsctl.core.tags import TagStore
from cvsctl.cvs.commands import split_path
from cvsctl.cvs.errors import MalformedPathError
from cvsctl.utils.formatting import (
    console,
    create_status_table,
    format_status,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Manage local tag bookmarks.",
    no_args_is_help=True,
)


def _directory_of(path: str) -> str:
    try:
        return split_path(path)[0]
    except MalformedPathError:
        return ""


@app.command("list")
def list_tags() -> None:
    """List bookmarked tags, most recent first."""
    store = TagStore()
    tags = store.get_tags()
    if not tags:
        print_info("No tags bookmarked.")
        return

    table = Table(title="Tags", header_style="bold_header", border_style="border")
    table.add_column("Tag", no_wrap=True)
    table.add_column("Files", justify="right", style="info")
    for tag in tags:
        table.add_row(tag, str(len(store.get_tag_files(tag))))
    console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    tag: Annotated[str, typer.Argument(help="Tag to show.")],
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
    """Show the files bookmarked under a tag with their current status."""
    store = TagStore()
    files = store.get_tag_files(tag)
    if not files:
        print_warning(f"No files bookmarked under tag {tag}")
        raise typer.Exit(code=1)

    statuses = get_client(ctx).resolve_statuses([f.path for f in files])
    for file in files:
        file.status = statuses[file.path]
    store.set_tag_files(tag, files)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([f.to_dict() for f in files]))
        return

    table = create_status_table(title=f"Tag {tag}")
    for file in files:
        table.add_row(file.name, format_status(file.status), _directory_of(file.path))
    console.print(table)


@app.command()
def remove(
    tag: Annotated[str, typer.Argument(help="Tag bookmark to remove.")],
) -> None:
    """Remove a tag bookmark. The tag in the repository is not touched."""
    if TagStore().remove_tag(tag):
        print_success(f"Removed bookmark {tag}")
    else:
        print_warning(f"No bookmark named {tag}")
        raise typer.Exit(code=1)


@app.command()
def clear(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Remove all tag bookmarks."""
    store = TagStore()
    tags = store.get_tags()
    if not tags:
        print_info("No tags bookmarked.")
        return

    if not yes and not typer.confirm(f"Remove {len(tags)} tag bookmarks?"):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    store.clear_tags()
    print_success(f"Removed {len(tags)} tag bookmarks")
