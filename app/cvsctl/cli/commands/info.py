"""Info command implementation.

Shows the working revision and tags of a file.
"""

import json
from typing import Annotated

import typer

from cvsctl.cli.types import OutputFormat, get_client
from cvsctl.cvs.errors import InvalidCvsRootError, MalformedPathError, ProcessFailure
from cvsctl.utils.formatting import console, print_error


def show_info(
    ctx: typer.Context,
    path: Annotated[
        str,
        typer.Argument(help="File to inspect."),
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
    """Show filename, working revision, and tags of a file.

    Head tags are the tags that point at the repository's current revision.

    Examples:
        cvsctl info src/main.c
        cvsctl info src/main.c --format json
    """
    client = get_client(ctx)
    try:
        info, head_tags = client.describe(path)
    except MalformedPathError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except InvalidCvsRootError as e:
        print_error(f"Not a CVS working copy: {path}")
        raise typer.Exit(code=1) from e
    except ProcessFailure as e:
        print_error(e.message)
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        data = {**info.to_dict(), "head_tags": head_tags}
        console.print_json(json.dumps(data))
        return

    console.print(f"[header]File:[/]      {info.filename or '-'}")
    console.print(f"[header]Revision:[/]  {info.revision or '-'}")
    console.print(f"[header]Tags:[/]      {', '.join(info.tags) or '-'}")
    console.print(f"[header]Head tags:[/] {', '.join(head_tags) or '-'}")
