"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from cvsctl import __version__
from cvsctl.cli.commands import changes, config, files, history, info, status, tag, tags
from cvsctl.utils.log_setup import setup_logging

# Create main Typer app
app = typer.Typer(
    name="cvsctl",
    help="Inspect and operate on CVS working copies.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cvsctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every cvs command line and its output.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config.toml (default: ~/.config/cvsctl/config.toml).",
        ),
    ] = None,
) -> None:
    """cvsctl - inspect and operate on CVS working copies.

    Query file status, add, update, commit, tag, and browse history
    using the installed cvs client.
    """
    setup_logging(is_verbose=verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path


# Register commands
app.command("status")(status.status_files)
app.command("info")(info.show_info)
app.command("add")(changes.add_files)
app.command("update")(changes.update_files)
app.command("commit")(changes.commit_files)
app.command("tag")(tag.tag_files)
app.command("history")(history.show_history)
app.command("rename")(files.rename_path)
app.command("rm")(files.remove_paths)
app.add_typer(tags.app, name="tags")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
