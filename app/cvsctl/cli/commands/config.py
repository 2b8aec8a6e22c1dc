"""Configuration commands.

Shows the effective configuration and writes a default config file.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from cvsctl.cli.types import get_config
from cvsctl.core.config import ConfigError, CvsConfig, save_config
from cvsctl.core.paths import get_config_path
from cvsctl.utils.formatting import console, print_error, print_success, print_warning
from cvsctl.utils.shell import command_exists

app = typer.Typer(
    help="Show or create the cvsctl configuration.",
    no_args_is_help=True,
)


def _config_path(ctx: typer.Context) -> Path:
    obj = ctx.find_root().obj or {}
    return obj.get("config_path") or get_config_path()


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    config = get_config(ctx)
    path = _config_path(ctx)
    source = str(path) if path.exists() else "defaults"
    console.print(f"[dim]Source: {source}[/]")
    console.print_json(json.dumps(config.model_dump()))
    if not command_exists(config.executable):
        print_warning(f"{config.executable} not found on PATH")


@app.command()
def init(
    ctx: typer.Context,
    encoding: Annotated[
        str,
        typer.Option("--encoding", "-e", help="Codec of the cvs client's output."),
    ] = "gbk",
    executable: Annotated[
        str,
        typer.Option("--executable", help="cvs binary to run."),
    ] = "cvs",
    cvsroot: Annotated[
        str | None,
        typer.Option("--cvsroot", "-d", help="Repository root (exported as CVSROOT)."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a configuration file."""
    path = _config_path(ctx)
    if path.exists() and not force:
        print_warning(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        config = CvsConfig(executable=executable, encoding=encoding, cvsroot=cvsroot)
    except ValueError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1) from e

    try:
        saved = save_config(config, path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote config to {saved}")
