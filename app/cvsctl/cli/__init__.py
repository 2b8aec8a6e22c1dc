"""CLI package for cvsctl.

This package contains the Typer application and all subcommands.
"""

from cvsctl.cli.main import app

__all__ = ["app"]
