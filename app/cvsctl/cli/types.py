"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from cvsctl.core.config import ConfigError, CvsConfig, load_config_or_default
from cvsctl.cvs.client import CvsClient
from cvsctl.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_config(ctx: typer.Context) -> CvsConfig:
    """Load the configuration selected by the global --config option.

    Args:
        ctx: Typer context carrying the global options.

    Returns:
        Loaded configuration, or defaults when no file exists.

    Raises:
        typer.Exit: If the configuration file is invalid.
    """
    obj = ctx.find_root().obj or {}
    config_path: Path | None = obj.get("config_path")
    try:
        return load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def get_client(ctx: typer.Context) -> CvsClient:
    """Create a CvsClient from the active configuration."""
    return CvsClient.from_config(get_config(ctx))
