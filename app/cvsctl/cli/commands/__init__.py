"""CLI commands for cvsctl.

This package contains all subcommand implementations.
"""

from cvsctl.cli.commands import changes, config, history, info, status, tag, tags

__all__ = ["changes", "config", "history", "info", "status", "tag", "tags"]
