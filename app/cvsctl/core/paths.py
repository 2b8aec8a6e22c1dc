"""XDG-compliant path management for cvsctl.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage.

XDG defaults:
- Config: ~/.config/cvsctl/
- State: ~/.local/state/cvsctl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "cvsctl"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/cvsctl/ (or XDG_CONFIG_HOME/cvsctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the tag bookmark store, which should persist
    between runs but is not configuration.

    Returns:
        Path to ~/.local/state/cvsctl/ (or XDG_STATE_HOME/cvsctl/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/cvsctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_store_path() -> Path:
    """Get the key/value store file path.

    Returns:
        Path to ~/.local/state/cvsctl/store.json.
    """
    return get_state_dir() / "store.json"


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/cvsctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"
