"""Color theme for cvsctl output.

Colors come from the bundled data/theme.toml, optionally overridden key by
key from ~/.config/cvsctl/theme.toml, and map each file status to a style.
"""

import logging
import re
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, field_validator
from rich.theme import Theme

from cvsctl.core.paths import get_user_theme_path
from cvsctl.models.status import FileStatus

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Color configuration for cvsctl CLI.

    All colors must be valid hex codes (#RRGGBB or #RGB).
    """

    model_config = ConfigDict(extra="forbid")

    # Base colors
    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    # Semantic colors
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # File status colors
    status_up_to_date: str = "#03b971"
    status_modified: str = "#0e8ac8"
    status_added: str = "#c1ff62"
    status_removed: str = "#f53263"
    status_conflict: str = "#d44ebc"
    status_unknown: str = "#b2bec3"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Accept only #RGB or #RRGGBB strings."""
        color = v.strip() if isinstance(v, str) else v
        if not isinstance(color, str) or not _HEX_COLOR.fullmatch(color):
            msg = f"{info.field_name}: expected #RGB or #RRGGBB, got {v!r}"
            raise ValueError(msg)
        return color


# Rich style name for each file status
STATUS_STYLES: dict[FileStatus, str] = {
    FileStatus.UP_TO_DATE: "status.up_to_date",
    FileStatus.MODIFIED: "status.modified",
    FileStatus.ADDED: "status.added",
    FileStatus.REMOVED: "status.removed",
    FileStatus.CONFLICT: "status.conflict",
    FileStatus.UNKNOWN: "status.unknown",
    FileStatus.NOT_CVS_FILE: "muted",
    FileStatus.LOADING: "muted",
    FileStatus.ERROR: "error",
    FileStatus.NOT_FOUND: "warning",
}


def get_bundled_theme_path() -> Path:
    """Return the path of the theme shipped in cvsctl.data."""
    return resources.files("cvsctl.data").joinpath("theme.toml")  # type: ignore[return-value]


def _read_colors(path: Path) -> dict[str, str]:
    """Read the [colors] table of a theme file.

    A missing, unreadable or malformed file yields no colors. Non-string
    values are dropped so validation only sees candidate hex codes.
    """
    try:
        with open(path, "rb") as f:
            table: object = tomllib.load(f).get("colors", {})
    except FileNotFoundError:
        return {}
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return {k: v for k, v in cast(dict[str, object], table).items() if isinstance(v, str)}


def load_theme() -> ThemeColors:
    """Load theme colors, layering the user theme over the bundled one.

    The user file (~/.config/cvsctl/theme.toml) may set any subset of keys.
    Invalid colors discard the merged result in favour of the defaults.

    Returns:
        ThemeColors instance with merged configuration.
    """
    colors = _read_colors(Path(get_bundled_theme_path()))
    colors.update(_read_colors(get_user_theme_path()))
    try:
        return ThemeColors(**colors)
    except ValueError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


# Statuses drawn in bold to stand out in long tables
_BOLD_STATUSES = frozenset({"modified", "conflict"})


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Convert ThemeColors to a Rich Theme.

    Each `status_<name>` color becomes the `status.<name>` style.

    Args:
        colors: ThemeColors instance to convert. If None, loads theme automatically.

    Returns:
        Rich Theme instance configured with the color scheme.
    """
    if colors is None:
        colors = load_theme()

    styles: dict[str, str] = {}
    for field, color in colors.model_dump().items():
        if field.startswith("status_"):
            name = field.removeprefix("status_")
            styles[f"status.{name}"] = f"bold {color}" if name in _BOLD_STATUSES else color
        else:
            styles[field] = color
    styles["error"] = f"bold {colors.error}"
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Get the Rich theme, loading and caching it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
