"""Configuration for the cvs client integration.

Defines which cvs binary to run, which legacy codec its output uses,
and process limits. Configuration is stored in ~/.config/cvsctl/config.toml
and can be partially overridden by environment variables.
"""

import codecs
import logging
import os
import tomllib
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cvsctl.core.paths import get_config_path

logger = logging.getLogger(__name__)

# Environment variables that override file settings
ENV_OVERRIDES: dict[str, str] = {
    "CVSCTL_EXECUTABLE": "executable",
    "CVSCTL_ENCODING": "encoding",
}


class CvsConfig(BaseModel):
    """Settings for running the cvs client.

    Attributes:
        executable: cvs binary name or path.
        encoding: Codec of the client's output (locale dependent, not UTF-8).
        timeout_seconds: Per-process timeout. None waits indefinitely.
        cvsroot: Repository root exported as CVSROOT. None keeps the environment's.
        max_workers: Concurrent status queries across directories.
    """

    model_config = ConfigDict(extra="forbid")

    executable: Annotated[
        str,
        Field(min_length=1, description="cvs binary to invoke"),
    ] = "cvs"
    encoding: Annotated[
        str,
        Field(description="Codec used to decode cvs output"),
    ] = "gbk"
    timeout_seconds: Annotated[
        int | None,
        Field(ge=1, description="Process timeout in seconds (None = no limit)"),
    ] = None
    cvsroot: Annotated[
        str | None,
        Field(description="CVSROOT passed to the cvs client"),
    ] = None
    max_workers: Annotated[
        int,
        Field(ge=1, le=32, description="Parallel status queries (1-32)"),
    ] = 4

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate that the encoding is a known codec."""
        try:
            codecs.lookup(v)
        except LookupError:
            msg = f"unknown encoding '{v}'"
            raise ValueError(msg) from None
        return v

    @property
    def process_env(self) -> dict[str, str]:
        """Environment variables to add to every cvs process."""
        if self.cvsroot:
            return {"CVSROOT": self.cvsroot}
        return {}


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def _apply_env_overrides(data: dict[str, object]) -> dict[str, object]:
    merged = dict(data)
    for env_var, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            logger.debug("Overriding %s from %s", key, env_var)
            merged[key] = value
    return merged


def load_config(path: Path | None = None) -> CvsConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated CvsConfig object, with environment overrides applied.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return CvsConfig.model_validate(_apply_env_overrides(data))
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> CvsConfig:
    """Load configuration, falling back to defaults if no file exists.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded CvsConfig, or defaults with environment overrides applied.

    Raises:
        ConfigParseError: If the file exists but is not valid TOML.
        ConfigError: If the file or environment holds invalid values.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file, using defaults")

    try:
        return CvsConfig.model_validate(_apply_env_overrides({}))
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid environment override: {e}") from e


def save_config(config: CvsConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The CvsConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: CvsConfig) -> dict[str, object]:
    """Convert CvsConfig to a dictionary for TOML serialization.

    Executable and encoding are always written; other fields only when
    they differ from the defaults. TOML has no null, so None is omitted.
    """
    defaults = CvsConfig()
    result: dict[str, object] = {
        "executable": config.executable,
        "encoding": config.encoding,
    }

    if config.timeout_seconds is not None:
        result["timeout_seconds"] = config.timeout_seconds

    if config.cvsroot is not None:
        result["cvsroot"] = config.cvsroot

    if config.max_workers != defaults.max_workers:
        result["max_workers"] = config.max_workers

    return result
