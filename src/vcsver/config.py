"""Configuration loaded from vcsver.toml or pyproject.toml."""

import tomllib
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigError

CONFIG_FILENAME = "vcsver.toml"
PYPROJECT_FILENAME = "pyproject.toml"


class VcsverConfig(BaseModel):
    """Settings used by the command-line interface.

    Attributes:
        autorevision: Default autorevision JSON file.
        version: Default application version string.
        build: Default application build number.
        short_hash_length: Length of abbreviated hashes in output.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    autorevision: Path | None = None
    version: str | None = None
    build: str | int | None = None
    short_hash_length: int = Field(default=7, ge=1, le=40)

    def resolve_paths(self: Self, base_dir: Path) -> Self:
        """Resolve a relative autorevision path against base_dir."""
        if self.autorevision is None or self.autorevision.is_absolute():
            return self
        return self.model_copy(update={"autorevision": base_dir / self.autorevision})


def _read_table(config_path: Path) -> dict[str, Any] | None:
    try:
        with open(config_path, "rb") as f:
            document = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    if config_path.name == PYPROJECT_FILENAME:
        table = document.get("tool", {}).get("vcsver")
    else:
        table = document.get("vcsver")

    if table is not None and not isinstance(table, dict):
        raise ConfigError(f"vcsver configuration in {config_path} must be a table")
    return table


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Locate a configuration file in start_dir.

    ``vcsver.toml`` takes precedence over a ``pyproject.toml`` that has a
    ``[tool.vcsver]`` table.

    Args:
        start_dir: Directory to search. Defaults to the current directory.

    Returns:
        Path to the configuration file, or None.
    """
    directory = start_dir or Path.cwd()

    candidate = directory / CONFIG_FILENAME
    if candidate.is_file():
        return candidate

    candidate = directory / PYPROJECT_FILENAME
    if candidate.is_file() and _read_table(candidate) is not None:
        return candidate

    return None


def load_config(config_path: Path | None = None) -> VcsverConfig:
    """Load vcsver configuration.

    Args:
        config_path: Explicit configuration file. If omitted, the current
            directory is searched.

    Returns:
        The loaded configuration, or defaults when none is found.

    Raises:
        ConfigError: If the file is missing, malformed, or holds invalid
            values.
    """
    if config_path is not None and not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    path = config_path or find_config_file()
    if path is None:
        return VcsverConfig()

    table = _read_table(path)
    if table is None:
        return VcsverConfig()

    try:
        config = VcsverConfig.model_validate(table)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigError(f"Invalid configuration in {path}: {errors}") from e

    return config.resolve_paths(path.parent)
