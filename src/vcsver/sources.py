"""Readers that obtain the raw autorevision mapping."""

import json
import os
from collections.abc import Mapping
from importlib.resources import files
from pathlib import Path
from types import ModuleType
from typing import Any

from .exceptions import AutorevisionSourceError

DEFAULT_RESOURCE_NAME = "autorevision"
ENVIRON_PREFIX = "VCS_"


def load_json_bytes(data: bytes | str) -> dict[str, Any]:
    """Parse autorevision JSON.

    Args:
        data: Raw JSON document.

    Returns:
        The top-level JSON object.

    Raises:
        AutorevisionSourceError: If the data is not JSON or not a JSON object.
    """
    try:
        document = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise AutorevisionSourceError(f"Invalid autorevision JSON: {e}") from e

    if not isinstance(document, dict):
        raise AutorevisionSourceError(
            f"Autorevision JSON must be an object, got {type(document).__name__}"
        )
    return document


def read_path(path: str | Path) -> dict[str, Any]:
    """Read autorevision JSON from an arbitrary file.

    Args:
        path: Location of the JSON file.

    Returns:
        The top-level JSON object.

    Raises:
        AutorevisionSourceError: If the file cannot be read or parsed.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise AutorevisionSourceError(f"Cannot read {path}: {e}") from e
    return load_json_bytes(data)


def read_resource(
    package: str | ModuleType,
    name: str = DEFAULT_RESOURCE_NAME,
    directory: str | None = None,
) -> dict[str, Any]:
    """Read autorevision JSON bundled as a package resource.

    Looks up ``<directory>/<name>.json`` inside ``package``.

    Args:
        package: Package (or its import name) that ships the resource.
        name: Resource name without the ``.json`` extension.
        directory: Optional slash-separated subdirectory within the package.

    Returns:
        The top-level JSON object.

    Raises:
        AutorevisionSourceError: If the package or resource cannot be found.
    """
    try:
        resource = files(package)
    except (ModuleNotFoundError, TypeError) as e:
        raise AutorevisionSourceError(f"Cannot locate package {package!r}") from e

    if directory:
        resource = resource.joinpath(*directory.strip("/").split("/"))
    resource = resource.joinpath(f"{name}.json")

    if not resource.is_file():
        raise AutorevisionSourceError(f"Resource not found: {resource}")

    try:
        data = resource.read_bytes()
    except OSError as e:
        raise AutorevisionSourceError(f"Cannot read {resource}: {e}") from e
    return load_json_bytes(data)


def read_environ(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect autorevision variables from the environment.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        The ``VCS_*`` entries of the environment.
    """
    env = os.environ if environ is None else environ
    return {key: value for key, value in env.items() if key.startswith(ENVIRON_PREFIX)}
