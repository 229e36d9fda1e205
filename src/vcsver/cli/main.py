"""Command-line interface for vcsver."""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from ..config import load_config
from ..exceptions import (
    AutorevisionSourceError,
    ConfigError,
    InvalidBuildError,
    InvalidVersionError,
    VersionControlDecodeError,
)
from ..semver import Ordering, SemVer, compare
from ..vcs_info import VersionControlInfo
from ..version import Version
from ._helpers import console, info_table, print_error, print_success, provenance

app = typer.Typer(help="Build provenance from autorevision metadata")

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to config file (vcsver.toml or pyproject.toml)",
    ),
]

_ORDERING_SYMBOLS = {
    Ordering.LESS: "<",
    Ordering.EQUAL: "=",
    Ordering.GREATER: ">",
}


@app.command()
def show(
    autorevision: Annotated[
        Path | None,
        typer.Argument(..., help="Autorevision JSON file (default: from config)"),
    ] = None,
    version: Annotated[
        str | None,
        typer.Option(..., "--version", "-v", help="Application version"),
    ] = None,
    build: Annotated[
        str | None,
        typer.Option(..., "--build", "-b", help="Application build number"),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Show revision metadata and the composed build provenance."""
    try:
        cfg = load_config(config)

        source = autorevision or cfg.autorevision
        if source is None:
            print_error("No autorevision file given and none configured")
            raise typer.Exit(1)

        info = VersionControlInfo.from_path(source)

        app_version = version if version is not None else cfg.version
        app_build = build if build is not None else cfg.build
        composed = None
        if app_version is not None or app_build is not None:
            composed = Version.compose(app_version, app_build, info)

        console.print(info_table(info, composed))
        console.print(provenance(info, composed, cfg.short_hash_length))

    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1) from e
    except AutorevisionSourceError as e:
        print_error(str(e))
        raise typer.Exit(1) from e
    except VersionControlDecodeError as e:
        print_error(f"Invalid autorevision metadata: {e}")
        raise typer.Exit(1) from e
    except (InvalidVersionError, InvalidBuildError) as e:
        print_error(str(e))
        raise typer.Exit(1) from e


@app.command(name="compare")
def compare_versions(
    left: Annotated[str, typer.Argument(..., help="First version")],
    right: Annotated[str, typer.Argument(..., help="Second version")],
) -> None:
    """Compare two semantic versions by precedence."""
    try:
        a = SemVer.parse(left)
        b = SemVer.parse(right)
    except InvalidVersionError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    console.print(escape(f"{a} {_ORDERING_SYMBOLS[compare(a, b)]} {b}"))


@app.command()
def check(
    autorevision: Annotated[Path, typer.Argument(..., help="Autorevision JSON file")],
) -> None:
    """Check that an autorevision file decodes."""
    try:
        info = VersionControlInfo.from_path(autorevision)
    except AutorevisionSourceError as e:
        print_error(str(e))
        raise typer.Exit(1) from e
    except VersionControlDecodeError as e:
        print_error(f"{e.key or 'document'}: {e.reason.value}")
        raise typer.Exit(1) from e

    print_success(f"{autorevision.name} decodes ({info.type.value} {info.branch})")


if __name__ == "__main__":
    app()
