"""Helper functions for the CLI."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..vcs_info import VersionControlInfo
from ..version import Version

console = Console()


def print_error(message: str) -> None:
    """Print error message."""
    console.print(f"[red]Error:[/red] {escape(message)}")


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def _optional(value: object) -> str:
    return "[dim]-[/dim]" if value is None else escape(str(value))


def provenance(
    info: VersionControlInfo | None,
    version: Version | None = None,
    short_hash_length: int = 7,
) -> str:
    """Render a one-line build provenance string, escaped for rich markup.

    Example:
        ``1.2.3 (4) git main@3f2a9c1 modified``
    """
    parts = []
    if version is not None:
        parts.append(str(version))
    if info is not None:
        parts.append(info.type.value)
        parts.append(f"{info.branch}@{info.hash.abbreviate(short_hash_length)}")
        if info.is_working_copy_modified:
            parts.append("modified")
    return escape(" ".join(parts))


def info_table(
    info: VersionControlInfo,
    version: Version | None = None,
) -> Table:
    """Build a table describing a revision and, optionally, the version."""
    table = Table(title="Build Provenance")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    if version is not None:
        table.add_row("Version", escape(str(version.semver)))
        table.add_row("Build", str(version.build))

    table.add_row("Type", info.type.value)
    table.add_row("Base name", escape(info.base_name))
    table.add_row("UUID", _optional(info.uuid))
    table.add_row("Number", str(info.number))
    table.add_row("Date", _optional(info.date.isoformat() if info.date else None))
    table.add_row("Branch", escape(info.branch))
    table.add_row("Tag", _optional(info.tag))
    table.add_row("Tick", _optional(info.tick))
    table.add_row("Extra", _optional(info.extra))
    table.add_row("Hash", str(info.hash))
    table.add_row("Modified", "yes" if info.is_working_copy_modified else "no")
    return table
