"""Tests for vcsver CLI."""

import json
from pathlib import Path
from textwrap import dedent
from typing import Any

import pytest
from typer.testing import CliRunner

from vcsver.cli.main import app

runner = CliRunner()


@pytest.fixture
def cli_project(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, autorevision_file: Path
) -> Path:
    """Create a project directory configured to use the autorevision file."""
    project = tmp_path / "project"
    project.mkdir()
    (project / "vcsver.toml").write_text(
        dedent(f"""
        [vcsver]
        autorevision = "{autorevision_file.as_posix()}"
        version = "1.2.3"
        build = "4"
    """)
    )
    monkeypatch.chdir(project)
    return project


# show
def test_show_file(
    autorevision_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test showing revision metadata from a file."""
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["show", str(autorevision_file)])

    assert result.exit_code == 0
    assert "Build Provenance" in result.stdout
    assert "widget" in result.stdout
    assert "v1.2.0" in result.stdout
    assert "git release/1.2@3f2a9c1 modified" in result.stdout


def test_show_with_version(
    autorevision_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test composing the version on the command line."""
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(
        app,
        ["show", str(autorevision_file), "--version", "2.0.0-rc.1", "--build", "17"],
    )

    assert result.exit_code == 0
    assert "2.0.0-rc.1 (17) git release/1.2@3f2a9c1 modified" in result.stdout


def test_show_from_config(cli_project: Path) -> None:
    """Test that the autorevision file, version and build come from config."""
    result = runner.invoke(app, ["show"])

    assert result.exit_code == 0
    assert "1.2.3 (4) git release/1.2@3f2a9c1" in result.stdout


def test_show_explicit_config(
    cli_project: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test passing the configuration file explicitly."""
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(
        app, ["show", "--config", str(cli_project / "vcsver.toml"), "--build", "5"]
    )

    assert result.exit_code == 0
    assert "1.2.3 (5)" in result.stdout


def test_show_short_hash_length(
    autorevision_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that the configured abbreviation length is used."""
    (tmp_path / "pyproject.toml").write_text("[tool.vcsver]\nshort_hash_length = 10\n")
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["show", str(autorevision_file)])

    assert result.exit_code == 0
    assert "release/1.2@3f2a9c1e5b" in result.stdout


def test_show_without_source(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that an autorevision file is required."""
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["show"])

    assert result.exit_code == 1
    assert "No autorevision file" in result.stdout


def test_show_missing_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test reporting an unreadable autorevision file."""
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["show", "missing.json"])

    assert result.exit_code == 1
    assert "Error:" in result.stdout
    assert "Cannot read" in result.stdout


def test_show_invalid_metadata(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, required_data: dict[str, Any]
) -> None:
    """Test reporting which required key failed."""
    del required_data["VCS_BRANCH"]
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(required_data))
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["show", str(path)])

    assert result.exit_code == 1
    assert "VCS_BRANCH" in result.stdout
    assert "missing" in result.stdout


def test_show_invalid_build(
    autorevision_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that a malformed build number is reported."""
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(
        app, ["show", str(autorevision_file), "--version", "1.2.3", "--build", "x"]
    )

    assert result.exit_code == 1
    assert "Invalid build number" in result.stdout


def test_show_build_without_version(
    autorevision_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that a build number alone cannot form a version."""
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["show", str(autorevision_file), "--build", "4"])

    assert result.exit_code == 1
    assert "Application version is missing" in result.stdout


def test_show_invalid_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that configuration errors are reported."""
    (tmp_path / "vcsver.toml").write_text("[vcsver]\nunknown = 1\n")
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["show"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.stdout


# compare
@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        ("1.2.3-alpha", "1.2.3", "1.2.3-alpha < 1.2.3"),
        ("1.2.3", "1.2.3+build.9", "1.2.3 = 1.2.3+build.9"),
        ("1.10.0", "1.9.0", "1.10.0 > 1.9.0"),
    ],
)
def test_compare(left: str, right: str, expected: str) -> None:
    """Test comparing two versions."""
    result = runner.invoke(app, ["compare", left, right])

    assert result.exit_code == 0
    assert expected in result.stdout


def test_compare_invalid() -> None:
    """Test that an invalid version is reported."""
    result = runner.invoke(app, ["compare", "1.2", "1.2.3"])

    assert result.exit_code == 1
    assert "Invalid version format" in result.stdout


# check
def test_check_valid(autorevision_file: Path) -> None:
    """Test checking a decodable file."""
    result = runner.invoke(app, ["check", str(autorevision_file)])

    assert result.exit_code == 0
    assert "✓" in result.stdout
    assert "autorevision.json decodes (git release/1.2)" in result.stdout


def test_check_invalid(tmp_path: Path, required_data: dict[str, Any]) -> None:
    """Test checking a file with an unparseable hash."""
    required_data["VCS_FULL_HASH"] = "zzz"
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(required_data))

    result = runner.invoke(app, ["check", str(path)])

    assert result.exit_code == 1
    assert "VCS_FULL_HASH: unparseable" in result.stdout


def test_check_not_an_object(tmp_path: Path) -> None:
    """Test checking a file whose top level is not an object."""
    path = tmp_path / "list.json"
    path.write_text("[]")

    result = runner.invoke(app, ["check", str(path)])

    assert result.exit_code == 1
    assert "must be an object" in result.stdout


# Bracketed input is printed literally
def test_compare_bracketed_input() -> None:
    """Test that markup-like input is reported as an invalid version."""
    result = runner.invoke(app, ["compare", "[/x]", "1.0.0"])

    assert result.exit_code == 1
    assert "Invalid version format" in result.stdout
    assert "[/x]" in result.stdout


def test_check_bracketed_branch(tmp_path: Path, required_data: dict[str, Any]) -> None:
    """Test that branch names containing brackets are shown verbatim."""
    required_data["VCS_BRANCH"] = "fix[bold]x"
    path = tmp_path / "a.json"
    path.write_text(json.dumps(required_data))

    result = runner.invoke(app, ["check", str(path)])

    assert result.exit_code == 0
    assert "a.json decodes (unknown fix[bold]x)" in result.stdout


def test_show_bracketed_metadata(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, required_data: dict[str, Any]
) -> None:
    """Test that decoded metadata is not interpreted as markup."""
    required_data["VCS_BRANCH"] = "fix[bold]x"
    required_data["VCS_EXTRA"] = "[/x]"
    path = tmp_path / "a.json"
    path.write_text(json.dumps(required_data))
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["show", str(path)])

    assert result.exit_code == 0
    assert "[/x]" in result.stdout
    assert "unknown fix[bold]x@abc123" in result.stdout
