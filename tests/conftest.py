"""Shared fixtures for vcsver tests."""

import json
from pathlib import Path
from typing import Any

import pytest

from vcsver import VersionControlInfo

FULL_HASH = "3f2a9c1e5b7d4a6f8e0c2b4d6f8a0c2e4b6d8f0a"
ROOT_HASH = "a1b2c3d4e5f60718293a4b5c6d7e8f9012345678"


@pytest.fixture
def required_data() -> dict[str, Any]:
    """The minimal autorevision document that decodes."""
    return {
        "VCS_BASENAME": "repo",
        "VCS_NUM": 4,
        "VCS_BRANCH": "main",
        "VCS_FULL_HASH": "abc123",
        "VCS_WC_MODIFIED": False,
    }


@pytest.fixture
def autorevision_data() -> dict[str, Any]:
    """A complete autorevision document as emitted for a git repository."""
    return {
        "VCS_TYPE": "git",
        "VCS_BASENAME": "widget",
        "VCS_UUID": ROOT_HASH,
        "VCS_NUM": 218,
        "VCS_DATE": "2017-03-07T19:17:06-0500",
        "VCS_BRANCH": "release/1.2",
        "VCS_TAG": "v1.2.0",
        "VCS_TICK": 3,
        "VCS_EXTRA": "nightly",
        "VCS_ACTION_STAMP": "2017-03-08T00:17:06Z!dev@example.com",
        "VCS_FULL_HASH": FULL_HASH,
        "VCS_SHORT_HASH": FULL_HASH[:7],
        "VCS_WC_MODIFIED": True,
    }


@pytest.fixture
def vcs_info(autorevision_data: dict[str, Any]) -> VersionControlInfo:
    """Decoded revision info for the complete document."""
    return VersionControlInfo.decode(autorevision_data)


@pytest.fixture
def autorevision_file(tmp_path: Path, autorevision_data: dict[str, Any]) -> Path:
    """The complete document written to a JSON file."""
    path = tmp_path / "autorevision.json"
    path.write_text(json.dumps(autorevision_data))
    return path
