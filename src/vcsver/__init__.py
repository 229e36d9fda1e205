"""vcsver - build provenance from autorevision metadata.

Decodes the revision metadata written by autorevision and composes it with an
application's semantic version and build number.
"""

from ._version import __version__
from .dates import parse_rfc3339
from .exceptions import (
    AutorevisionSourceError,
    ConfigError,
    DecodeFailure,
    InvalidBuildError,
    InvalidHashError,
    InvalidVersionError,
    VcsverError,
    VersionControlDecodeError,
)
from .hash import Hash
from .semver import Ordering, SemVer, compare
from .vcs_info import VersionControlInfo, VersionControlType
from .version import Version

__all__ = [
    "AutorevisionSourceError",
    "ConfigError",
    "DecodeFailure",
    "Hash",
    "InvalidBuildError",
    "InvalidHashError",
    "InvalidVersionError",
    "Ordering",
    "SemVer",
    "VcsverError",
    "Version",
    "VersionControlDecodeError",
    "VersionControlInfo",
    "VersionControlType",
    "__version__",
    "compare",
    "parse_rfc3339",
]
