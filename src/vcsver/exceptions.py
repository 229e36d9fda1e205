"""Exceptions raised by vcsver."""

from enum import StrEnum
from typing import Self


class VcsverError(Exception):
    """Base exception for all vcsver errors."""


class InvalidVersionError(VcsverError, ValueError):
    """Raised when a semantic version string cannot be parsed."""

    def __init__(self: Self, version: object, message: str | None = None) -> None:
        """Initialize the error.

        Args:
            version: The rejected input.
            message: Optional override of the default message.
        """
        self.version = version
        super().__init__(message or f"Invalid version format: {version!r}")


class InvalidBuildError(VcsverError, ValueError):
    """Raised when a build number is missing or is not a non-negative integer."""

    def __init__(self: Self, build: object) -> None:
        """Initialize the error.

        Args:
            build: The rejected input.
        """
        self.build = build
        super().__init__(f"Invalid build number: {build!r}")


class InvalidHashError(VcsverError, ValueError):
    """Raised when a revision hash is empty or contains non-hex characters."""

    def __init__(self: Self, value: object) -> None:
        """Initialize the error.

        Args:
            value: The rejected input.
        """
        self.value = value
        super().__init__(f"Invalid hash: {value!r}")


class DecodeFailure(StrEnum):
    """Why a required autorevision key could not be decoded."""

    MISSING = "missing"
    WRONG_TYPE = "wrong_type"
    UNPARSEABLE = "unparseable"


class VersionControlDecodeError(VcsverError, ValueError):
    """Raised when autorevision metadata lacks a usable required key.

    Attributes:
        key: The autorevision key that failed, or None when the document itself
            is not a mapping.
        reason: Which kind of failure occurred.
    """

    def __init__(self: Self, key: str | None, reason: DecodeFailure) -> None:
        """Initialize the error.

        Args:
            key: The failing key.
            reason: The failure kind.
        """
        self.key = key
        self.reason = reason
        where = key if key is not None else "document"
        super().__init__(f"Cannot decode {where}: {reason.value.replace('_', ' ')}")


class AutorevisionSourceError(VcsverError):
    """Raised when autorevision JSON cannot be read or is not a JSON object."""


class ConfigError(VcsverError):
    """Raised when vcsver configuration cannot be loaded."""
