"""Semantic version parsing and precedence."""

import logging
import re
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import Any, Self

from .exceptions import InvalidVersionError

logger = logging.getLogger(__name__)

_IDENTIFIER = r"[0-9A-Za-z-]+"
_IDENTIFIERS = rf"{_IDENTIFIER}(?:\.{_IDENTIFIER})*"
_SEMVER_RE = re.compile(
    rf"([0-9]+)\.([0-9]+)\.([0-9]+)(?:-({_IDENTIFIERS}))?(?:\+({_IDENTIFIERS}))?"
)
_IDENTIFIER_RE = re.compile(_IDENTIFIER)


class Ordering(IntEnum):
    """Result of comparing two versions."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


def _split_identifiers(value: str | None) -> tuple[str, ...]:
    return tuple(value.split(".")) if value else ()


def _numeric_key(part: str) -> tuple[int, int, str]:
    digits = part.lstrip("0") or "0"
    return (0, len(digits), digits)


@total_ordering
@dataclass(frozen=True, eq=False)
class SemVer:
    """Semantic version representation.

    Build metadata is carried for display only. It takes no part in equality,
    hashing or ordering.

    Attributes:
        major: Major version number (breaking changes).
        minor: Minor version number (backward-compatible features).
        patch: Patch version number (backward-compatible fixes).
        prerelease: Dot-separated prerelease identifiers, empty for a release.
        build_metadata: Dot-separated build identifiers.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build_metadata: tuple[str, ...] = ()

    def __post_init__(self: Self) -> None:
        """Validate components passed to the constructor directly."""
        if min(self.major, self.minor, self.patch) < 0:
            raise InvalidVersionError(
                (self.major, self.minor, self.patch),
                "Version components must be non-negative",
            )
        for identifier in (*self.prerelease, *self.build_metadata):
            if not _IDENTIFIER_RE.fullmatch(identifier):
                raise InvalidVersionError(
                    identifier, f"Invalid version identifier: {identifier!r}"
                )

    @classmethod
    def parse(cls, version_str: str) -> Self:
        """Parse a semantic version string.

        Args:
            version_str: Version string in format
                "major.minor.patch[-prerelease][+build]".

        Returns:
            Parsed SemVer instance.

        Raises:
            InvalidVersionError: If version string format is invalid.
        """
        if not isinstance(version_str, str):
            raise InvalidVersionError(version_str)

        match = _SEMVER_RE.fullmatch(version_str.strip())
        if match is None:
            raise InvalidVersionError(version_str)

        major, minor, patch, prerelease, build = match.groups()
        try:
            core = int(major), int(minor), int(patch)
        except ValueError as e:
            raise InvalidVersionError(version_str) from e

        return cls(
            *core,
            _split_identifiers(prerelease),
            _split_identifiers(build),
        )

    @classmethod
    def try_parse(cls, version_str: Any) -> Self | None:
        """Parse a semantic version string, returning None on failure.

        Args:
            version_str: Candidate version string, possibly None.

        Returns:
            Parsed SemVer instance, or None.
        """
        if version_str is None:
            return None
        try:
            return cls.parse(version_str)
        except InvalidVersionError as e:
            logger.debug("Ignoring unparseable version: %s", e)
            return None

    @property
    def core(self: Self) -> tuple[int, int, int]:
        """The (major, minor, patch) triple."""
        return (self.major, self.minor, self.patch)

    @property
    def is_prerelease(self: Self) -> bool:
        """Whether this version carries prerelease identifiers."""
        return bool(self.prerelease)

    def _precedence_key(self: Self) -> tuple[Any, ...]:
        # A release sorts after every prerelease of the same core. Numeric
        # identifiers are tagged 0 so they sort before alphanumeric ones (1), and
        # numeric ones compare by digit count, then by digits.
        if not self.prerelease:
            return (*self.core, (1,))
        identifiers = tuple(
            _numeric_key(part) if part.isdigit() else (1, part)
            for part in self.prerelease
        )
        return (*self.core, (0, identifiers))

    def __eq__(self: Self, other: object) -> bool:
        """Compare by precedence, ignoring build metadata."""
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._precedence_key() == other._precedence_key()

    def __lt__(self: Self, other: object) -> bool:
        """Order by semantic version precedence."""
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()

    def __hash__(self: Self) -> int:
        """Hash consistently with equality."""
        return hash(self._precedence_key())

    def __str__(self: Self) -> str:
        """Return string representation of version.

        Returns:
            Version string in format "major.minor.patch[-prerelease][+build]".
        """
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build_metadata:
            text += "+" + ".".join(self.build_metadata)
        return text

    def __repr__(self: Self) -> str:
        """Return detailed string representation.

        Returns:
            Detailed version representation.
        """
        extras = ""
        if self.prerelease:
            extras += f", prerelease={self.prerelease!r}"
        if self.build_metadata:
            extras += f", build_metadata={self.build_metadata!r}"
        return f"SemVer({self.major}, {self.minor}, {self.patch}{extras})"


def compare(a: SemVer, b: SemVer) -> Ordering:
    """Compare two versions by semantic version precedence.

    Args:
        a: Left-hand version.
        b: Right-hand version.

    Returns:
        Ordering of a relative to b.
    """
    if a < b:
        return Ordering.LESS
    if a == b:
        return Ordering.EQUAL
    return Ordering.GREATER
