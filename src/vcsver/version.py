"""Application version composed with revision metadata."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Self

from .exceptions import InvalidBuildError, InvalidVersionError
from .semver import SemVer
from .vcs_info import VersionControlInfo

logger = logging.getLogger(__name__)

_BUILD_RE = re.compile(r"[0-9]+")


def parse_build(build: str | int) -> int:
    """Parse a build number.

    Args:
        build: Non-negative integer, or its decimal string form.

    Returns:
        The build number.

    Raises:
        InvalidBuildError: If build is not a non-negative integer.
    """
    if isinstance(build, bool):
        raise InvalidBuildError(build)
    if isinstance(build, int):
        if build < 0:
            raise InvalidBuildError(build)
        return build
    if isinstance(build, str) and _BUILD_RE.fullmatch(build.strip()):
        try:
            return int(build.strip())
        except ValueError as e:
            raise InvalidBuildError(build) from e
    raise InvalidBuildError(build)


@dataclass(frozen=True)
class Version:
    """What was built and from which revision.

    Attributes:
        semver: The application's semantic version.
        build: The application's build number.
        version_control: Revision metadata, when available.
    """

    semver: SemVer
    build: int
    version_control: VersionControlInfo | None = None

    @classmethod
    def compose(
        cls,
        app_version: str | None,
        app_build: str | int | None,
        version_control: VersionControlInfo | None = None,
    ) -> Self:
        """Compose a version from an application's version and build strings.

        Args:
            app_version: Semantic version string of the application.
            app_build: Build number of the application.
            version_control: Revision metadata, passed through unchanged.

        Returns:
            The composed Version.

        Raises:
            InvalidVersionError: If app_version is missing or not a semver.
            InvalidBuildError: If app_build is missing or not a non-negative
                integer.
        """
        if app_version is None:
            raise InvalidVersionError(app_version, "Application version is missing")
        semver = SemVer.parse(app_version)

        if app_build is None:
            raise InvalidBuildError(app_build)
        build = parse_build(app_build)

        return cls(semver=semver, build=build, version_control=version_control)

    @classmethod
    def try_compose(
        cls,
        app_version: Any,
        app_build: Any,
        version_control: VersionControlInfo | None = None,
    ) -> Self | None:
        """Compose a version, returning None if either input is unusable."""
        try:
            return cls.compose(app_version, app_build, version_control)
        except (InvalidVersionError, InvalidBuildError) as e:
            logger.debug("Cannot compose version: %s", e)
            return None

    def __str__(self: Self) -> str:
        """Return "semver (build)"."""
        return f"{self.semver} ({self.build})"
