"""Revision metadata decoded from autorevision output."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from types import ModuleType
from typing import Annotated, Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    WrapValidator,
)

from .dates import parse_rfc3339
from .exceptions import DecodeFailure, VersionControlDecodeError
from .hash import Hash
from .sources import (
    DEFAULT_RESOURCE_NAME,
    load_json_bytes,
    read_environ,
    read_path,
    read_resource,
)

logger = logging.getLogger(__name__)


class VersionControlType(StrEnum):
    """Version control systems understood by autorevision."""

    GIT = "git"
    HG = "hg"
    SVN = "svn"
    BZR = "bzr"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Map an autorevision ``VCS_TYPE`` value, defaulting to UNKNOWN."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


def _drop_invalid(
    value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
) -> Any:
    try:
        return handler(value)
    except ValidationError:
        logger.debug("Dropping malformed optional field %s=%r", info.field_name, value)
        return None


DropInvalid = WrapValidator(_drop_invalid)


class _AutorevisionPayload(BaseModel):
    """Schema of the autorevision key-value document.

    Required fields come first, in the order their failures are reported.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    base_name: str = Field(alias="VCS_BASENAME")
    number: int = Field(alias="VCS_NUM")
    branch: str = Field(alias="VCS_BRANCH")
    full_hash: str = Field(alias="VCS_FULL_HASH")
    wc_modified: bool = Field(alias="VCS_WC_MODIFIED")

    vcs_type: Annotated[str | None, DropInvalid] = Field(None, alias="VCS_TYPE")
    uuid: Annotated[str | None, DropInvalid] = Field(None, alias="VCS_UUID")
    date: Annotated[str | None, DropInvalid] = Field(None, alias="VCS_DATE")
    tag: Annotated[str | None, DropInvalid] = Field(None, alias="VCS_TAG")
    tick: Annotated[int | None, DropInvalid] = Field(None, alias="VCS_TICK")
    extra: Annotated[str | None, DropInvalid] = Field(None, alias="VCS_EXTRA")


def _decode_failure(error: ValidationError) -> VersionControlDecodeError:
    first = error.errors()[0]
    key = str(first["loc"][0]) if first["loc"] else None
    if first["type"] == "missing":
        return VersionControlDecodeError(key, DecodeFailure.MISSING)
    return VersionControlDecodeError(key, DecodeFailure.WRONG_TYPE)


@dataclass(frozen=True)
class VersionControlInfo:
    """The current-revision metadata of a version control repository.

    Attributes:
        type: The version control system.
        base_name: Basename of the repository root directory.
        uuid: Repository identifier. Derived from the root commit for git and hg;
            the repository UUID for svn.
        number: Count of revisions between the initial and the current one.
        date: Date of the most recent commit.
        branch: Branch selected when autorevision ran.
        tag: Most recent tag ancestral to the current commit.
        tick: Count of commits since ``tag``.
        extra: Free-form value set through the environment or build scripts.
        hash: Full identifier of the current revision.
        is_working_copy_modified: Whether uncommitted changes were present.
    """

    type: VersionControlType
    base_name: str
    number: int
    branch: str
    hash: Hash
    is_working_copy_modified: bool
    uuid: Hash | None = None
    date: datetime | None = None
    tag: str | None = None
    tick: int | None = None
    extra: str | None = None

    @classmethod
    def decode(cls, mapping: Mapping[str, Any], *, strict: bool = True) -> Self:
        """Decode an autorevision key-value mapping.

        Required keys are ``VCS_BASENAME``, ``VCS_NUM``, ``VCS_BRANCH``,
        ``VCS_FULL_HASH`` and ``VCS_WC_MODIFIED``. Optional keys that are
        present but malformed are treated as absent.

        Args:
            mapping: Decoded autorevision document.
            strict: If True, values must already have their JSON types. If
                False, string values are coerced, as needed for environment
                variables.

        Returns:
            The decoded revision info.

        Raises:
            VersionControlDecodeError: If a required key is missing, has the
                wrong type, or the full hash is not valid hex.
        """
        if not isinstance(mapping, Mapping):
            raise VersionControlDecodeError(None, DecodeFailure.WRONG_TYPE)

        try:
            payload = _AutorevisionPayload.model_validate(dict(mapping), strict=strict)
        except ValidationError as e:
            raise _decode_failure(e) from e

        full_hash = Hash.try_parse(payload.full_hash)
        if full_hash is None:
            raise VersionControlDecodeError("VCS_FULL_HASH", DecodeFailure.UNPARSEABLE)

        return cls(
            type=(
                VersionControlType.from_string(payload.vcs_type)
                if payload.vcs_type is not None
                else VersionControlType.UNKNOWN
            ),
            base_name=payload.base_name,
            number=payload.number,
            branch=payload.branch,
            hash=full_hash,
            is_working_copy_modified=payload.wc_modified,
            uuid=Hash.try_parse(payload.uuid),
            date=parse_rfc3339(payload.date),
            tag=payload.tag,
            tick=payload.tick,
            extra=payload.extra,
        )

    @classmethod
    def try_decode(cls, mapping: Any, *, strict: bool = True) -> Self | None:
        """Decode a mapping, returning None instead of raising."""
        try:
            return cls.decode(mapping, strict=strict)
        except VersionControlDecodeError as e:
            logger.debug("Autorevision metadata rejected: %s", e)
            return None

    @classmethod
    def from_bytes(cls, data: bytes | str) -> Self:
        """Decode autorevision JSON held in memory."""
        return cls.decode(load_json_bytes(data))

    @classmethod
    def from_path(cls, path: str | Path) -> Self:
        """Decode autorevision JSON from an arbitrary file."""
        return cls.decode(read_path(path))

    @classmethod
    def from_resource(
        cls,
        package: str | ModuleType,
        name: str = DEFAULT_RESOURCE_NAME,
        directory: str | None = None,
    ) -> Self:
        """Decode autorevision JSON bundled inside a package.

        Args:
            package: Package that ships the resource.
            name: Resource name without the ``.json`` extension.
            directory: Optional subdirectory within the package.

        Returns:
            The decoded revision info.
        """
        return cls.decode(read_resource(package, name, directory))

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Decode ``VCS_*`` environment variables, coercing their string values."""
        return cls.decode(read_environ(environ), strict=False)

    @classmethod
    def based_on(cls, parent: Self, tick: int, extra: str | None = None) -> Self:
        """Derive revision info from ``parent`` with a new tick and extra value.

        Type, base name, number, branch, hash and the working-copy flag are
        copied. ``uuid``, ``date`` and ``tag`` are not carried over.

        Args:
            parent: Previously resolved revision info.
            tick: Commit count to stamp.
            extra: Extra value to stamp.

        Returns:
            The derived revision info.
        """
        return replace(parent, uuid=None, date=None, tag=None, tick=tick, extra=extra)
