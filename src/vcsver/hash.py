"""Revision hash value type."""

import re
from dataclasses import dataclass
from typing import Any, Self

from .exceptions import InvalidHashError

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")

DEFAULT_SHORT_LENGTH = 7


@dataclass(frozen=True, order=True)
class Hash:
    """A hex-encoded content identifier such as a commit id.

    Upper- and lower-case digits are both accepted and the value is stored in
    lower case, so two hashes differing only in case are equal.

    Attributes:
        value: The normalised lower-case hex string.
    """

    value: str

    def __post_init__(self: Self) -> None:
        """Validate and normalise the hex string."""
        if not isinstance(self.value, str) or not _HEX_RE.fullmatch(self.value):
            raise InvalidHashError(self.value)
        object.__setattr__(self, "value", self.value.lower())

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse a hex string.

        Args:
            text: Candidate hash.

        Returns:
            The parsed Hash.

        Raises:
            InvalidHashError: If text is empty or contains non-hex characters.
        """
        return cls(text)

    @classmethod
    def try_parse(cls, text: Any) -> Self | None:
        """Parse a hex string, returning None when it is not a valid hash."""
        try:
            return cls(text)
        except InvalidHashError:
            return None

    def abbreviate(self: Self, length: int = DEFAULT_SHORT_LENGTH) -> str:
        """Return the leading ``length`` characters of the hash."""
        if length < 1:
            raise ValueError(f"Abbreviation length must be positive, got {length}")
        return self.value[:length]

    @property
    def short(self: Self) -> str:
        """The conventional seven character abbreviation."""
        return self.abbreviate()

    def __str__(self: Self) -> str:
        """Return the hex string."""
        return self.value
