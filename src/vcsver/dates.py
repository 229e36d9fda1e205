"""RFC 3339 timestamp parsing."""

from datetime import datetime

from dateutil import parser as date_parser


def parse_rfc3339(text: object) -> datetime | None:
    """Parse an RFC 3339 timestamp.

    A timezone designator is required. Offsets may be written with or without
    a colon (``-05:00`` or ``-0500``, the form autorevision emits). Fractional
    seconds beyond microsecond precision are truncated.

    Args:
        text: Candidate timestamp string.

    Returns:
        A timezone-aware datetime, or None if text is not a valid timestamp.
    """
    if not isinstance(text, str):
        return None

    try:
        parsed = date_parser.isoparse(text.strip())
        if parsed.tzinfo is None or parsed.utcoffset() is None:
            return None
    except (ValueError, OverflowError):
        return None
    return parsed
