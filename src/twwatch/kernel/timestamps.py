"""Timestamp prefixes of workflow log lines.

Every log line starts with an RFC3339 timestamp with nanosecond precision,
followed by a single separator character. Two encodings occur:

- ``2024-01-01T00:00:00.000000000Z`` (UTC, 30 characters)
- ``2024-01-01T00:00:00.000000000+00:00`` (offset, 35 characters)

The character at offset 29 tells them apart.
"""

from typing import Optional

LOG_TIMESTAMP_LENGTH = 30  # RFC3339 with nanoseconds, "Z" instead of "+00:00"
LONG_TIMESTAMP_LENGTH = len("2006-01-02T15:04:05.999999999Z07:00")
TIMEZONE_MARKER_OFFSET = 29
SEPARATOR_LENGTH = 1


def get_timestamp_length(line: str) -> int:
    """Length of the timestamp at the start of ``line``, excluding the separator."""
    # Offset 29 holds either '+' for an offset timestamp or 'Z' for UTC.
    if len(line) > TIMEZONE_MARKER_OFFSET and line[TIMEZONE_MARKER_OFFSET] == "+":
        return LONG_TIMESTAMP_LENGTH
    return LOG_TIMESTAMP_LENGTH


def strip_timestamp(line: str) -> str:
    """Drop the timestamp and separator from one complete line.

    Lines too short to carry a timestamp are returned unchanged.
    """
    if len(line) < LOG_TIMESTAMP_LENGTH - 1:
        return line
    return line[get_timestamp_length(line) + SEPARATOR_LENGTH:]


def timestamp_prefix_length(text: str) -> Optional[int]:
    """Number of leading characters of ``text`` to drop as timestamp prefix.

    ``text`` starts at a line beginning and may end in the middle of a line.
    Returns None while the first line is incomplete and too short to
    decide; complete lines are handled exactly like strip_timestamp().
    """
    newline = text.find("\n")
    complete = newline != -1
    line = text[:newline] if complete else text

    if not complete and len(line) <= TIMEZONE_MARKER_OFFSET:
        return None
    if len(line) < LOG_TIMESTAMP_LENGTH - 1:
        return 0

    prefix = get_timestamp_length(line) + SEPARATOR_LENGTH
    if not complete and len(line) < prefix:
        return None
    return min(prefix, len(line))
