"""
Conversion between subtitle timestamps and seconds.
"""

from __future__ import annotations

from youtube_subtitles.exceptions import MalformedTimestampError


def parse_timestamp(value: str) -> float:
    """Convert ``HH:MM:SS.mmm`` (or SRT's ``HH:MM:SS,mmm``) to seconds.

    Args:
        value: Timestamp string

    Returns:
        Offset in seconds

    Raises:
        MalformedTimestampError: If the string is not three numeric
            colon-separated fields
    """
    parts = value.strip().replace(",", ".").split(":")
    if len(parts) != 3:
        raise MalformedTimestampError(value)

    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = float(parts[2])
    except ValueError as e:
        raise MalformedTimestampError(value) from e

    if hours < 0 or minutes < 0 or seconds < 0:
        raise MalformedTimestampError(value)

    return hours * 3600 + minutes * 60 + seconds


def format_seconds(seconds: float, decimal: str = ".") -> str:
    """Format seconds as ``HH:MM:SS.mmm``.

    Args:
        seconds: Time in seconds
        decimal: Separator before milliseconds ("," for SRT)

    Returns:
        Formatted timestamp string
    """
    total_ms = round(max(seconds, 0.0) * 1000)
    hours, rem = divmod(total_ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, millis = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}{decimal}{millis:03d}"
