"""
YouTube video ID extraction.
"""

from __future__ import annotations

import re

VIDEO_ID_LENGTH = 11

_VIDEO_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{11}$")
_YOUTUBE_URL_RE = re.compile(
    r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|v/|shorts/|live/)|youtu\.be/)"
    r"(?P<video_id>[a-zA-Z0-9_-]{11})",
    re.IGNORECASE,
)


def _is_video_id(value: str) -> bool:
    """Check whether a string looks like a bare YouTube video ID."""
    return bool(_VIDEO_ID_RE.match(value))


def extract_video_id(url_or_id: str) -> str | None:
    """Extract the video ID from a YouTube URL, or accept a bare ID.

    Examples::

        >>> extract_video_id("https://www.youtube.com/watch?v=xvFZjo5PgG0")
        'xvFZjo5PgG0'
        >>> extract_video_id("https://youtu.be/xvFZjo5PgG0")
        'xvFZjo5PgG0'
        >>> extract_video_id("xvFZjo5PgG0")
        'xvFZjo5PgG0'

    Returns:
        The 11-character video ID, or None if none is found
    """
    value = url_or_id.strip()
    if _is_video_id(value):
        return value
    match = _YOUTUBE_URL_RE.search(value)
    return match.group("video_id") if match else None
