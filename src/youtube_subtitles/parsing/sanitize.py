"""
Caption text cleanup: strip WebVTT markup and collapse whitespace.
"""

from __future__ import annotations

import re

# Karaoke-style inline timing, e.g. <00:00:01.520>
_INLINE_TIMESTAMP_RE = re.compile(r"<\d{2}:\d{2}:\d{2}\.\d{3}>")
# Voice and class spans: <v Speaker>, </v>, <c.colorE5E5E5>, </c>
_VOICE_COLOR_TAG_RE = re.compile(r"</?[cv][^>]*>")
_ANY_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize(raw: str) -> str:
    """Remove markup from caption text.

    Tags are stripped before whitespace is collapsed so that gaps left by
    removed tags are folded too.

    Args:
        raw: Caption text as found in the subtitle file

    Returns:
        Plain text with single spaces and no leading/trailing whitespace
    """
    text = _INLINE_TIMESTAMP_RE.sub("", raw)
    text = _VOICE_COLOR_TAG_RE.sub("", text)
    text = _ANY_TAG_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()
