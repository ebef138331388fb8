"""
SubRip (.srt) parser.
"""

from __future__ import annotations

import logging
import re

from youtube_subtitles.exceptions import MalformedTimestampError
from youtube_subtitles.models.caption import CaptionEntry, CaptionSet
from youtube_subtitles.parsing.normalize import normalize
from youtube_subtitles.parsing.sanitize import sanitize
from youtube_subtitles.parsing.timecode import parse_timestamp

logger = logging.getLogger(__name__)

_TIMING_RE = re.compile(r"^(\d{2}:\d{2}:\d{2},\d{3}) --> (\d{2}:\d{2}:\d{2},\d{3})")
_BLOCK_SEPARATOR_RE = re.compile(r"\n\s*\n")


def parse_srt_entries(content: str) -> list[CaptionEntry]:
    """Parse SRT text into raw entries, in file order, without normalizing.

    Blocks without a valid timing line are skipped.
    """
    text = content.replace("\r\n", "\n").replace("\r", "\n").lstrip("\ufeff").strip()
    entries: list[CaptionEntry] = []

    for block in _BLOCK_SEPARATOR_RE.split(text):
        lines = block.strip().split("\n")
        if len(lines) < 3:
            continue

        match = _TIMING_RE.match(lines[1].strip())
        if not match:
            logger.debug(f"Skipping SRT block without timing line: {lines[0]!r}")
            continue

        try:
            start = parse_timestamp(match.group(1).replace(",", "."))
            end = parse_timestamp(match.group(2).replace(",", "."))
        except MalformedTimestampError as e:
            logger.debug(f"Skipping SRT block with bad timing: {e}")
            continue

        caption = sanitize(" ".join(lines[2:]))
        if caption:
            entries.append(
                CaptionEntry(text=caption, start=start, duration=max(end - start, 0.0))
            )

    return entries


def parse_srt(content: str) -> CaptionSet:
    """Parse an SRT file body into a normalized CaptionSet.

    Args:
        content: Full file text

    Returns:
        CaptionSet sorted by start time
    """
    return normalize(parse_srt_entries(content))
