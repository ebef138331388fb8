"""
WebVTT parser.

Reads cue timings and text only. Cue settings and the header metadata
yt-dlp writes before the first cue (``Kind:``, ``Language:``) are ignored.
Blank lines between cues are optional.
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

_CUE_TIMING_RE = re.compile(r"^(\d{2}:\d{2}:\d{2}\.\d{3}) --> (\d{2}:\d{2}:\d{2}\.\d{3})")


class _OpenCue:
    __slots__ = ("start", "end", "lines")

    def __init__(self, start: float, end: float):
        self.start = start
        self.end = end
        self.lines: list[str] = []

    def to_entry(self) -> CaptionEntry | None:
        text = sanitize(" ".join(self.lines))
        if not text:
            return None
        return CaptionEntry(
            text=text,
            start=self.start,
            duration=max(self.end - self.start, 0.0),
        )


def parse_vtt_entries(content: str) -> list[CaptionEntry]:
    """Parse WebVTT text into raw entries, in file order, without normalizing."""
    entries: list[CaptionEntry] = []
    cue: _OpenCue | None = None

    def flush() -> None:
        if cue is not None:
            entry = cue.to_entry()
            if entry is not None:
                entries.append(entry)

    for raw_line in content.splitlines():
        line = raw_line.strip().lstrip("\ufeff")
        if not line or line.startswith("WEBVTT"):
            continue

        match = _CUE_TIMING_RE.match(line)
        if match:
            flush()
            try:
                cue = _OpenCue(parse_timestamp(match.group(1)), parse_timestamp(match.group(2)))
            except MalformedTimestampError as e:
                logger.debug(f"Skipping cue with bad timing: {e}")
                cue = None
        elif "-->" in line:
            # Unrecognised timing line; its text must not leak into the previous cue
            flush()
            cue = None
        elif cue is not None:
            cue.lines.append(line)

    flush()
    return entries


def parse_vtt(content: str) -> CaptionSet:
    """Parse a WebVTT file body into a normalized CaptionSet.

    Args:
        content: Full file text

    Returns:
        CaptionSet sorted by start time
    """
    return normalize(parse_vtt_entries(content))
