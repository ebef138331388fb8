"""
Subtitle parsing: timestamp codec, text sanitizer, format parsers and normalizer.

``parse_subtitle_file`` picks a parser from the file extension. WebVTT and
SubRip have dedicated parsers; ASS/SSA files go through pysubs2 and the
same sanitize/normalize steps.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pysubs2

from youtube_subtitles.exceptions import UnsupportedFormatError
from youtube_subtitles.models.caption import CaptionEntry, CaptionSet
from youtube_subtitles.parsing.normalize import normalize
from youtube_subtitles.parsing.sanitize import sanitize
from youtube_subtitles.parsing.srt import parse_srt
from youtube_subtitles.parsing.timecode import format_seconds, parse_timestamp
from youtube_subtitles.parsing.webvtt import parse_vtt

logger = logging.getLogger(__name__)

PARSERS: dict[str, Callable[[str], CaptionSet]] = {
    "vtt": parse_vtt,
    "srt": parse_srt,
}

# Formats handed to pysubs2
PYSUBS2_FORMATS = {"ass", "ssa"}


def parse_with_pysubs2(content: str, fmt: str) -> CaptionSet:
    """Parse any pysubs2-supported format into a normalized CaptionSet."""
    try:
        subs = pysubs2.SSAFile.from_string(content, format_=fmt)
    except Exception as e:
        raise UnsupportedFormatError(f"Could not parse {fmt} subtitles: {e}") from e

    entries = []
    for event in subs:
        if event.is_comment:
            continue
        text = sanitize(event.plaintext.replace("\n", " "))
        if not text:
            continue
        start = max(event.start, 0) / 1000
        duration = max(event.end - event.start, 0) / 1000
        entries.append(CaptionEntry(text=text, start=start, duration=duration))
    return normalize(entries)


def parse_subtitles(content: str, fmt: str) -> CaptionSet:
    """Parse subtitle text in the given format ("vtt", "srt", "ass", ...).

    Raises:
        UnsupportedFormatError: If no parser handles the format
    """
    fmt = fmt.lower().lstrip(".")
    parser = PARSERS.get(fmt)
    if parser is not None:
        return parser(content)
    if fmt in PYSUBS2_FORMATS:
        return parse_with_pysubs2(content, fmt)
    raise UnsupportedFormatError(f"Unsupported subtitle format: .{fmt}")


def supported_extensions() -> list[str]:
    """Extensions parse_subtitle_file accepts, dedicated parsers first."""
    return [f".{fmt}" for fmt in PARSERS] + [f".{fmt}" for fmt in sorted(PYSUBS2_FORMATS)]


def parse_subtitle_file(path: Path) -> CaptionSet:
    """Read and parse a subtitle file, choosing the parser by extension."""
    content = path.read_text(encoding="utf-8", errors="replace")
    captions = parse_subtitles(content, path.suffix)
    logger.debug(f"Parsed {len(captions)} captions from {path.name}")
    return captions


__all__ = [
    "PARSERS",
    "format_seconds",
    "normalize",
    "parse_srt",
    "parse_subtitle_file",
    "parse_subtitles",
    "parse_timestamp",
    "parse_vtt",
    "parse_with_pysubs2",
    "sanitize",
    "supported_extensions",
]
