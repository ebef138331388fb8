"""
Normalization of raw caption entries into a CaptionSet.

YouTube auto-captions repeat each line across overlapping cues and emit
near-zero "transition" cues between them. Both are removed here.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from youtube_subtitles.config.defaults import (
    DEDUP_BUCKETS_PER_SECOND,
    MIN_CAPTION_DURATION,
)
from youtube_subtitles.models.caption import CaptionEntry, CaptionSet


def dedup_key(entry: CaptionEntry, buckets_per_second: int = DEDUP_BUCKETS_PER_SECOND):
    """Identity used for deduplication: text plus bucketed start time."""
    return entry.text, math.floor(entry.start * buckets_per_second)


def normalize(
    entries: Iterable[CaptionEntry],
    *,
    min_duration: float = MIN_CAPTION_DURATION,
    buckets_per_second: int = DEDUP_BUCKETS_PER_SECOND,
) -> CaptionSet:
    """Filter, deduplicate and sort caption entries.

    Args:
        entries: Raw entries in file order
        min_duration: Entries shorter than this (seconds) are dropped
        buckets_per_second: Start-time resolution of the dedup key

    Returns:
        CaptionSet sorted by start; ties keep their input order
    """
    seen: set[tuple[str, int]] = set()
    kept: list[CaptionEntry] = []

    for entry in entries:
        if entry.duration < min_duration:
            continue
        key = dedup_key(entry, buckets_per_second)
        if key in seen:
            continue
        seen.add(key)
        kept.append(entry)

    # sorted() is stable
    return CaptionSet.of(sorted(kept, key=lambda e: e.start))
