"""
Caption dataclasses: single cues and the ordered set a retrieval returns.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CaptionEntry:
    """One caption cue.

    Attributes:
        text: Sanitized caption text
        start: Start time in seconds
        duration: Duration in seconds
    """

    text: str
    start: float
    duration: float

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"Caption start must be >= 0, got {self.start}")
        if self.duration < 0:
            raise ValueError(f"Caption duration must be >= 0, got {self.duration}")

    @property
    def end(self) -> float:
        return self.start + self.duration

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"text": self.text, "start": self.start, "duration": self.duration}


@dataclass(frozen=True)
class CaptionSet(Sequence):
    """Ordered, deduplicated captions for one video and language.

    Entries are sorted ascending by start time. Use
    ``youtube_subtitles.parsing.normalize`` to build one from raw entries.

    Attributes:
        entries: The captions, in order
        language: Language code that produced the set, if known
        source: Subtitle file name the set was parsed from, if known
    """

    entries: tuple[CaptionEntry, ...] = ()
    language: str | None = None
    source: str | None = field(default=None, compare=False)

    def __getitem__(self, index):
        return self.entries[index]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[CaptionEntry]:
        return iter(self.entries)

    def text(self, separator: str = " ") -> str:
        """Join caption texts in order."""
        return separator.join(entry.text for entry in self.entries)

    def with_language(self, language: str, source: str | None = None) -> CaptionSet:
        """Return a copy tagged with the language (and file) it came from."""
        return CaptionSet(self.entries, language=language, source=source or self.source)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "language": self.language,
            "source": self.source,
            "count": len(self.entries),
            "entries": [entry.to_dict() for entry in self.entries],
        }

    @classmethod
    def of(cls, entries: Iterable[CaptionEntry], language: str | None = None) -> CaptionSet:
        return cls(tuple(entries), language=language)
