"""
youtube_subtitles - YouTube captions for MCP clients.

1. Download subtitles with yt-dlp (one language at a time, with fallbacks)
2. Parse WebVTT/SRT into clean, deduplicated caption entries
3. Serve the text through a Model Context Protocol tool
"""

# Exceptions
from youtube_subtitles.exceptions import (
    CleanupFailedError,
    DownloadFailedError,
    DownloadTimeoutError,
    InvalidArgumentError,
    MalformedTimestampError,
    NoSubtitlesFoundError,
    SubtitleError,
    ToolUnavailableError,
    UnsupportedFormatError,
    VideoUnavailableError,
    YoutubeSubtitlesError,
)

# Models
from youtube_subtitles.models import CaptionEntry, CaptionSet, RetrievalRequest

# Core operations
from youtube_subtitles.operations.subtitles import (
    fetch_subtitles,
    get_subtitle_text,
    retrieve,
)

# Parsing
from youtube_subtitles.parsing import (
    normalize,
    parse_srt,
    parse_subtitle_file,
    parse_timestamp,
    parse_vtt,
    sanitize,
)

__version__ = "0.1.0"

__all__ = [
    # Operations
    "fetch_subtitles",
    "get_subtitle_text",
    "retrieve",
    # Parsing
    "normalize",
    "parse_srt",
    "parse_subtitle_file",
    "parse_timestamp",
    "parse_vtt",
    "sanitize",
    # Models
    "CaptionEntry",
    "CaptionSet",
    "RetrievalRequest",
    # Exceptions
    "CleanupFailedError",
    "DownloadFailedError",
    "DownloadTimeoutError",
    "InvalidArgumentError",
    "MalformedTimestampError",
    "NoSubtitlesFoundError",
    "SubtitleError",
    "ToolUnavailableError",
    "UnsupportedFormatError",
    "VideoUnavailableError",
    "YoutubeSubtitlesError",
]
