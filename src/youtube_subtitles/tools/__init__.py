"""
External tool wrappers for youtube_subtitles.

Provides a clean interface to yt-dlp.
"""

from youtube_subtitles.tools.base import ExternalTool, SubtitleDownloader, ToolResult
from youtube_subtitles.tools.yt_dlp import YtDlpTool

__all__ = [
    "ExternalTool",
    "SubtitleDownloader",
    "ToolResult",
    "YtDlpTool",
]
