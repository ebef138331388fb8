"""
Subtitle retrieval operations.
"""

from youtube_subtitles.operations.cookies import provision_cookies
from youtube_subtitles.operations.subtitles import (
    fetch_subtitles,
    find_subtitle_files,
    get_subtitle_text,
    retrieve,
)
from youtube_subtitles.operations.workspace import working_area

__all__ = [
    "fetch_subtitles",
    "find_subtitle_files",
    "get_subtitle_text",
    "provision_cookies",
    "retrieve",
    "working_area",
]
