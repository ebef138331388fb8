"""
Utility functions for youtube_subtitles.
"""

from youtube_subtitles.utils.logging import configure_logging, log_timed
from youtube_subtitles.utils.system import find_tool

__all__ = [
    "configure_logging",
    "log_timed",
    "find_tool",
]
