"""
Data models for youtube_subtitles.
"""

from youtube_subtitles.models.caption import CaptionEntry, CaptionSet
from youtube_subtitles.models.request import RetrievalRequest

__all__ = [
    "CaptionEntry",
    "CaptionSet",
    "RetrievalRequest",
]
