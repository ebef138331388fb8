"""
Configuration for youtube_subtitles.

Contains default settings and the layered config loader.
"""

from youtube_subtitles.config.defaults import (
    COOKIE_FETCH_TIMEOUT_MS,
    DEDUP_BUCKETS_PER_SECOND,
    DEFAULT_LANGUAGES,
    DOWNLOAD_TIMEOUT_MS,
    MIN_CAPTION_DURATION,
)
from youtube_subtitles.config.loader import (
    ConfigSource,
    SubtitlesConfig,
    clear_config_cache,
    get_config,
)

__all__ = [
    "COOKIE_FETCH_TIMEOUT_MS",
    "DEDUP_BUCKETS_PER_SECOND",
    "DEFAULT_LANGUAGES",
    "DOWNLOAD_TIMEOUT_MS",
    "MIN_CAPTION_DURATION",
    # Config loader
    "ConfigSource",
    "SubtitlesConfig",
    "clear_config_cache",
    "get_config",
]
