"""
Default configuration values for youtube_subtitles.

Note: Runtime values are resolved by config/loader.py which supports
environment variables, project config, and user config.
"""

# Languages tried, in order, when the caller does not name one
DEFAULT_LANGUAGES = ["en", "hi"]

# Timeouts (milliseconds)
DOWNLOAD_TIMEOUT_MS = 30_000
COOKIE_FETCH_TIMEOUT_MS = 10_000
VERSION_CHECK_TIMEOUT_MS = 5_000

# Normalizer thresholds, tuned against YouTube auto-captions
MIN_CAPTION_DURATION = 0.1
DEDUP_BUCKETS_PER_SECOND = 10

# Prefix for per-request scratch directories
WORKDIR_PREFIX = "yt-subs-"

# MCP HTTP transport
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
