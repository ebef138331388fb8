"""
Logging utilities.
"""

import logging
import sys
import time

logger = logging.getLogger("youtube_subtitles")

LOG_FORMAT = "%(name)s: %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Send all logging to stderr so stdout stays clean for JSON-RPC."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def log_timed(msg: str, start_time: float | None = None) -> None:
    """Log timestamped message.

    Args:
        msg: Message to log
        start_time: Start time from time.time(), or None for [START]
    """
    elapsed = f"[{time.time() - start_time:.1f}s]" if start_time else "[START]"
    logger.info(f"{elapsed} {msg}")
