"""
Cookie file provisioning for yt-dlp.

YouTube increasingly asks anonymous clients to sign in. A Netscape format
cookie file exported from a logged-in browser gets past that; this module
copies one into the request's working area from a URL or a local path.
"""

from __future__ import annotations

import logging
import shutil
import urllib.error
import urllib.request
from pathlib import Path

from youtube_subtitles.config.defaults import COOKIE_FETCH_TIMEOUT_MS

logger = logging.getLogger(__name__)

COOKIES_FILENAME = "cookies.txt"


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _download(url: str, dest: Path, timeout: float) -> None:
    req = urllib.request.Request(url, method="GET")
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        if resp.status != 200:
            raise OSError(f"Failed to fetch cookies: HTTP {resp.status}")
        with open(dest, "wb") as f:
            shutil.copyfileobj(resp, f)


def provision_cookies(
    source: str,
    dest_dir: Path,
    timeout_ms: int = COOKIE_FETCH_TIMEOUT_MS,
) -> Path | None:
    """Materialize a cookie file inside ``dest_dir``.

    Args:
        source: http(s) URL or local file path of a Netscape cookie file
        dest_dir: Working area to write ``cookies.txt`` into
        timeout_ms: Network timeout for URL sources

    Returns:
        Path to the cookie file, or None if it could not be obtained.
        Failure is logged and never raised.
    """
    dest = dest_dir / COOKIES_FILENAME
    try:
        if _is_url(source):
            _download(source, dest, timeout_ms / 1000)
        else:
            src_path = Path(source).expanduser()
            if not src_path.is_file():
                logger.warning(f"Cookies file not found: {src_path}")
                return None
            shutil.copyfile(src_path, dest)
    except (urllib.error.URLError, OSError, ValueError) as e:
        logger.warning(f"Failed to download cookies from {source}: {e}")
        dest.unlink(missing_ok=True)
        return None

    if dest.stat().st_size == 0:
        logger.warning(f"Cookies from {source} are empty, continuing without cookies")
        dest.unlink(missing_ok=True)
        return None

    logger.debug(f"Cookies written to {dest}")
    return dest
