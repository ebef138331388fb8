"""
yt-dlp tool wrapper for subtitle downloading.
"""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from youtube_subtitles.config.defaults import VERSION_CHECK_TIMEOUT_MS
from youtube_subtitles.exceptions import (
    DownloadFailedError,
    DownloadTimeoutError,
    VideoUnavailableError,
)
from youtube_subtitles.tools.base import ExternalTool, ToolResult
from youtube_subtitles.utils.system import find_tool

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

# Output template; yt-dlp appends ".{lang}" before the extension
OUTPUT_TEMPLATE = "{video_id}-{lang}.%(ext)s"


# ---------------------------------------------------------------------------
# Structured Error Types
# ---------------------------------------------------------------------------


@dataclass
class YtDlpError:
    """Structured error information parsed from yt-dlp stderr.

    Attributes:
        category: Error classification (e.g., "private", "unavailable", "network")
        message: The original error message from yt-dlp
        stderr: Full stderr output for debugging
        details: Additional parsed details (HTTP codes, etc.)
        warnings: List of warning messages extracted from stderr
    """

    category: str
    message: str
    stderr: str
    details: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


# Error patterns for classification, first match wins.
# Each tuple: (pattern, category, detail_extractor)
_ERROR_PATTERNS: list[tuple[re.Pattern, str, Any]] = [
    (
        re.compile(r"private video|video is private", re.IGNORECASE),
        "private",
        None,
    ),
    (
        re.compile(
            r"Video unavailable|This video is unavailable|removed by the uploader"
            r"|This video has been removed",
            re.IGNORECASE,
        ),
        "unavailable",
        None,
    ),
    (
        re.compile(r"Sign in to confirm your age|age.restricted", re.IGNORECASE),
        "age_restricted",
        None,
    ),
    (
        re.compile(r"members.only|subscriber.only", re.IGNORECASE),
        "members_only",
        None,
    ),
    (
        re.compile(r"Sign in to confirm you.re not a bot", re.IGNORECASE),
        "bot_check",
        None,
    ),
    (
        re.compile(
            r"not available in your country|geo.?restrict|blocked in your country",
            re.IGNORECASE,
        ),
        "geo_restricted",
        None,
    ),
    (
        re.compile(r"There are no subtitles|no subtitles for the requested", re.IGNORECASE),
        "no_subtitles",
        None,
    ),
    (
        re.compile(r"HTTP Error 429|too many requests", re.IGNORECASE),
        "rate_limited",
        None,
    ),
    (
        re.compile(r"Connection reset|Connection refused|Connection timed out", re.IGNORECASE),
        "network",
        None,
    ),
    (
        re.compile(r"HTTP Error (\d+)", re.IGNORECASE),
        "http_error",
        lambda m: {"http_code": int(m.group(1))},
    ),
    (
        re.compile(r"is not a valid URL|Unsupported URL|Incomplete YouTube ID", re.IGNORECASE),
        "invalid_url",
        None,
    ),
]

# Categories that mean the video itself cannot be read
_UNAVAILABLE_CATEGORIES = frozenset(
    {"private", "unavailable", "age_restricted", "members_only", "geo_restricted"}
)

# Substrings that fail an attempt even when yt-dlp exits 0
_FATAL_STDERR_MARKERS = ("Private video", "Video unavailable")

_WARNING_PATTERN = re.compile(r"WARNING:\s*(.+?)(?:\n|$)", re.IGNORECASE)


def _extract_warnings(stderr: str) -> list[str]:
    """Extract unique warning messages from yt-dlp stderr."""
    warnings = []
    for match in _WARNING_PATTERN.finditer(stderr):
        warning_text = match.group(1).strip()
        if warning_text and warning_text not in warnings:
            warnings.append(warning_text)
    return warnings


def parse_yt_dlp_error(stderr: str) -> YtDlpError:
    """Parse yt-dlp stderr output into structured error information.

    Args:
        stderr: The stderr output from a failed yt-dlp command

    Returns:
        YtDlpError with category, message, details, and warnings
    """
    error_match = re.search(r"ERROR:\s*(.+?)(?:\n|$)", stderr)
    message = error_match.group(1).strip() if error_match else stderr.strip()
    warnings = _extract_warnings(stderr)

    for pattern, category, detail_extractor in _ERROR_PATTERNS:
        match = pattern.search(stderr)
        if match:
            details = detail_extractor(match) if detail_extractor else {}
            return YtDlpError(
                category=category,
                message=message,
                stderr=stderr,
                details=details,
                warnings=warnings,
            )

    return YtDlpError(
        category="unknown",
        message=message,
        stderr=stderr,
        warnings=warnings,
    )


def yt_dlp_error_to_exception(
    error: YtDlpError,
    *,
    video_id: str,
    language_code: str | None = None,
) -> DownloadFailedError:
    """Convert a YtDlpError to a typed DownloadFailedError exception.

    Args:
        error: The parsed YtDlpError
        video_id: Video the attempt was for
        language_code: Language the attempt was for

    Returns:
        VideoUnavailableError for private/removed/restricted videos,
        DownloadFailedError otherwise
    """
    details = dict(error.details)
    if error.warnings:
        details["warnings"] = error.warnings

    if error.category in _UNAVAILABLE_CATEGORIES:
        return VideoUnavailableError(
            f"Video {video_id} is private or unavailable: {error.message}",
            video_id=video_id,
            language_code=language_code,
            category=error.category,
            stderr=error.stderr,
            details=details,
        )

    message = error.message or "yt-dlp failed without output"
    return DownloadFailedError(
        f"Failed to fetch subtitles for video {video_id} ({language_code}): {message}",
        video_id=video_id,
        language_code=language_code,
        category=error.category,
        stderr=error.stderr,
        details=details,
    )


def result_to_exception(
    result: ToolResult,
    *,
    video_id: str,
    language_code: str,
    timeout_ms: int | None = None,
) -> DownloadFailedError | None:
    """Map a finished yt-dlp run to an exception, or None if it succeeded.

    A zero exit code still fails when stderr reports a private or
    unavailable video.
    """
    if result.timed_out:
        return DownloadTimeoutError(
            f"Subtitle download timed out for video {video_id} ({language_code})",
            video_id=video_id,
            language_code=language_code,
            timeout_ms=timeout_ms,
        )

    if result.not_found:
        return DownloadFailedError(
            f"yt-dlp command not found: {result.error}",
            video_id=video_id,
            language_code=language_code,
            category="tool_missing",
        )

    stderr = result.stderr or ""
    if result.success and not any(m in stderr for m in _FATAL_STDERR_MARKERS):
        return None

    if not stderr and result.error:
        stderr = result.error
    return yt_dlp_error_to_exception(
        parse_yt_dlp_error(stderr),
        video_id=video_id,
        language_code=language_code,
    )


class YtDlpTool(ExternalTool):
    """Wrapper for the yt-dlp command line downloader."""

    @property
    def name(self) -> str:
        return "yt-dlp"

    def is_available(self, timeout: float = VERSION_CHECK_TIMEOUT_MS / 1000) -> bool:
        """Check if yt-dlp is installed (runs ``yt-dlp --version``)."""
        result = self._run(["--version"], timeout=timeout)
        if result.success:
            logger.debug(f"yt-dlp version {result.stdout.strip()}")
        return result.success

    def get_path(self) -> str:
        """Get path to yt-dlp executable."""
        return find_tool("yt-dlp")

    def _run(self, args: list[str], timeout: float | None = None) -> ToolResult:
        """Run yt-dlp with given arguments.

        The child is killed when the timeout expires. Undecodable output bytes
        are replaced rather than raised.

        Args:
            args: Command arguments (without the yt-dlp executable)
            timeout: Command timeout in seconds
        """
        cmd = [self.get_path()] + args
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return ToolResult.from_error(f"Timeout after {timeout}s", timed_out=True)
        except FileNotFoundError as e:
            return ToolResult.from_error(str(e), not_found=True)
        except OSError as e:
            return ToolResult.from_error(str(e))

        return ToolResult(
            success=result.returncode == 0,
            stdout=result.stdout,
            stderr=result.stderr,
            returncode=result.returncode,
        )

    @staticmethod
    def build_subtitle_args(
        video_id: str,
        lang: str,
        output_dir: Path,
        cookies_path: Path | None = None,
    ) -> list[str]:
        """Build the argument list for a subtitle-only download."""
        args = [
            "--write-subs",
            "--write-auto-subs",
            "--sub-langs",
            lang,
            "--sub-format",
            "vtt/srt/best",
            "--skip-download",
            "--no-playlist",
            "--no-warnings",
        ]
        if cookies_path is not None:
            args.extend(["--cookies", str(cookies_path)])
        args.extend(
            [
                "-o",
                str(output_dir / OUTPUT_TEMPLATE.format(video_id=video_id, lang=lang)),
                YOUTUBE_WATCH_URL.format(video_id=video_id),
            ]
        )
        return args

    def download_subtitles(
        self,
        video_id: str,
        lang: str,
        output_dir: Path,
        timeout: float,
        cookies_path: Path | None = None,
    ) -> ToolResult:
        """Download subtitles for one language into ``output_dir``.

        Args:
            video_id: YouTube video ID
            lang: Subtitle language code
            output_dir: Directory yt-dlp writes into
            timeout: Timeout in seconds
            cookies_path: Optional Netscape cookie file

        Returns:
            ToolResult of the yt-dlp run
        """
        args = self.build_subtitle_args(video_id, lang, output_dir, cookies_path)
        return self._run(args, timeout=timeout)
