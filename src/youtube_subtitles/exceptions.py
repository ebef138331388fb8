"""
Custom exceptions for youtube_subtitles.

All youtube_subtitles exceptions inherit from YoutubeSubtitlesError for easy catching.
"""

from __future__ import annotations

from typing import Any


class YoutubeSubtitlesError(Exception):
    """Base exception for all youtube_subtitles errors."""

    pass


class SubtitleError(YoutubeSubtitlesError):
    """Error fetching or parsing subtitles for a video.

    This is the base class for every failure the retrieval orchestrator
    raises. Specific error types inherit from it so callers can catch one
    type and still inspect what went wrong.

    Attributes:
        message: Human-readable error message
        video_id: The video the request was for
        language_code: Language being attempted, if any
        reason: Error classification (e.g., "tool_unavailable", "timeout")
        details: Additional diagnostic information
    """

    reason_default = "unknown"

    def __init__(
        self,
        message: str,
        *,
        video_id: str | None = None,
        language_code: str | None = None,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.video_id = video_id
        self.language_code = language_code
        self.reason = reason or self.reason_default
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a structured dict for error responses."""
        result: dict[str, Any] = {
            "type": self.__class__.__name__,
            "message": self.message,
            "reason": self.reason,
            "video_id": self.video_id,
        }
        if self.language_code:
            result["language_code"] = self.language_code
        if self.details:
            result["details"] = self.details
        return result


class InvalidArgumentError(SubtitleError):
    """Malformed input, e.g. an empty video ID or language code."""

    reason_default = "invalid_argument"


class ToolUnavailableError(SubtitleError):
    """The yt-dlp executable could not be found or did not answer --version."""

    reason_default = "tool_unavailable"

    def __init__(
        self,
        message: str | None = None,
        *,
        tool_name: str = "yt-dlp",
        video_id: str | None = None,
        language_code: str | None = None,
    ):
        self.tool_name = tool_name
        msg = message or (
            f"{tool_name} is not installed. Please install it from "
            "https://github.com/yt-dlp/yt-dlp#installation"
        )
        super().__init__(
            msg,
            video_id=video_id,
            language_code=language_code,
            details={"tool_name": tool_name},
        )


class DownloadFailedError(SubtitleError):
    """A single language attempt failed.

    Raised per language and caught by the orchestrator, which moves on to the
    next candidate. Only the last one escapes, attached to
    NoSubtitlesFoundError.

    Attributes:
        category: Classification parsed from yt-dlp output
        stderr: Full stderr output from yt-dlp for debugging
    """

    reason_default = "download_failed"

    def __init__(
        self,
        message: str,
        *,
        video_id: str | None = None,
        language_code: str | None = None,
        category: str = "unknown",
        stderr: str = "",
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        details.setdefault("category", category)
        super().__init__(
            message,
            video_id=video_id,
            language_code=language_code,
            reason=reason,
            details=details,
        )
        self.category = category
        self.stderr = stderr


class VideoUnavailableError(DownloadFailedError):
    """Video is private, removed or otherwise unavailable."""

    def __init__(
        self,
        message: str,
        *,
        video_id: str | None = None,
        language_code: str | None = None,
        category: str = "unavailable",
        stderr: str = "",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            video_id=video_id,
            language_code=language_code,
            category=category,
            stderr=stderr,
            reason=category,
            details=details,
        )


class DownloadTimeoutError(DownloadFailedError):
    """yt-dlp did not finish within the configured timeout."""

    def __init__(
        self,
        message: str,
        *,
        video_id: str | None = None,
        language_code: str | None = None,
        timeout_ms: int | None = None,
    ):
        details = {"timeout_ms": timeout_ms} if timeout_ms is not None else None
        super().__init__(
            message,
            video_id=video_id,
            language_code=language_code,
            category="timeout",
            reason="timeout",
            details=details,
        )
        self.timeout_ms = timeout_ms


class NoSubtitlesFoundError(SubtitleError):
    """Every language candidate was tried without a usable result."""

    reason_default = "no_subtitles"

    def __init__(
        self,
        video_id: str,
        attempted_languages: list[str],
        last_error: SubtitleError | None = None,
        message: str | None = None,
    ):
        self.attempted_languages = list(attempted_languages)
        self.last_error = last_error
        msg = message or (
            f"No subtitles found for video {video_id} "
            f"(tried: {', '.join(self.attempted_languages) or 'none'}). "
            "This video may not have subtitles available."
        )
        details: dict[str, Any] = {"attempted_languages": self.attempted_languages}
        if last_error is not None:
            details["last_error"] = last_error.message
        super().__init__(msg, video_id=video_id, details=details)


class UnsupportedFormatError(SubtitleError):
    """Subtitle file extension has no parser."""

    reason_default = "unsupported_format"


class MalformedTimestampError(YoutubeSubtitlesError, ValueError):
    """A timing string does not split into HH:MM:SS[.mmm]."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid time format: {value!r}")


class CleanupFailedError(YoutubeSubtitlesError):
    """A working directory could not be removed. Logged, never raised."""

    def __init__(self, path: str, cause: BaseException | None = None):
        self.path = path
        self.cause = cause
        msg = f"Could not clean up temp directory {path}"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)
