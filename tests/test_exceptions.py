"""Tests for the exception hierarchy and its structured output."""

import pytest

from youtube_subtitles.exceptions import (
    CleanupFailedError,
    DownloadFailedError,
    DownloadTimeoutError,
    InvalidArgumentError,
    MalformedTimestampError,
    NoSubtitlesFoundError,
    SubtitleError,
    ToolUnavailableError,
    UnsupportedFormatError,
    VideoUnavailableError,
    YoutubeSubtitlesError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [
            InvalidArgumentError,
            ToolUnavailableError,
            DownloadFailedError,
            VideoUnavailableError,
            DownloadTimeoutError,
            NoSubtitlesFoundError,
            UnsupportedFormatError,
        ],
    )
    def test_retrieval_errors_are_subtitle_errors(self, cls):
        assert issubclass(cls, SubtitleError)
        assert issubclass(cls, YoutubeSubtitlesError)

    def test_download_specialisations(self):
        assert issubclass(VideoUnavailableError, DownloadFailedError)
        assert issubclass(DownloadTimeoutError, DownloadFailedError)

    def test_internal_errors_are_not_subtitle_errors(self):
        assert not issubclass(MalformedTimestampError, SubtitleError)
        assert not issubclass(CleanupFailedError, SubtitleError)


class TestReasons:
    def test_defaults(self):
        assert SubtitleError("x").reason == "unknown"
        assert InvalidArgumentError("x").reason == "invalid_argument"
        assert ToolUnavailableError().reason == "tool_unavailable"
        assert DownloadFailedError("x").reason == "download_failed"
        assert UnsupportedFormatError("x").reason == "unsupported_format"
        assert NoSubtitlesFoundError("abc", ["en"]).reason == "no_subtitles"

    def test_explicit_reason(self):
        assert SubtitleError("x", reason="empty").reason == "empty"

    def test_video_unavailable_uses_category(self):
        assert VideoUnavailableError("x", category="private").reason == "private"

    def test_timeout(self):
        error = DownloadTimeoutError("slow", video_id="abc", timeout_ms=500)
        assert error.reason == "timeout"
        assert error.category == "timeout"
        assert error.timeout_ms == 500


class TestToDict:
    def test_basic(self):
        error = SubtitleError("bad", video_id="abc", language_code="en", reason="empty")
        assert error.to_dict() == {
            "type": "SubtitleError",
            "message": "bad",
            "reason": "empty",
            "video_id": "abc",
            "language_code": "en",
        }

    def test_download_failure_carries_category(self):
        data = DownloadFailedError("x", video_id="abc", category="network").to_dict()
        assert data["details"] == {"category": "network"}
        assert "language_code" not in data


class TestToolUnavailable:
    def test_default_message_mentions_install(self):
        error = ToolUnavailableError(video_id="abc")
        assert "yt-dlp is not installed" in error.message
        assert error.details == {"tool_name": "yt-dlp"}


class TestNoSubtitlesFound:
    def test_message_lists_languages(self):
        error = NoSubtitlesFoundError("abc", ["xx", "yy"])
        assert "tried: xx, yy" in error.message
        assert error.attempted_languages == ["xx", "yy"]
        assert error.last_error is None

    def test_last_error_is_summarised(self):
        last = DownloadFailedError("yt-dlp exploded", language_code="yy")
        error = NoSubtitlesFoundError("abc", ["yy"], last)
        assert error.last_error is last
        assert error.details["last_error"] == "yt-dlp exploded"

    def test_attempted_list_is_copied(self):
        attempted = ["en"]
        error = NoSubtitlesFoundError("abc", attempted)
        attempted.append("hi")
        assert error.attempted_languages == ["en"]


class TestMisc:
    def test_malformed_timestamp(self):
        error = MalformedTimestampError("1:2")
        assert isinstance(error, ValueError)
        assert error.value == "1:2"
        assert "'1:2'" in str(error)

    def test_cleanup_failed_message(self):
        error = CleanupFailedError("/tmp/yt-subs-x", OSError("busy"))
        assert str(error) == "Could not clean up temp directory /tmp/yt-subs-x: busy"
