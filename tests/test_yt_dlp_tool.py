"""Tests for tools/yt_dlp.py: argument building, process handling and error mapping."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from youtube_subtitles.exceptions import (
    DownloadFailedError,
    DownloadTimeoutError,
    VideoUnavailableError,
)
from youtube_subtitles.tools.base import SubtitleDownloader, ToolResult
from youtube_subtitles.tools.yt_dlp import (
    YtDlpTool,
    parse_yt_dlp_error,
    result_to_exception,
    yt_dlp_error_to_exception,
)


@pytest.fixture()
def tool():
    return YtDlpTool()


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(
        args=["yt-dlp"], returncode=returncode, stdout=stdout, stderr=stderr
    )


# ---------------------------------------------------------------------------
# build_subtitle_args
# ---------------------------------------------------------------------------


class TestBuildSubtitleArgs:
    """Tests for build_subtitle_args()."""

    def test_subtitle_only_flags(self):
        args = YtDlpTool.build_subtitle_args("xvFZjo5PgG0", "en", Path("/tmp/work"))
        for flag in ("--write-subs", "--write-auto-subs", "--skip-download", "--no-warnings"):
            assert flag in args

    def test_language_follows_sub_langs(self):
        args = YtDlpTool.build_subtitle_args("xvFZjo5PgG0", "hi", Path("/tmp/work"))
        assert args[args.index("--sub-langs") + 1] == "hi"

    def test_output_template_and_url(self):
        args = YtDlpTool.build_subtitle_args("xvFZjo5PgG0", "en", Path("/tmp/work"))
        assert args[args.index("-o") + 1] == str(Path("/tmp/work") / "xvFZjo5PgG0-en.%(ext)s")
        assert args[-1] == "https://www.youtube.com/watch?v=xvFZjo5PgG0"

    def test_no_cookies_by_default(self):
        args = YtDlpTool.build_subtitle_args("xvFZjo5PgG0", "en", Path("/tmp/work"))
        assert "--cookies" not in args

    def test_cookies_path(self):
        cookies = Path("/tmp/work/cookies.txt")
        args = YtDlpTool.build_subtitle_args("xvFZjo5PgG0", "en", Path("/tmp/work"), cookies)
        assert args[args.index("--cookies") + 1] == str(cookies)


# ---------------------------------------------------------------------------
# _run / is_available / download_subtitles
# ---------------------------------------------------------------------------


class TestRun:
    """Tests for subprocess handling."""

    def test_success(self, tool):
        with patch("subprocess.run", return_value=completed(stdout="ok")):
            result = tool._run(["--version"], timeout=5)
        assert result.success
        assert result.stdout == "ok"

    def test_non_zero_exit(self, tool):
        with patch("subprocess.run", return_value=completed(1, stderr="ERROR: boom")):
            result = tool._run(["x"])
        assert not result.success
        assert result.returncode == 1
        assert result.stderr == "ERROR: boom"

    def test_timeout(self, tool):
        with patch(
            "subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="yt-dlp", timeout=2),
        ):
            result = tool._run(["x"], timeout=2)
        assert not result.success
        assert result.timed_out

    def test_executable_missing(self, tool):
        with patch("subprocess.run", side_effect=FileNotFoundError("yt-dlp")):
            result = tool._run(["x"])
        assert result.not_found
        assert not result.success

    def test_other_os_error(self, tool):
        with patch("subprocess.run", side_effect=PermissionError("denied")):
            result = tool._run(["x"])
        assert not result.success
        assert not result.not_found
        assert "denied" in result.error

    def test_timeout_is_passed_through(self, tool):
        with patch("subprocess.run", return_value=completed()) as mock_run:
            tool._run(["x"], timeout=7.5)
        assert mock_run.call_args.kwargs["timeout"] == 7.5

    def test_undecodable_output_is_replaced(self, tool):
        raw = b"ERROR: [youtube] \xff\xfe unreadable\n"

        def fake_run(cmd, **kwargs):
            # Decode the way subprocess would with the same text settings
            stderr = raw.decode("utf-8", kwargs.get("errors") or "strict")
            return completed(1, stderr=stderr)

        with patch("subprocess.run", side_effect=fake_run):
            result = tool._run(["x"])
        assert not result.success
        assert "\ufffd" in result.stderr
        assert "unreadable" in result.stderr

    def test_real_child_with_invalid_utf8(self, tmp_path):
        script = tmp_path / "fake-yt-dlp"
        script.write_text(
            f"#!{sys.executable}\n"
            "import sys\n"
            "sys.stdout.buffer.write(b'caf\\xe9 \\x80\\n')\n"
            "sys.stderr.buffer.write(b'ERROR: \\xff broken\\n')\n"
            "sys.exit(1)\n"
        )
        script.chmod(0o755)
        with patch.object(YtDlpTool, "get_path", return_value=str(script)):
            result = YtDlpTool()._run(["--version"], timeout=30)
        assert result.returncode == 1
        assert "\ufffd" in result.stdout
        assert "broken" in result.stderr


class TestIsAvailable:
    def test_available(self, tool):
        with patch("subprocess.run", return_value=completed(stdout="2024.08.06\n")) as mock_run:
            assert tool.is_available() is True
        assert mock_run.call_args.args[0][1:] == ["--version"]

    def test_not_installed(self, tool):
        with patch("subprocess.run", side_effect=FileNotFoundError("yt-dlp")):
            assert tool.is_available() is False

    def test_version_exit_code(self, tool):
        with patch("subprocess.run", return_value=completed(returncode=2)):
            assert tool.is_available() is False


class TestDownloadSubtitles:
    def test_runs_built_args(self, tool, tmp_path):
        with patch.object(tool, "_run", return_value=ToolResult.ok()) as mock_run:
            result = tool.download_subtitles("xvFZjo5PgG0", "en", tmp_path, timeout=30.0)
        assert result.success
        args = mock_run.call_args.args[0]
        assert args == YtDlpTool.build_subtitle_args("xvFZjo5PgG0", "en", tmp_path)
        assert mock_run.call_args.kwargs["timeout"] == 30.0

    def test_satisfies_downloader_protocol(self, tool):
        assert isinstance(tool, SubtitleDownloader)

    def test_get_path_uses_find_tool(self, tool):
        with patch("youtube_subtitles.tools.yt_dlp.find_tool", return_value="/opt/yt-dlp"):
            assert tool.get_path() == "/opt/yt-dlp"


# ---------------------------------------------------------------------------
# Error parsing
# ---------------------------------------------------------------------------


class TestParseYtDlpError:
    """Tests for parse_yt_dlp_error()."""

    @pytest.mark.parametrize(
        ("stderr", "category"),
        [
            ("ERROR: [youtube] abc: Private video. Sign in if you've been granted access", "private"),
            ("ERROR: [youtube] abc: Video unavailable", "unavailable"),
            ("ERROR: [youtube] abc: Sign in to confirm your age", "age_restricted"),
            ("ERROR: [youtube] abc: Join this channel to get access to members-only content", "members_only"),
            ("ERROR: [youtube] abc: Sign in to confirm you're not a bot", "bot_check"),
            ("ERROR: [youtube] abc: This video is not available in your country", "geo_restricted"),
            ("ERROR: Unable to download webpage: HTTP Error 429: Too Many Requests", "rate_limited"),
            ("ERROR: Unable to download: Connection reset by peer", "network"),
            ("ERROR: '123' is not a valid URL", "invalid_url"),
            ("ERROR: something new went wrong", "unknown"),
        ],
    )
    def test_categories(self, stderr, category):
        assert parse_yt_dlp_error(stderr).category == category

    def test_http_code_detail(self):
        error = parse_yt_dlp_error("ERROR: Unable to download: HTTP Error 403: Forbidden")
        assert error.category == "http_error"
        assert error.details == {"http_code": 403}

    def test_message_is_error_line(self):
        stderr = "WARNING: slow\nERROR: [youtube] abc: Video unavailable\nmore"
        error = parse_yt_dlp_error(stderr)
        assert error.message == "[youtube] abc: Video unavailable"
        assert error.warnings == ["slow"]
        assert error.stderr == stderr

    def test_message_falls_back_to_stderr(self):
        assert parse_yt_dlp_error("  odd output  ").message == "odd output"


class TestErrorToException:
    def test_unavailable_categories(self):
        error = parse_yt_dlp_error("ERROR: Private video")
        exc = yt_dlp_error_to_exception(error, video_id="abc", language_code="en")
        assert isinstance(exc, VideoUnavailableError)
        assert exc.category == "private"
        assert exc.reason == "private"
        assert exc.language_code == "en"

    def test_other_categories(self):
        error = parse_yt_dlp_error("ERROR: HTTP Error 500")
        exc = yt_dlp_error_to_exception(error, video_id="abc", language_code="en")
        assert type(exc) is DownloadFailedError
        assert exc.details["http_code"] == 500
        assert exc.details["category"] == "http_error"


class TestResultToException:
    """Tests for result_to_exception()."""

    def test_success_is_none(self):
        assert result_to_exception(ToolResult.ok(), video_id="abc", language_code="en") is None

    def test_timeout(self):
        result = ToolResult.from_error("Timeout after 1s", timed_out=True)
        exc = result_to_exception(result, video_id="abc", language_code="en", timeout_ms=1000)
        assert isinstance(exc, DownloadTimeoutError)
        assert exc.reason == "timeout"
        assert exc.details["timeout_ms"] == 1000

    def test_not_found(self):
        result = ToolResult.from_error("No such file", not_found=True)
        exc = result_to_exception(result, video_id="abc", language_code="en")
        assert exc.category == "tool_missing"

    def test_private_video_with_zero_exit(self):
        result = ToolResult.ok(stderr="ERROR: [youtube] abc: Private video")
        exc = result_to_exception(result, video_id="abc", language_code="en")
        assert isinstance(exc, VideoUnavailableError)

    def test_unavailable_with_zero_exit(self):
        result = ToolResult.ok(stderr="ERROR: [youtube] abc: Video unavailable")
        assert isinstance(
            result_to_exception(result, video_id="abc", language_code="en"),
            VideoUnavailableError,
        )

    def test_harmless_stderr_with_zero_exit(self):
        result = ToolResult.ok(stderr="WARNING: some format missing")
        assert result_to_exception(result, video_id="abc", language_code="en") is None

    def test_non_zero_exit(self):
        result = ToolResult(success=False, stderr="ERROR: no subtitles for the requested languages", returncode=1)
        exc = result_to_exception(result, video_id="abc", language_code="xx")
        assert isinstance(exc, DownloadFailedError)
        assert exc.category == "no_subtitles"
        assert "xx" in exc.message

    def test_os_error_without_stderr(self):
        result = ToolResult.from_error("Permission denied")
        exc = result_to_exception(result, video_id="abc", language_code="en")
        assert "Permission denied" in exc.message


@pytest.mark.integration
class TestRealYtDlp:
    def test_available(self, tool):
        assert tool.is_available()

    def test_download(self, tool, tmp_path):
        result = tool.download_subtitles("xvFZjo5PgG0", "en", tmp_path, timeout=60)
        assert result.success
        assert any(tmp_path.glob("xvFZjo5PgG0-en.*"))
