"""
Subtitle retrieval for YouTube videos.

Runs yt-dlp once per candidate language, in order, until one produces a
subtitle file that parses to at least one caption:

1. Validate the request
2. Create a private working area (removed on every exit path)
3. Optionally provision a cookie file
4. Probe yt-dlp; stop early if it is missing
5. Try each language, keeping the last error for the final report
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path

from youtube_subtitles.exceptions import (
    DownloadFailedError,
    InvalidArgumentError,
    NoSubtitlesFoundError,
    SubtitleError,
    ToolUnavailableError,
    UnsupportedFormatError,
)
from youtube_subtitles.models.caption import CaptionSet
from youtube_subtitles.models.request import RetrievalRequest
from youtube_subtitles.operations.cookies import provision_cookies
from youtube_subtitles.operations.workspace import working_area
from youtube_subtitles.parsing import parse_subtitle_file, supported_extensions
from youtube_subtitles.tools.base import SubtitleDownloader
from youtube_subtitles.tools.yt_dlp import YtDlpTool, result_to_exception
from youtube_subtitles.utils.logging import log_timed

logger = logging.getLogger(__name__)


def find_subtitle_files(output_dir: Path, video_id: str, lang: str) -> list[Path]:
    """Find subtitle files yt-dlp wrote for a video and language.

    yt-dlp names them ``{video_id}-{lang}.{sub_lang}.{ext}``; auto-caption
    variants (``en-orig``, ``en-US``) share the prefix.

    Returns:
        Matching files, ordered by extension preference then name
    """
    extensions = supported_extensions()
    prefix = f"{video_id}-{lang}."
    matches = [
        path
        for path in output_dir.iterdir()
        if path.is_file() and path.name.startswith(prefix) and path.suffix.lower() in extensions
    ]
    return sorted(matches, key=lambda p: (extensions.index(p.suffix.lower()), p.name))


def _attempt_language(
    request: RetrievalRequest,
    lang: str,
    downloader: SubtitleDownloader,
    workdir: Path,
    cookies_path: Path | None,
) -> CaptionSet:
    """Run one language attempt.

    Raises:
        SubtitleError: On download failure, no files, or no usable captions
    """
    result = downloader.download_subtitles(
        request.video_id,
        lang,
        workdir,
        request.timeout_seconds,
        cookies_path=cookies_path,
    )
    error = result_to_exception(
        result,
        video_id=request.video_id,
        language_code=lang,
        timeout_ms=request.timeout_ms,
    )
    if error is not None:
        raise error

    files = find_subtitle_files(workdir, request.video_id, lang)
    if not files:
        raise SubtitleError(
            f"No {lang} subtitle files produced for video {request.video_id}",
            video_id=request.video_id,
            language_code=lang,
            reason="no_files",
        )

    subtitle_file = files[0]
    try:
        captions = parse_subtitle_file(subtitle_file)
    except UnsupportedFormatError as e:
        e.video_id = request.video_id
        e.language_code = lang
        raise
    except OSError as e:
        raise SubtitleError(
            f"Could not read subtitle file {subtitle_file.name}: {e}",
            video_id=request.video_id,
            language_code=lang,
            reason="read_failed",
        ) from e

    if not captions:
        raise SubtitleError(
            f"Subtitle file is empty or could not be parsed for video {request.video_id}",
            video_id=request.video_id,
            language_code=lang,
            reason="empty",
        )
    return captions.with_language(lang, source=subtitle_file.name)


def retrieve(
    request: RetrievalRequest,
    downloader: SubtitleDownloader | None = None,
    *,
    base_dir: Path | None = None,
) -> CaptionSet:
    """Fetch and parse subtitles, trying language candidates in order.

    Args:
        request: What to fetch
        downloader: yt-dlp wrapper (YtDlpTool by default)
        base_dir: Parent for the working area (system temp dir by default)

    Returns:
        Non-empty CaptionSet tagged with the language that produced it

    Raises:
        InvalidArgumentError: Bad video ID
        ToolUnavailableError: yt-dlp not installed
        NoSubtitlesFoundError: Every candidate failed
    """
    if not isinstance(request.video_id, str) or not request.video_id.strip():
        raise InvalidArgumentError("Video ID is required and must be a string")

    downloader = downloader or YtDlpTool()
    video_id = request.video_id
    t0 = time.time()

    try:
        with working_area(base_dir) as workdir:
            return _retrieve_in(request, downloader, workdir, t0)
    except OSError as e:
        raise SubtitleError(
            f"Working directory failed for video {video_id}: {e}",
            video_id=video_id,
            reason="workdir_failed",
        ) from e


def _retrieve_in(
    request: RetrievalRequest,
    downloader: SubtitleDownloader,
    workdir: Path,
    t0: float,
) -> CaptionSet:
    video_id = request.video_id

    cookies_path = None
    if request.use_cookies:
        if request.cookies_source:
            cookies_path = provision_cookies(request.cookies_source, workdir)
        if cookies_path is None:
            logger.warning(
                f"Failed to provision cookies from {request.cookies_source}, "
                "continuing without cookies"
            )

    try:
        available = downloader.is_available()
    except OSError as e:
        logger.warning(f"yt-dlp version check failed: {e}")
        available = False
    if not available:
        raise ToolUnavailableError(video_id=video_id)

    attempted: list[str] = []
    last_error: SubtitleError | None = None

    for lang in request.language_candidates:
        attempted.append(lang)
        log_timed(f"Fetching {lang} subtitles for {video_id}", t0)
        try:
            captions = _attempt_language(request, lang, downloader, workdir, cookies_path)
        except SubtitleError as e:
            logger.info(f"No usable {lang} subtitles for {video_id}: {e.message}")
            last_error = e
            continue
        except OSError as e:
            logger.info(f"{lang} attempt for {video_id} failed: {e}")
            last_error = DownloadFailedError(
                f"Failed to fetch subtitles for video {video_id} ({lang}): {e}",
                video_id=video_id,
                language_code=lang,
                category="os_error",
            )
            continue

        log_timed(f"Got {len(captions)} {lang} captions for {video_id}", t0)
        return captions

    raise NoSubtitlesFoundError(video_id, attempted, last_error)


def fetch_subtitles(
    video_id: str,
    lang: str | Sequence[str] | None = None,
    *,
    timeout_ms: int | None = None,
    use_cookies: bool | None = None,
    downloader: SubtitleDownloader | None = None,
) -> CaptionSet:
    """Build a request from caller parameters and config, then retrieve.

    Args:
        video_id: YouTube video ID
        lang: Language code, explicit candidate list, or None for defaults
        timeout_ms: Per-attempt timeout override
        use_cookies: Override the configured cookie setting
        downloader: Alternative downloader (tests)
    """
    request = RetrievalRequest.build(
        video_id, lang, timeout_ms=timeout_ms, use_cookies=use_cookies
    )
    return retrieve(request, downloader)


def get_subtitle_text(
    video_id: str,
    lang: str | None = None,
    **kwargs,
) -> str:
    """Fetch subtitles and join their text with single spaces."""
    return fetch_subtitles(video_id, lang, **kwargs).text()
