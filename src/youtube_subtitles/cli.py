#!/usr/bin/env python3
"""
youtube-subtitles CLI - print the captions of a YouTube video.

Usage:
    youtube-subtitles VIDEO_ID
    youtube-subtitles "https://youtube.com/watch?v=VIDEO_ID" --lang hi
    youtube-subtitles VIDEO_ID --timestamps
    youtube-subtitles VIDEO_ID --json
"""

import argparse
import json
import logging
import sys

from youtube_subtitles.exceptions import SubtitleError
from youtube_subtitles.operations.subtitles import fetch_subtitles
from youtube_subtitles.parsing.timecode import format_seconds
from youtube_subtitles.urls import extract_video_id
from youtube_subtitles.utils.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="youtube-subtitles",
        description="Fetch YouTube captions with yt-dlp",
    )
    parser.add_argument("video", help="YouTube video ID or URL")
    parser.add_argument("--lang", "-l", help="Preferred language code (e.g. en, hi)")
    parser.add_argument("--timeout", type=int, help="Per-language timeout in milliseconds")
    cookies = parser.add_mutually_exclusive_group()
    cookies.add_argument(
        "--cookies",
        dest="use_cookies",
        action="store_true",
        default=None,
        help="Use the configured cookie source",
    )
    cookies.add_argument(
        "--no-cookies",
        dest="use_cookies",
        action="store_false",
        help="Never send cookies",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--timestamps", action="store_true", help="One caption per line with start time"
    )
    output.add_argument("--json", action="store_true", help="Print captions as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the youtube-subtitles command."""
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    video_id = extract_video_id(args.video)
    if video_id is None:
        print(f"ERROR: Could not find a YouTube video ID in {args.video!r}", file=sys.stderr)
        return 1

    try:
        captions = fetch_subtitles(
            video_id,
            args.lang,
            timeout_ms=args.timeout,
            use_cookies=args.use_cookies,
        )
    except SubtitleError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({"video_id": video_id, **captions.to_dict()}, indent=2))
    elif args.timestamps:
        for entry in captions:
            print(f"[{format_seconds(entry.start)}] {entry.text}")
    else:
        print(captions.text())
    return 0


if __name__ == "__main__":
    sys.exit(main())
