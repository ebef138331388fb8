"""
youtube_subtitles MCP server: expose YouTube caption retrieval via Model Context Protocol.

Run as: youtube-subtitles-mcp (stdio transport)
        youtube-subtitles-mcp --transport streamable-http (stateless HTTP on $PORT)
"""

import argparse
import asyncio
import logging
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations
from pydantic import Field
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from youtube_subtitles.config import get_config
from youtube_subtitles.exceptions import SubtitleError
from youtube_subtitles.operations.subtitles import get_subtitle_text
from youtube_subtitles.urls import VIDEO_ID_LENGTH
from youtube_subtitles.utils.logging import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

mcp = FastMCP("youtube_subtitles")


@mcp.tool(
    annotations=ToolAnnotations(
        title="Get YouTube Captions/Subtitles",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=True,
    ),
)
async def summarize_youtube_video(
    videoID: Annotated[
        str,
        Field(
            min_length=VIDEO_ID_LENGTH,
            max_length=VIDEO_ID_LENGTH,
            description="Video ID for the YouTube video e.g 'xvFZjo5PgG0'",
        ),
    ],
    lang: Annotated[
        str | None,
        Field(
            pattern=r"^([a-zA-Z]{2})?$",
            description="ISO 639-1 language codes e.g. en, hi. Leave empty or omit for default.",
        ),
    ] = None,
) -> str:
    """Extract and analyze YouTube video content by retrieving captions/subtitles.

    Use this tool whenever a user provides a YouTube URL or asks about YouTube
    video content - including summaries, key points, quotes, topics discussed,
    or any questions about what's said in a video.

    Returns the caption text as a single block.
    """
    try:
        return await asyncio.to_thread(get_subtitle_text, videoID, lang or None)
    except SubtitleError as e:
        logger.warning(f"Subtitle retrieval failed for {videoID}: {e.message}")
        raise ToolError(f"Error: {e.message}") from e


@mcp.tool()
async def validate() -> str:
    """Validate this MCP server for the hosting platform.

    Returns the configured owner phone number.
    """
    return str(get_config().phone_number)


@mcp.custom_route("/health", methods=["GET"])
async def health(request: Request) -> PlainTextResponse:
    return PlainTextResponse("Server is running!")


def main(argv: list[str] | None = None):
    """Entry point for the youtube-subtitles-mcp command."""
    parser = argparse.ArgumentParser(
        prog="youtube-subtitles-mcp",
        description="YouTube subtitles MCP server",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "streamable-http"],
        default="stdio",
        help="MCP transport (default: stdio)",
    )
    parser.add_argument("--host", help="HTTP bind host (default: config/HOST)")
    parser.add_argument("--port", type=int, help="HTTP port (default: config/PORT)")
    args = parser.parse_args(argv)

    if args.transport == "streamable-http":
        config = get_config()
        mcp.settings.host = args.host or config.host
        mcp.settings.port = args.port or config.port
        mcp.settings.stateless_http = True
        port_source = "command line" if args.port else config.source_of("port").value
        logger.info(
            f"MCP stateless streamable HTTP server listening on "
            f"{mcp.settings.host}:{mcp.settings.port} (port from {port_source})"
        )

    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
