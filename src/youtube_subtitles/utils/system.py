"""
System utilities for finding executables.
"""

import shutil
import sys
from pathlib import Path


def find_tool(name: str) -> str:
    """Find executable, checking venv first.

    yt-dlp installed as a Python dependency lands in the venv's bin
    directory, which may not be on PATH when the MCP host spawns us.

    Args:
        name: Tool name (e.g., "yt-dlp")

    Returns:
        Path to executable, or the bare name if it is not found
    """
    bin_dir = "Scripts" if sys.platform == "win32" else "bin"
    suffix = ".exe" if sys.platform == "win32" else ""
    venv = Path(sys.prefix) / bin_dir / f"{name}{suffix}"
    if venv.exists():
        return str(venv)

    return shutil.which(name) or name
